from datetime import date
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class ProfileCreate(BaseModel):
    email: str
    full_name: Optional[str] = None
    user_type: Literal["talent", "director"]
    bio: Optional[str] = None
    avatar_url: Optional[str] = None


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None


class TalentProfileUpdate(BaseModel):
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    gender_identity: Optional[str] = None
    ethnicity: Optional[List[str]] = None
    looks_types: Optional[List[str]] = None
    hair_color: Optional[str] = None
    eye_color: Optional[str] = None
    languages: Optional[List[str]] = None
    instruments: Optional[List[str]] = None
    combat_skills: Optional[List[str]] = None
    athletic_skills: Optional[List[str]] = None
    special_skills: Optional[List[str]] = None
    location: Optional[str] = None
    union_status: Optional[str] = None
    agent_name: Optional[str] = None
    agent_contact: Optional[str] = None
    manager_name: Optional[str] = None
    manager_contact: Optional[str] = None


class DirectorProfileUpdate(BaseModel):
    company_name: Optional[str] = None
    industry_role: Optional[str] = None
    professional_bio: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    ai_matching_sensitivity: Optional[str] = None
    ai_prioritization: Optional[Dict[str, Any]] = None
    ai_bias_filters: Optional[Dict[str, Any]] = None


class CreditCreate(BaseModel):
    project_title: str
    role_name: str
    project_type: Optional[str] = None
    production_company: Optional[str] = None
    director_name: Optional[str] = None
    year: Optional[int] = None
    is_featured: bool = False


class MediaCreate(BaseModel):
    title: str
    media_type: str
    url: str
    media_category: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration: Optional[float] = None
    file_size: Optional[int] = None
    is_featured: bool = False


class RoleIn(BaseModel):
    role_name: str = ""
    role_description: Optional[str] = None
    emotions: List[str] = Field(default_factory=list)
    # accepts both canonical and camelCase / form spellings
    requirements: Dict[str, Any] = Field(default_factory=dict)
    is_featured: bool = False


class ProjectCreate(BaseModel):
    title: str
    project_type: str
    description: Optional[str] = None
    production_company: Optional[str] = None
    deadline: Optional[date] = None
    shoot_start_date: Optional[date] = None
    shoot_end_date: Optional[date] = None
    location: Optional[str] = None
    remote_auditions_only: bool = False
    mood_board_urls: List[str] = Field(default_factory=list)
    is_draft: bool = False
    roles: List[RoleIn] = Field(default_factory=list)


class ProjectStatusUpdate(BaseModel):
    status: Literal["draft", "open", "closed", "completed"]


class ApplicationCreate(BaseModel):
    video_url: str
    role_id: Optional[str] = None
    audio_url: Optional[str] = None
    cover_letter: Optional[str] = None


class ManualShortlistRequest(BaseModel):
    application_ids: List[str]


class FinalizeSelectionRequest(BaseModel):
    application_id: str
    shortlist: List[Dict[str, Any]] = Field(default_factory=list)


class AutoRejected(BaseModel):
    application_id: str
    talent_id: str
    talent_name: Optional[str] = None
    reasons: List[str]


class ShortlistEvaluation(BaseModel):
    strengths: List[str]
    concerns: List[str]
    recommendation: str


class ShortlistedApplicant(BaseModel):
    application_id: str
    talent_id: str
    talent_name: Optional[str] = None
    talent_avatar: Optional[str] = None
    match_score: float
    evaluation: ShortlistEvaluation
    application: Dict[str, Any]


class ShortlistResponse(BaseModel):
    project_id: str
    shortlisted_applicants: List[ShortlistedApplicant]
    auto_rejected: List[AutoRejected]
    evaluated_count: int


class MatchTalentRequest(BaseModel):
    talent_id: str
    role_id: str


class AnalyzeProfileRequest(BaseModel):
    talent_id: Optional[str] = None


class RecommendCandidatesRequest(BaseModel):
    project_id: str
    role_id: Optional[str] = None
    limit: int = Field(default=10, ge=1, le=50)


class AuditionCreate(BaseModel):
    project_id: str
    role_id: Optional[str] = None
    video_url: str
    role_description: str
    emotional_keywords: List[str] = Field(default_factory=list)


class AuditionStatusResponse(BaseModel):
    id: str
    status: str
    error: Optional[str] = None
    evaluation: Optional[Dict[str, Any]] = None


class ConversationCreate(BaseModel):
    other_user_id: str


class MessageCreate(BaseModel):
    content: str


class FlagUpdate(BaseModel):
    value: bool


class ThreadCreate(BaseModel):
    title: str
    category: str
    content: str
    tags: List[str] = Field(default_factory=list)


class AttachmentIn(BaseModel):
    file_name: str
    file_url: str
    file_type: str
    file_size: int = 0


class PostCreate(BaseModel):
    content: str
    attachments: List[AttachmentIn] = Field(default_factory=list)
