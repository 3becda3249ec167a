from datetime import datetime, timezone

from sqlalchemy import (
    JSON, Boolean, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from infra.db.session import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Profile(Base):
    __tablename__ = "profiles"
    user_id = Column(String, primary_key=True)
    email = Column(String, nullable=False, unique=True)
    full_name = Column(String, nullable=True)
    user_type = Column(String, nullable=False)   # 'talent' | 'director'
    bio = Column(Text, nullable=True)
    avatar_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)


class TalentProfile(Base):
    __tablename__ = "talent_profiles"
    user_id = Column(String, ForeignKey("profiles.user_id"), primary_key=True)
    height_cm = Column(Float, nullable=True)
    weight_kg = Column(Float, nullable=True)
    gender_identity = Column(String, nullable=True)
    ethnicity = Column(JSON, default=list)
    looks_types = Column(JSON, default=list)
    hair_color = Column(String, nullable=True)
    eye_color = Column(String, nullable=True)
    languages = Column(JSON, default=list)
    instruments = Column(JSON, default=list)
    combat_skills = Column(JSON, default=list)
    athletic_skills = Column(JSON, default=list)
    special_skills = Column(JSON, default=list)
    location = Column(String, nullable=True)
    union_status = Column(String, nullable=True)
    agent_name = Column(String, nullable=True)
    agent_contact = Column(String, nullable=True)
    manager_name = Column(String, nullable=True)
    manager_contact = Column(String, nullable=True)
    resume_url = Column(String, nullable=True)
    resume_text = Column(Text, nullable=True)
    profile_completion_percentage = Column(Integer, default=0)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)


class TalentCredit(Base):
    __tablename__ = "talent_credits"
    id = Column(String, primary_key=True)
    talent_id = Column(String, ForeignKey("talent_profiles.user_id"), nullable=False, index=True)
    project_title = Column(String, nullable=False)
    role_name = Column(String, nullable=False)
    project_type = Column(String, nullable=True)
    production_company = Column(String, nullable=True)
    director_name = Column(String, nullable=True)
    year = Column(Integer, nullable=True)
    is_featured = Column(Boolean, default=False)
    created_at = Column(DateTime, default=_utcnow)


class TalentMedia(Base):
    __tablename__ = "talent_media"
    id = Column(String, primary_key=True)
    talent_id = Column(String, ForeignKey("talent_profiles.user_id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    media_type = Column(String, nullable=False)   # 'video' | 'image' | 'audio'
    url = Column(String, nullable=False)
    media_category = Column(String, nullable=True)
    thumbnail_url = Column(String, nullable=True)
    duration = Column(Float, nullable=True)
    file_size = Column(Integer, nullable=True)
    is_featured = Column(Boolean, default=False)
    created_at = Column(DateTime, default=_utcnow)


class DirectorProfile(Base):
    __tablename__ = "director_profiles"
    user_id = Column(String, ForeignKey("profiles.user_id"), primary_key=True)
    company_name = Column(String, nullable=True)
    industry_role = Column(String, nullable=True)
    professional_bio = Column(Text, nullable=True)
    website = Column(String, nullable=True)
    logo_url = Column(String, nullable=True)
    ai_matching_sensitivity = Column(String, nullable=True)
    ai_prioritization = Column(JSON, nullable=True)
    ai_bias_filters = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)


class Project(Base):
    __tablename__ = "projects"
    id = Column(String, primary_key=True)
    director_id = Column(String, ForeignKey("profiles.user_id"), nullable=False, index=True)
    title = Column(String, nullable=False)
    project_type = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    production_company = Column(String, nullable=True)
    deadline = Column(Date, nullable=True)
    shoot_start_date = Column(Date, nullable=True)
    shoot_end_date = Column(Date, nullable=True)
    location = Column(String, nullable=True)
    remote_auditions_only = Column(Boolean, default=False)
    mood_board_urls = Column(JSON, default=list)
    is_draft = Column(Boolean, default=False)
    status = Column(String, nullable=False, default="open")   # draft | open | closed | completed
    selected_talent_id = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)
    roles = relationship("ProjectRole", back_populates="project",
                         order_by="ProjectRole.created_at", cascade="all, delete-orphan")


class ProjectRole(Base):
    __tablename__ = "project_roles"
    id = Column(String, primary_key=True)
    project_id = Column(String, ForeignKey("projects.id"), nullable=False, index=True)
    role_name = Column(String, nullable=False)
    role_description = Column(Text, nullable=True)
    emotions = Column(JSON, default=list)
    requirements = Column(JSON, default=dict)
    is_featured = Column(Boolean, default=False)
    created_at = Column(DateTime, default=_utcnow)
    project = relationship("Project", back_populates="roles")


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (UniqueConstraint("project_id", "talent_id", name="uq_application_project_talent"),)
    id = Column(String, primary_key=True)
    project_id = Column(String, ForeignKey("projects.id"), nullable=False, index=True)
    role_id = Column(String, ForeignKey("project_roles.id"), nullable=True)
    talent_id = Column(String, ForeignKey("profiles.user_id"), nullable=False, index=True)
    video_url = Column(String, nullable=False)
    audio_url = Column(String, nullable=True)
    cover_letter = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="pending")   # pending | shortlisted | rejected | accepted
    ai_match_score = Column(Integer, nullable=True)
    applied_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)


class Audition(Base):
    __tablename__ = "auditions"
    id = Column(String, primary_key=True)
    project_id = Column(String, ForeignKey("projects.id"), nullable=False, index=True)
    role_id = Column(String, ForeignKey("project_roles.id"), nullable=True)
    talent_id = Column(String, ForeignKey("profiles.user_id"), nullable=False, index=True)
    video_url = Column(String, nullable=False)
    role_description = Column(Text, nullable=False)
    emotional_keywords = Column(JSON, default=list)
    status = Column(String, nullable=False, default="pending")   # pending | analyzing | completed | failed
    error = Column(Text, nullable=True)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)


class AuditionEvaluation(Base):
    __tablename__ = "audition_evaluations"
    id = Column(String, primary_key=True)
    audition_id = Column(String, ForeignKey("auditions.id"), nullable=False, index=True)
    overall_match_score = Column(Float, nullable=False)
    recommendation = Column(String, nullable=False)
    emotions_detected = Column(JSON, default=dict)
    strengths = Column(JSON, default=list)
    improvements = Column(JSON, default=list)
    technical_notes = Column(JSON, default=list)
    detailed_analysis = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=_utcnow)


class CompletedProject(Base):
    __tablename__ = "completed_projects"
    id = Column(String, primary_key=True)
    project_id = Column(String, ForeignKey("projects.id"), nullable=False)
    director_id = Column(String, ForeignKey("profiles.user_id"), nullable=False, index=True)
    selected_talent_id = Column(String, ForeignKey("profiles.user_id"), nullable=False)
    project_title = Column(String, nullable=False)
    project_type = Column(String, nullable=False)
    production_company = Column(String, nullable=True)
    shortlist_data = Column(JSON, default=list)
    completed_at = Column(DateTime, default=_utcnow)


class TalentPortfolioProject(Base):
    __tablename__ = "talent_portfolio_projects"
    __table_args__ = (UniqueConstraint("talent_id", "project_id", name="uq_portfolio_talent_project"),)
    id = Column(String, primary_key=True)
    talent_id = Column(String, ForeignKey("profiles.user_id"), nullable=False, index=True)
    project_id = Column(String, ForeignKey("projects.id"), nullable=False)
    project_title = Column(String, nullable=False)
    project_type = Column(String, nullable=False)
    production_company = Column(String, nullable=True)
    director_name = Column(String, nullable=True)
    role_description = Column(Text, nullable=True)
    match_score = Column(Integer, nullable=True)
    ai_evaluation = Column(JSON, nullable=True)
    selected_at = Column(DateTime, default=_utcnow)


class Conversation(Base):
    __tablename__ = "conversations"
    id = Column(String, primary_key=True)
    archived = Column(Boolean, default=False)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow)


class ConversationParticipant(Base):
    __tablename__ = "conversation_participants"
    __table_args__ = (UniqueConstraint("conversation_id", "user_id", name="uq_participant"),)
    id = Column(String, primary_key=True)
    conversation_id = Column(String, ForeignKey("conversations.id"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("profiles.user_id"), nullable=False, index=True)
    muted = Column(Boolean, default=False)
    joined_at = Column(DateTime, default=_utcnow)


class Message(Base):
    __tablename__ = "messages"
    id = Column(String, primary_key=True)
    conversation_id = Column(String, ForeignKey("conversations.id"), nullable=False, index=True)
    sender_id = Column(String, ForeignKey("profiles.user_id"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=_utcnow)


class ForumThread(Base):
    __tablename__ = "forum_threads"
    id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("profiles.user_id"), nullable=False)
    title = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)
    tags = Column(JSON, default=list)
    is_pinned = Column(Boolean, default=False)
    is_moderated = Column(Boolean, default=False)
    views = Column(Integer, default=0)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)


class ForumPost(Base):
    __tablename__ = "forum_posts"
    id = Column(String, primary_key=True)
    thread_id = Column(String, ForeignKey("forum_threads.id"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("profiles.user_id"), nullable=False)
    content = Column(Text, nullable=False)
    is_edited = Column(Boolean, default=False)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)


class ForumAttachment(Base):
    __tablename__ = "forum_attachments"
    id = Column(String, primary_key=True)
    post_id = Column(String, ForeignKey("forum_posts.id"), nullable=False, index=True)
    file_name = Column(String, nullable=False)
    file_url = Column(String, nullable=False)
    file_type = Column(String, nullable=False)
    file_size = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=_utcnow)


class Notification(Base):
    __tablename__ = "notifications"
    id = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("profiles.user_id"), nullable=False, index=True)
    type = Column(String, nullable=False)   # 'shortlist' | 'selection' | ...
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    link = Column(String, nullable=True)
    metadata_ = Column("metadata", JSON, nullable=True)
    read = Column(Boolean, default=False)
    created_at = Column(DateTime, default=_utcnow)


class FileRecord(Base):
    __tablename__ = "files"
    id = Column(String, primary_key=True)
    owner_id = Column(String, ForeignKey("profiles.user_id"), nullable=False)
    type = Column(String, nullable=False)   # 'resume'
    path = Column(String, nullable=False)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=_utcnow)
