import logging
import os
from typing import Dict, List, Optional

from app.settings import settings
from domain.errors import ConflictError, InvalidInputError, NotFoundError
from domain.services.briefs import talent_search_text
from domain.services.projects import require_director, require_talent
from infra.pdf.parser import looks_like_pdf, parse_pdf_text
from infra.rag.talent_index import upsert_talents
from infra.repositories.files_repository import FilesRepository
from infra.repositories.profiles_repository import ProfilesRepository
from infra.repositories.selections_repository import SelectionsRepository

logger = logging.getLogger(__name__)

profiles_repo = ProfilesRepository()
files_repo = FilesRepository()
selections_repo = SelectionsRepository()

USER_TYPES = ("talent", "director")

# fields counted towards profile_completion_percentage
COMPLETION_FIELDS = (
    "height_cm", "weight_kg", "gender_identity", "ethnicity", "looks_types",
    "hair_color", "eye_color", "languages", "special_skills", "athletic_skills",
    "location", "union_status", "resume_url",
)

TALENT_FIELDS = COMPLETION_FIELDS[:-1] + (
    "instruments", "combat_skills", "agent_name", "agent_contact",
    "manager_name", "manager_contact",
)
PROFILE_FIELDS = ("full_name", "bio", "avatar_url")
DIRECTOR_FIELDS = (
    "company_name", "industry_role", "professional_bio", "website", "logo_url",
    "ai_matching_sensitivity", "ai_prioritization", "ai_bias_filters",
)


def completion_percentage(talent: Dict) -> int:
    filled = sum(1 for f in COMPLETION_FIELDS if talent.get(f) not in (None, "", [], 0))
    return round(100 * filled / len(COMPLETION_FIELDS))


def create_profile(email: str, full_name: Optional[str], user_type: str,
                   bio: Optional[str] = None, avatar_url: Optional[str] = None) -> Dict:
    email = (email or "").strip().lower()
    if not email or "@" not in email:
        raise InvalidInputError("A valid email is required")
    if user_type not in USER_TYPES:
        raise InvalidInputError("user_type must be 'talent' or 'director'")
    if profiles_repo.get_by_email(email):
        raise ConflictError("A profile with this email already exists")
    profile = profiles_repo.create(email, (full_name or "").strip() or None, user_type, bio, avatar_url)
    logger.info(f"Created {user_type} profile {profile['user_id']}")
    return profile


def get_profile(user_id: str) -> Dict:
    profile = profiles_repo.get(user_id)
    if not profile:
        raise NotFoundError("Profile not found")
    out = dict(profile)
    if profile["user_type"] == "talent":
        out["talent_profile"] = profiles_repo.get_talent(user_id)
        out["credits"] = profiles_repo.list_credits(user_id)
        out["portfolio"] = selections_repo.list_portfolio(user_id)
    else:
        out["director_profile"] = profiles_repo.get_director(user_id)
        out["completed_projects"] = selections_repo.list_completed(user_id)
    return out


def update_profile(user: Dict, fields: Dict) -> Dict:
    data = {k: v for k, v in fields.items() if k in PROFILE_FIELDS}
    return profiles_repo.update_profile(user["user_id"], data)


async def update_talent_profile(user: Dict, fields: Dict) -> Dict:
    require_talent(user)
    data = {k: v for k, v in fields.items() if k in TALENT_FIELDS}
    for key in ("height_cm", "weight_kg"):
        if data.get(key) is not None and data[key] <= 0:
            raise InvalidInputError(f"{key} must be positive")
    current = profiles_repo.get_talent(user["user_id"]) or {}
    data["profile_completion_percentage"] = completion_percentage({**current, **data})
    talent = profiles_repo.update_talent(user["user_id"], data)
    await reindex_talent(user["user_id"])
    return talent


def update_director_profile(user: Dict, fields: Dict) -> Dict:
    require_director(user)
    data = {k: v for k, v in fields.items() if k in DIRECTOR_FIELDS}
    return profiles_repo.update_director(user["user_id"], data)


def add_credit(user: Dict, fields: Dict) -> Dict:
    require_talent(user)
    if not (fields.get("project_title") or "").strip() or not (fields.get("role_name") or "").strip():
        raise InvalidInputError("project_title and role_name are required")
    return profiles_repo.add_credit(user["user_id"], fields)


def add_media(user: Dict, fields: Dict) -> Dict:
    require_talent(user)
    if fields.get("media_type") not in ("video", "image", "audio"):
        raise InvalidInputError("media_type must be video, image or audio")
    if not (fields.get("url") or "").strip() or not (fields.get("title") or "").strip():
        raise InvalidInputError("title and url are required")
    return profiles_repo.add_media(user["user_id"], fields)


async def upload_resume(user: Dict, filename: Optional[str], content: bytes) -> Dict:
    require_talent(user)
    if not content:
        raise InvalidInputError("Resume file is empty")
    if len(content) > settings.MAX_RESUME_BYTES:
        raise InvalidInputError("Resume file is too large")
    if not looks_like_pdf(content):
        raise InvalidInputError("Resume must be a PDF")

    name = os.path.basename(filename or "")
    if name in ("", ".", "..") or not name.lower().endswith(".pdf"):
        name = "resume.pdf"
    folder = os.path.join(settings.STORAGE_DIR, "resumes", user["user_id"])
    os.makedirs(folder, exist_ok=True)
    path = os.path.join(folder, name.replace(" ", "_"))
    with open(path, "wb") as out:
        out.write(content)
    file_id = files_repo.save(owner_id=user["user_id"], ftype="resume", path=path, name=name)

    resume_text = parse_pdf_text(path)
    logger.info(f"Resume {file_id} for {user['user_id']}: {len(resume_text)} chars extracted")
    current = profiles_repo.get_talent(user["user_id"]) or {}
    data = {"resume_url": path, "resume_text": resume_text}
    data["profile_completion_percentage"] = completion_percentage({**current, **data})
    profiles_repo.update_talent(user["user_id"], data)
    await reindex_talent(user["user_id"])
    return {"file_id": file_id, "resume_url": path, "text_length": len(resume_text)}


def discover(user: Dict, user_type: Optional[str] = None) -> List[Dict]:
    if user_type and user_type not in USER_TYPES:
        raise InvalidInputError("user_type must be 'talent' or 'director'")
    return profiles_repo.list_public(exclude_user_id=user["user_id"], user_type=user_type)


def search_entry(profile: Dict, talent: Dict) -> Dict:
    return {
        "talent_id": talent["user_id"],
        "text": talent_search_text(profile, talent),
        "location": talent.get("location"),
        "gender_identity": talent.get("gender_identity"),
    }


async def index_one_talent(user_id: str) -> None:
    talent = profiles_repo.get_talent(user_id)
    if not talent:
        raise NotFoundError("Talent profile not found")
    await upsert_talents([search_entry(profiles_repo.get(user_id) or {}, talent)])


async def reindex_talent(user_id: str) -> None:
    if not settings.TALENT_INDEX_ENABLED:
        return
    try:
        await index_one_talent(user_id)
    except Exception as exc:
        logger.warning(f"Could not index talent {user_id}: {exc}")


async def reindex_all_talent() -> int:
    talents = profiles_repo.list_talents()
    profiles = profiles_repo.get_many(t["user_id"] for t in talents)
    entries = [search_entry(profiles.get(t["user_id"]) or {}, t) for t in talents]
    return await upsert_talents(entries)
