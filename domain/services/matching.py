import logging
from typing import Dict, List, Optional

from app.settings import settings
from domain.errors import InvalidInputError, NotFoundError
from domain.services.briefs import (
    pool_entry, profile_analysis_brief, role_brief, role_search_text, talent_brief,
)
from domain.services.projects import find_role, get_owned_project, get_project
from infra.llm.client import analyze_profile_llm, match_talent_llm, recommend_candidates_llm
from infra.rag.talent_index import search_talent
from infra.repositories.profiles_repository import ProfilesRepository
from infra.repositories.projects_repository import ProjectsRepository

logger = logging.getLogger(__name__)

profiles_repo = ProfilesRepository()
projects_repo = ProjectsRepository()


def _get_talent(talent_id: str) -> Dict:
    talent = profiles_repo.get_talent(talent_id)
    if not talent:
        raise NotFoundError("Talent profile not found")
    return talent


async def match_talent(talent_id: str, role_id: str) -> Dict:
    talent = _get_talent(talent_id)
    role = projects_repo.get_role(role_id)
    if not role:
        raise NotFoundError("Role not found")
    project = get_project(role["project_id"])
    credits = profiles_repo.credit_counts([talent_id]).get(talent_id, 0)
    result = await match_talent_llm(talent_brief(talent, credits), role_brief(project, role))
    logger.info(f"Match {talent_id} x {role_id}: {result['match_score']}")
    return result


async def analyze_profile(talent_id: str) -> Dict:
    talent = _get_talent(talent_id)
    profile = profiles_repo.get(talent_id) or {}
    media_count = profiles_repo.count_media(talent_id)
    return await analyze_profile_llm(profile_analysis_brief(profile, talent, media_count))


async def _candidate_pool(role: Dict) -> List[Dict]:
    size = settings.CANDIDATE_POOL_SIZE
    if not settings.TALENT_INDEX_ENABLED:
        return profiles_repo.list_talents(limit=size)
    hits = await search_talent(role_search_text(role), size)
    talents = profiles_repo.get_talents(h["talent_id"] for h in hits)
    # keep similarity order
    return [talents[h["talent_id"]] for h in hits if h["talent_id"] in talents]


async def recommend_candidates(user: Dict, project_id: str, role_id: Optional[str] = None,
                               limit: int = 10) -> Dict:
    if limit < 1:
        raise InvalidInputError("limit must be at least 1")
    project = get_owned_project(user, project_id)
    role = find_role(project, role_id) if role_id else None
    if role is None:
        if not project["roles"]:
            raise InvalidInputError("Project has no roles")
        role = project["roles"][0]

    pool = await _candidate_pool(role)
    if not pool:
        logger.info(f"Empty talent pool for role {role['id']}")
        return {"project_id": project_id, "role_id": role["id"], "recommendations": []}

    credits = profiles_repo.credit_counts(t["user_id"] for t in pool)
    pool_text = "\n\n".join(
        pool_entry(i + 1, t, credits.get(t["user_id"], 0)) for i, t in enumerate(pool))
    recs = await recommend_candidates_llm(role_brief(project, role), pool_text, len(pool), limit)

    known = {t["user_id"] for t in pool}
    profiles = profiles_repo.get_many(known)
    out = []
    for rec in recs:
        if rec["talent_id"] not in known:
            logger.warning(f"Dropping recommendation for unknown talent {rec['talent_id']}")
            continue
        profile = profiles.get(rec["talent_id"]) or {}
        out.append(dict(rec, talent_name=profile.get("full_name"),
                        talent_avatar=profile.get("avatar_url")))
    out.sort(key=lambda r: r["match_score"], reverse=True)
    return {"project_id": project_id, "role_id": role["id"], "recommendations": out[:limit]}
