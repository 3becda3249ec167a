import asyncio
import logging
from typing import Dict, List, Optional

from domain.errors import InvalidInputError, NotFoundError, PermissionDeniedError
from domain.services.projects import find_role, get_owned_project, get_project, require_talent
from infra.llm.client import evaluate_audition_llm
from infra.repositories.auditions_repository import AuditionsRepository

logger = logging.getLogger(__name__)

auditions_repo = AuditionsRepository()


def create_audition(user: Dict, project_id: str, video_url: str, role_description: str,
                    emotional_keywords: Optional[List[str]] = None,
                    role_id: Optional[str] = None) -> Dict:
    require_talent(user)
    project = get_project(project_id)
    find_role(project, role_id)
    if not (video_url or "").strip():
        raise InvalidInputError("video_url is required")
    if not (role_description or "").strip():
        raise InvalidInputError("role_description is required")
    keywords = [k.strip() for k in emotional_keywords or [] if k and k.strip()]
    return auditions_repo.create(project_id, user["user_id"], video_url.strip(),
                                 role_description.strip(), keywords, role_id=role_id)


def _get(audition_id: str) -> Dict:
    audition = auditions_repo.get(audition_id)
    if not audition:
        raise NotFoundError("Audition not found")
    return audition


def _can_view(user: Dict, audition: Dict) -> bool:
    if audition["talent_id"] == user["user_id"]:
        return True
    return get_project(audition["project_id"])["director_id"] == user["user_id"]


def get_audition(user: Dict, audition_id: str) -> Dict:
    audition = _get(audition_id)
    if not _can_view(user, audition):
        raise PermissionDeniedError("You cannot view this audition")
    return dict(audition, evaluation=auditions_repo.latest_evaluation(audition_id))


def list_for_project(user: Dict, project_id: str) -> List[Dict]:
    get_owned_project(user, project_id)
    return auditions_repo.list_for_project(project_id)


def list_mine(user: Dict) -> List[Dict]:
    return auditions_repo.list_for_talent(user["user_id"])


async def run_audition_evaluation(audition_id: str) -> None:
    """Evaluate a stored audition; leaves it ``completed`` or ``failed``."""
    audition = auditions_repo.get(audition_id)
    try:
        result = await evaluate_audition_llm(
            audition["role_description"], audition["emotional_keywords"] or [], audition["video_url"])
        auditions_repo.complete(audition_id, result)
        logger.info(f"Audition {audition_id} evaluated: score={result['overall_match_score']} "
                    f"recommendation={result['recommendation']}")
    except Exception as e:
        logger.error(f"Audition {audition_id} evaluation failed: {e}")
        auditions_repo.update_status(audition_id, "failed", error=str(e))


def evaluate_audition(user: Dict, audition_id: str) -> Dict:
    audition = _get(audition_id)
    if not _can_view(user, audition):
        raise PermissionDeniedError("You cannot evaluate this audition")
    if audition["status"] == "analyzing":
        return audition
    auditions_repo.update_status(audition_id, "analyzing")
    asyncio.create_task(run_audition_evaluation(audition_id))
    return dict(audition, status="analyzing", error=None)
