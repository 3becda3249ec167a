import logging
from datetime import date
from typing import Dict, List, Optional

from domain.errors import InvalidInputError, NotFoundError, PermissionDeniedError
from domain.services.prefilter import normalize_requirements
from infra.repositories.projects_repository import ProjectsRepository

logger = logging.getLogger(__name__)

projects_repo = ProjectsRepository()

PROJECT_STATUSES = ("draft", "open", "closed", "completed")


def require_director(user: Dict) -> None:
    if user.get("user_type") != "director":
        raise PermissionDeniedError("Only directors can do this")


def require_talent(user: Dict) -> None:
    if user.get("user_type") != "talent":
        raise PermissionDeniedError("Only talent can do this")


def get_project(project_id: str) -> Dict:
    project = projects_repo.get(project_id)
    if not project:
        raise NotFoundError("Project not found")
    return project


def get_owned_project(user: Dict, project_id: str) -> Dict:
    project = get_project(project_id)
    if project["director_id"] != user["user_id"]:
        raise PermissionDeniedError("You do not own this project")
    return project


def find_role(project: Dict, role_id: Optional[str]) -> Optional[Dict]:
    if not role_id:
        return None
    for role in project.get("roles") or []:
        if role["id"] == role_id:
            return role
    raise InvalidInputError("Role does not belong to this project")


def _clean_roles(roles: List[Dict]) -> List[Dict]:
    out = []
    for role in roles or []:
        name = (role.get("role_name") or "").strip()
        if not name:
            continue
        out.append({
            "role_name": name,
            "role_description": (role.get("role_description") or "").strip() or None,
            "emotions": [e.strip() for e in role.get("emotions") or [] if e and e.strip()],
            "requirements": normalize_requirements(role.get("requirements")),
            "is_featured": bool(role.get("is_featured")),
        })
    return out


def create_project(user: Dict, fields: Dict, roles: List[Dict]) -> Dict:
    require_director(user)
    fields = dict(fields)
    title = (fields.get("title") or "").strip()
    if not title:
        raise InvalidInputError("title is required")
    if not (fields.get("project_type") or "").strip():
        raise InvalidInputError("project_type is required")
    fields["title"] = title

    is_draft = bool(fields.get("is_draft"))
    start: Optional[date] = fields.get("shoot_start_date")
    end: Optional[date] = fields.get("shoot_end_date")
    if not is_draft and not (start and end):
        raise InvalidInputError("Shoot dates are required to publish a project")
    if start and end and end < start:
        raise InvalidInputError("shoot_end_date must not be before shoot_start_date")
    remote = bool(fields.get("remote_auditions_only"))
    if not remote and not (fields.get("location") or "").strip():
        raise InvalidInputError("location is required unless auditions are remote only")

    fields["status"] = "draft" if is_draft else "open"
    project = projects_repo.create(user["user_id"], fields, _clean_roles(roles))
    logger.info(f"Project {project['id']} created by {user['user_id']} "
                f"(status={project['status']}, roles={len(project['roles'])})")
    return project


def list_projects(user: Dict) -> List[Dict]:
    if user.get("user_type") == "director":
        return projects_repo.list_by_director(user["user_id"])
    return projects_repo.list_by_status("open")


def update_project_status(user: Dict, project_id: str, status: str) -> Dict:
    project = get_owned_project(user, project_id)
    if status not in PROJECT_STATUSES:
        raise InvalidInputError(f"status must be one of {', '.join(PROJECT_STATUSES)}")
    if status == "open" and not (project.get("shoot_start_date") and project.get("shoot_end_date")):
        raise InvalidInputError("Shoot dates are required to publish a project")
    return projects_repo.update(project_id, status=status, is_draft=(status == "draft"))
