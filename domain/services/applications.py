import logging
from typing import Dict, List, Optional

from domain.errors import ConflictError, InvalidInputError, NotFoundError
from domain.services.projects import (
    find_role, get_owned_project, get_project, projects_repo, require_talent,
)
from infra.repositories.applications_repository import ApplicationsRepository
from infra.repositories.notifications_repository import NotificationsRepository
from infra.repositories.profiles_repository import ProfilesRepository
from infra.repositories.selections_repository import SelectionsRepository

logger = logging.getLogger(__name__)

applications_repo = ApplicationsRepository()
profiles_repo = ProfilesRepository()
notifications_repo = NotificationsRepository()
selections_repo = SelectionsRepository()


def enrich_applications(applications: List[Dict]) -> List[Dict]:
    """Wrap each application with the applicant's public and talent profile."""
    talent_ids = [a["talent_id"] for a in applications]
    profiles = profiles_repo.get_many(talent_ids)
    talents = profiles_repo.get_talents(talent_ids)
    return [
        {
            "application": a,
            "profile": profiles.get(a["talent_id"]),
            "talent_profile": talents.get(a["talent_id"]),
        }
        for a in applications
    ]


def apply(user: Dict, project_id: str, video_url: str, role_id: Optional[str] = None,
          audio_url: Optional[str] = None, cover_letter: Optional[str] = None) -> Dict:
    require_talent(user)
    project = get_project(project_id)
    if project["status"] != "open":
        raise InvalidInputError("Project is not accepting applications")
    if not (video_url or "").strip():
        raise InvalidInputError("video_url is required")
    find_role(project, role_id)
    if applications_repo.find(project_id, user["user_id"]):
        raise ConflictError("You have already applied to this project")
    application = applications_repo.create(
        project_id, user["user_id"], video_url.strip(), role_id=role_id,
        audio_url=audio_url, cover_letter=(cover_letter or "").strip() or None,
    )
    logger.info(f"Application {application['id']} submitted to {project_id}")
    return application


def list_for_project(user: Dict, project_id: str) -> List[Dict]:
    get_owned_project(user, project_id)
    return enrich_applications(applications_repo.list_for_project(project_id))


def list_mine(user: Dict) -> List[Dict]:
    return applications_repo.list_for_talent(user["user_id"])


def _project_applications(project_id: str, application_ids: List[str]) -> List[Dict]:
    apps = applications_repo.list_for_project(project_id, exclude_status=None)
    known = {a["id"] for a in apps}
    missing = [aid for aid in application_ids if aid not in known]
    if missing:
        raise NotFoundError(f"Applications not found in this project: {', '.join(missing)}")
    return apps


def manual_shortlist(user: Dict, project_id: str, application_ids: List[str]) -> Dict:
    project = get_owned_project(user, project_id)
    chosen = list(dict.fromkeys(application_ids or []))
    if not chosen:
        raise InvalidInputError("Select at least one application")
    apps = _project_applications(project_id, chosen)

    others = [a["id"] for a in apps if a["id"] not in chosen and a["status"] != "rejected"]
    shortlisted = applications_repo.set_status(chosen, "shortlisted")
    rejected = applications_repo.set_status(others, "rejected")

    by_id = {a["id"]: a for a in apps}
    notifications_repo.create_many([
        {
            "user_id": by_id[aid]["talent_id"],
            "type": "shortlist",
            "title": "You've been shortlisted!",
            "content": f"You've been shortlisted for \"{project['title']}\"",
            "link": f"/projects/{project_id}",
            "metadata": {"project_id": project_id, "application_id": aid},
        }
        for aid in chosen
    ])
    logger.info(f"Manual shortlist for {project_id}: {shortlisted} shortlisted, {rejected} rejected")
    return {"project_id": project_id, "shortlisted": shortlisted, "rejected": rejected}


def finalize_selection(user: Dict, project_id: str, application_id: str,
                       shortlist: List[Dict]) -> Dict:
    """Accept one application and close the project.

    ``shortlist`` is the list the director chose from, as returned by the
    shortlisting run; it is stored as a snapshot on the completed project.
    """
    project = get_owned_project(user, project_id)
    if project["status"] == "completed":
        raise ConflictError("A talent has already been selected for this project")
    apps = _project_applications(project_id, [application_id])
    selected = next(a for a in apps if a["id"] == application_id)
    if selected["status"] == "rejected":
        raise ConflictError("A rejected application cannot be selected")

    shortlist_ids = [e.get("application_id") or (e.get("application") or {}).get("id")
                     for e in shortlist or []]
    # only this project's applications can be passed over
    pending = {a["id"] for a in apps if a["status"] != "rejected"}
    passed_over = list(dict.fromkeys(
        aid for aid in shortlist_ids if aid in pending and aid != application_id))
    applications_repo.set_status([application_id], "accepted")
    applications_repo.set_status(passed_over, "rejected")

    talent_id = selected["talent_id"]
    projects_repo.update(project_id, status="completed", selected_talent_id=talent_id)

    snapshot = [dict(e, is_selected=(sid == application_id)) for e, sid in zip(shortlist or [], shortlist_ids)]
    completed = selections_repo.add_completed_project({
        "project_id": project_id,
        "director_id": user["user_id"],
        "selected_talent_id": talent_id,
        "project_title": project["title"],
        "project_type": project["project_type"],
        "production_company": project.get("production_company"),
        "shortlist_data": snapshot,
    })

    chosen_entry = next((e for e, sid in zip(shortlist or [], shortlist_ids) if sid == application_id), {})
    role = next((r for r in project["roles"] if r["id"] == selected.get("role_id")), None)
    portfolio = selections_repo.add_portfolio_entry({
        "talent_id": talent_id,
        "project_id": project_id,
        "project_title": project["title"],
        "project_type": project["project_type"],
        "production_company": project.get("production_company"),
        "director_name": user.get("full_name"),
        "role_description": (role or {}).get("role_description") or (role or {}).get("role_name"),
        "match_score": selected.get("ai_match_score"),
        "ai_evaluation": chosen_entry.get("evaluation") or None,
    })
    if portfolio is None:
        logger.info(f"Portfolio entry for {talent_id} on {project_id} already exists")

    notifications_repo.create_many([{
        "user_id": talent_id,
        "type": "selection",
        "title": "Congratulations! You've been selected!",
        "content": f"You've been selected for \"{project['title']}\"",
        "link": f"/projects/{project_id}",
        "metadata": {"project_id": project_id, "application_id": application_id},
    }])
    logger.info(f"Project {project_id} completed, selected talent {talent_id}")
    return {
        "project_id": project_id,
        "selected_application_id": application_id,
        "selected_talent_id": talent_id,
        "completed_project_id": completed["id"],
        "rejected": len(passed_over),
    }
