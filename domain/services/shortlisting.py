"""AI shortlisting of a project's applicants.

Applicants first go through the deterministic physical pre-filter; anyone
failing it is rejected on the spot with a zero score. The rest are described
to the model in one prompt and scored 0-100. Scores are written back to the
applications, and those at or above ``SHORTLIST_MIN_SCORE`` come back ranked.
Statuses of scored applications are left alone: the director confirms the
shortlist through ``manual_shortlist`` or ``finalize_selection``.
"""
import logging
from typing import Dict

from app.settings import settings
from domain.services.applications import applications_repo, enrich_applications
from domain.services.briefs import applicant_brief, project_brief
from domain.services.prefilter import prefilter_applicants
from domain.services.projects import get_owned_project
from infra.llm.client import score_applicants_llm

logger = logging.getLogger(__name__)


def _empty(project_id: str, auto_rejected=None) -> Dict:
    return {
        "project_id": project_id,
        "shortlisted_applicants": [],
        "auto_rejected": auto_rejected or [],
        "evaluated_count": 0,
    }


async def shortlist_applicants(user: Dict, project_id: str) -> Dict:
    project = get_owned_project(user, project_id)
    applications = applications_repo.list_for_project(project_id, exclude_status="rejected")
    logger.info(f"Shortlisting {len(applications)} applications for project {project_id}")
    if not applications:
        return _empty(project_id)

    applicants = enrich_applications(applications)
    qualified, failed = prefilter_applicants(applicants, project["roles"])

    auto_rejected = []
    for applicant, reasons in failed:
        app = applicant["application"]
        applications_repo.reject(app["id"])
        auto_rejected.append({
            "application_id": app["id"],
            "talent_id": app["talent_id"],
            "talent_name": (applicant.get("profile") or {}).get("full_name"),
            "reasons": reasons,
        })

    if not qualified:
        logger.info(f"No applicants passed the pre-filter for project {project_id}")
        return _empty(project_id, auto_rejected)

    applicants_text = "\n\n".join(applicant_brief(i + 1, a) for i, a in enumerate(qualified))
    evaluations = await score_applicants_llm(project_brief(project), applicants_text)

    by_id = {a["application"]["id"]: a for a in qualified}
    scored = {}
    for ev in evaluations:
        if ev["application_id"] not in by_id:
            logger.warning(f"Ignoring evaluation for unknown application {ev['application_id']}")
            continue
        scored[ev["application_id"]] = ev

    applications_repo.set_scores({aid: round(ev["match_score"]) for aid, ev in scored.items()})

    shortlisted = []
    for aid, ev in scored.items():
        if ev["match_score"] < settings.SHORTLIST_MIN_SCORE:
            continue
        applicant = by_id[aid]
        profile = applicant.get("profile") or {}
        application = dict(applicant["application"], ai_match_score=round(ev["match_score"]))
        shortlisted.append({
            "application_id": aid,
            "talent_id": application["talent_id"],
            "talent_name": profile.get("full_name"),
            "talent_avatar": profile.get("avatar_url"),
            "match_score": ev["match_score"],
            "evaluation": {
                "strengths": ev["strengths"],
                "concerns": ev["concerns"],
                "recommendation": ev["recommendation"],
            },
            "application": application,
        })
    shortlisted.sort(key=lambda e: e["match_score"], reverse=True)

    logger.info(f"Project {project_id}: {len(scored)} scored, {len(shortlisted)} shortlisted, "
                f"{len(auto_rejected)} auto-rejected")
    return {
        "project_id": project_id,
        "shortlisted_applicants": shortlisted,
        "auto_rejected": auto_rejected,
        "evaluated_count": len(scored),
    }
