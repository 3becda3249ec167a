"""Plain-text descriptions of projects, roles and talent fed into the prompts."""
import json
from typing import Any, Dict, List, Optional

NA = "N/A"


def _join(values: Optional[List[str]], sep: str = ", ") -> str:
    return sep.join(values) if values else NA


def _measure(value: Optional[float], unit: str) -> str:
    return f"{value:g} {unit}" if value else NA


def requirements_text(requirements: Optional[Dict[str, Any]]) -> str:
    set_only = {k: v for k, v in (requirements or {}).items() if v not in (None, [], "")}
    return json.dumps(set_only, ensure_ascii=False) if set_only else NA


def role_block(role: Dict[str, Any]) -> str:
    return (
        f"  - {role['role_name']}: {role.get('role_description') or NA}\n"
        f"    Required emotions: {_join(role.get('emotions'))}\n"
        f"    Requirements: {requirements_text(role.get('requirements'))}"
    )


def project_brief(project: Dict[str, Any]) -> str:
    roles = "\n".join(role_block(r) for r in project.get("roles") or []) or NA
    return (
        f"Project: {project['title']}\n"
        f"Type: {project['project_type']}\n"
        f"Description: {project.get('description') or NA}\n"
        f"Location: {project.get('location') or ('Remote' if project.get('remote_auditions_only') else NA)}\n"
        f"Roles:\n{roles}"
    )


def role_brief(project: Dict[str, Any], role: Dict[str, Any]) -> str:
    return (
        f"PROJECT: {project['title']} ({project['project_type']})\n"
        f"ROLE: {role['role_name']}\n"
        f"DESCRIPTION: {role.get('role_description') or NA}\n"
        f"EMOTIONS: {_join(role.get('emotions'))}\n"
        f"REQUIREMENTS: {requirements_text(role.get('requirements'))}"
    )


def applicant_brief(index: int, applicant: Dict[str, Any]) -> str:
    app = applicant["application"]
    profile = applicant.get("profile") or {}
    talent = applicant.get("talent_profile") or {}
    return (
        f"Applicant {index}:\n"
        f"Name: {profile.get('full_name') or 'Unknown'}\n"
        f"Gender: {talent.get('gender_identity') or NA}\n"
        f"Height: {_measure(talent.get('height_cm'), 'cm')}\n"
        f"Weight: {_measure(talent.get('weight_kg'), 'kg')}\n"
        f"Location: {talent.get('location') or NA}\n"
        f"Languages: {_join(talent.get('languages'))}\n"
        f"Special Skills: {_join(talent.get('special_skills'))}\n"
        f"Athletic Skills: {_join(talent.get('athletic_skills'))}\n"
        f"Instruments: {_join(talent.get('instruments'))}\n"
        f"Union Status: {talent.get('union_status') or NA}\n"
        f"Looks/Types: {_join(talent.get('looks_types'))}\n"
        f"Cover Letter: {app.get('cover_letter') or NA}\n"
        f"Video Available: {'Yes' if app.get('video_url') else 'No'}\n"
        f"Application ID: {app['id']}"
    )


def talent_brief(talent: Dict[str, Any], credit_count: int = 0) -> str:
    skills = {
        "languages": talent.get("languages") or [],
        "instruments": talent.get("instruments") or [],
        "combat": talent.get("combat_skills") or [],
        "athletic": talent.get("athletic_skills") or [],
        "special": talent.get("special_skills") or [],
    }
    return (
        f"- Skills: {json.dumps(skills, ensure_ascii=False)}\n"
        f"- Experience: {credit_count} credits\n"
        f"- Physical: {_measure(talent.get('height_cm'), 'cm')}, {_measure(talent.get('weight_kg'), 'kg')}, "
        f"{_join(talent.get('ethnicity'))}, {talent.get('hair_color') or NA} hair, "
        f"{talent.get('eye_color') or NA} eyes, gender {talent.get('gender_identity') or NA}\n"
        f"- Location: {talent.get('location') or NA}\n"
        f"- Union Status: {talent.get('union_status') or NA}"
    )


def pool_entry(index: int, talent: Dict[str, Any], credit_count: int = 0) -> str:
    return (
        f"{index}. ID: {talent['user_id']}\n"
        f"   Skills: Languages({len(talent.get('languages') or [])}), "
        f"Instruments({len(talent.get('instruments') or [])}), "
        f"Combat({len(talent.get('combat_skills') or [])}), "
        f"Athletic({len(talent.get('athletic_skills') or [])})\n"
        f"   Physical: {_measure(talent.get('height_cm'), 'cm')}, {_measure(talent.get('weight_kg'), 'kg')}, "
        f"{_join(talent.get('ethnicity'), '/')}, {talent.get('hair_color') or NA} hair, "
        f"{talent.get('eye_color') or NA} eyes\n"
        f"   Location: {talent.get('location') or NA}, Union: {talent.get('union_status') or NA}\n"
        f"   Experience: {credit_count} credits"
    )


def profile_analysis_brief(profile: Dict[str, Any], talent: Dict[str, Any], media_count: int) -> str:
    skill_counts = ", ".join(
        f"{label}: {len(talent.get(key) or [])}"
        for label, key in (("Languages", "languages"), ("Instruments", "instruments"),
                           ("Combat", "combat_skills"), ("Athletic", "athletic_skills"),
                           ("Special", "special_skills"))
    )
    resume = (talent.get("resume_text") or "").strip()
    return (
        f"- Name: {profile.get('full_name') or 'Not provided'}\n"
        f"- Physical Details: {_measure(talent.get('height_cm'), 'cm')}, {_measure(talent.get('weight_kg'), 'kg')}\n"
        f"- Appearance: {_join(talent.get('ethnicity'))}, {talent.get('hair_color') or 'Not provided'} hair, "
        f"{talent.get('eye_color') or 'Not provided'} eyes\n"
        f"- Skills: {skill_counts}\n"
        f"- Location: {talent.get('location') or 'Not provided'}\n"
        f"- Union: {talent.get('union_status') or 'Not provided'}\n"
        f"- Media Items: {media_count}\n"
        f"- Profile Completion: {talent.get('profile_completion_percentage') or 0}%\n"
        f"- Resume: {resume[:3000] if resume else 'Not provided'}"
    )


def talent_search_text(profile: Dict[str, Any], talent: Dict[str, Any]) -> str:
    """Text embedded into the talent index; one line per attribute group."""
    parts = [
        profile.get("full_name") or "",
        profile.get("bio") or "",
        f"gender {talent.get('gender_identity') or ''}",
        f"height {talent.get('height_cm') or ''} cm, weight {talent.get('weight_kg') or ''} kg",
        f"ethnicity {_join(talent.get('ethnicity'))}; looks {_join(talent.get('looks_types'))}",
        f"{talent.get('hair_color') or ''} hair, {talent.get('eye_color') or ''} eyes",
        f"languages {_join(talent.get('languages'))}",
        f"skills {_join((talent.get('special_skills') or []) + (talent.get('athletic_skills') or []) + (talent.get('combat_skills') or []))}",
        f"instruments {_join(talent.get('instruments'))}",
        f"location {talent.get('location') or ''}; union {talent.get('union_status') or ''}",
        (talent.get("resume_text") or "")[:4000],
    ]
    return "\n".join(p for p in parts if p.strip())


def role_search_text(role: Dict[str, Any]) -> str:
    return "\n".join(filter(None, [
        role.get("role_name"),
        role.get("role_description"),
        f"emotions {_join(role.get('emotions'))}" if role.get("emotions") else "",
        requirements_text(role.get("requirements")),
    ]))
