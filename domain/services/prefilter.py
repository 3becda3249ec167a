"""Role requirements and the physical pre-filter that runs before AI scoring.

Requirements arrive in two spellings: the casting-call form posts
``height_min``/``height_max`` with a ``height_unit`` of ``cm`` or ``ft``,
while older clients send camelCase keys (``minHeight``, ``looksTypes``...)
with heights already in centimetres. Both are folded into one canonical
shape on write so the pre-filter only ever reads canonical keys.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from domain.errors import InvalidInputError

logger = logging.getLogger(__name__)

FT_TO_CM = 30.48

_NUMERIC_KEYS = {
    "min_height_cm": ("min_height_cm", "minHeight"),
    "max_height_cm": ("max_height_cm", "maxHeight"),
    "min_weight_kg": ("min_weight_kg", "minWeight"),
    "max_weight_kg": ("max_weight_kg", "maxWeight"),
    "age_min": ("age_min", "ageMin"),
    "age_max": ("age_max", "ageMax"),
}

_LIST_KEYS = {
    "gender": ("gender",),
    "ethnicity": ("ethnicity",),
    "looks_types": ("looks_types", "looksTypes"),
    "hair_color": ("hair_color", "hairColor"),
    "eye_color": ("eye_color", "eyeColor"),
    "required_skills": ("required_skills", "requiredSkills"),
    "vocal_profile": ("vocal_profile", "vocalProfile"),
}

_RANGES = (("min_height_cm", "max_height_cm"), ("min_weight_kg", "max_weight_kg"), ("age_min", "age_max"))


def _first(raw: Dict[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = raw.get(key)
        if value not in (None, ""):
            return value
    return None


def _number(name: str, value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidInputError(f"requirement '{name}' must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"requirement '{name}' must be a number")
    if number < 0:
        raise InvalidInputError(f"requirement '{name}' must not be negative")
    return number


def _string_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    out = []
    for item in value:
        text = str(item).strip()
        if text and text not in out:
            out.append(text)
    return out


def normalize_requirements(raw: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    raw = dict(raw or {})
    out: Dict[str, Any] = {}
    for key, aliases in _NUMERIC_KEYS.items():
        out[key] = _number(key, _first(raw, aliases))

    unit = str(raw.get("height_unit") or "cm").strip().lower()
    if unit not in ("cm", "ft"):
        raise InvalidInputError("height_unit must be 'cm' or 'ft'")
    factor = FT_TO_CM if unit == "ft" else 1.0
    for form_key, canonical in (("height_min", "min_height_cm"), ("height_max", "max_height_cm")):
        value = _number(form_key, _first(raw, (form_key,)))
        if value is not None and out[canonical] is None:
            out[canonical] = round(value * factor, 1)

    for key, aliases in _LIST_KEYS.items():
        out[key] = _string_list(_first(raw, aliases))

    for low, high in _RANGES:
        if out[low] and out[high] and out[low] > out[high]:
            raise InvalidInputError(f"requirement '{low}' is greater than '{high}'")
    return out


def _fmt(value: float) -> str:
    return f"{value:g}"


def _norm(value: str) -> str:
    return str(value).strip().casefold()


def _overlaps(have: Iterable[str], wanted: Iterable[str]) -> bool:
    wanted_set = {_norm(w) for w in wanted}
    return any(_norm(h) in wanted_set for h in have)


def check_requirements(talent: Optional[Dict[str, Any]], requirements: Dict[str, Any]) -> List[str]:
    """Reasons the talent fails the requirements; empty when it passes.

    A check only applies when the requirement is set and the talent's
    attribute is known. Missing data never rejects anyone.
    """
    if not talent:
        return []
    req = requirements or {}
    reasons = []

    height = talent.get("height_cm")
    if height:
        if req.get("min_height_cm") and height < req["min_height_cm"]:
            reasons.append(f"Height below minimum ({_fmt(req['min_height_cm'])}cm required)")
        if req.get("max_height_cm") and height > req["max_height_cm"]:
            reasons.append(f"Height above maximum ({_fmt(req['max_height_cm'])}cm required)")

    weight = talent.get("weight_kg")
    if weight:
        if req.get("min_weight_kg") and weight < req["min_weight_kg"]:
            reasons.append(f"Weight below minimum ({_fmt(req['min_weight_kg'])}kg required)")
        if req.get("max_weight_kg") and weight > req["max_weight_kg"]:
            reasons.append(f"Weight above maximum ({_fmt(req['max_weight_kg'])}kg required)")

    gender = talent.get("gender_identity")
    if req.get("gender") and gender and not _overlaps([gender], req["gender"]):
        reasons.append("Gender doesn't match role requirements")

    ethnicity = talent.get("ethnicity") or []
    if req.get("ethnicity") and ethnicity and not _overlaps(ethnicity, req["ethnicity"]):
        reasons.append("Ethnicity doesn't match role requirements")

    looks = talent.get("looks_types") or []
    if req.get("looks_types") and looks and not _overlaps(looks, req["looks_types"]):
        reasons.append("Physical type doesn't match role requirements")

    hair = talent.get("hair_color")
    if req.get("hair_color") and hair and not _overlaps([hair], req["hair_color"]):
        reasons.append("Hair color doesn't match role requirements")

    eyes = talent.get("eye_color")
    if req.get("eye_color") and eyes and not _overlaps([eyes], req["eye_color"]):
        reasons.append("Eye color doesn't match role requirements")

    return reasons


def roles_for_application(application: Dict[str, Any], roles: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Roles an application is checked against.

    An application naming one of the project's roles is checked against that
    role alone, not against every role on the project, so a talent applying for
    a female role is not rejected by a male role's requirements. Applications
    without a role (or with an unknown one) are checked against all roles.
    Attribute matches in the checks ignore case and surrounding whitespace.
    """
    role_id = application.get("role_id")
    if role_id:
        targeted = [r for r in roles if r["id"] == role_id]
        if targeted:
            return targeted
    return roles


def prefilter_applicants(
    applicants: List[Dict[str, Any]],
    roles: List[Dict[str, Any]],
) -> Tuple[List[Dict[str, Any]], List[Tuple[Dict[str, Any], List[str]]]]:
    """Split enriched applicants into (qualified, [(rejected, reasons)]).

    Each applicant dict carries ``application`` and ``talent_profile``.
    """
    qualified, rejected = [], []
    for applicant in applicants:
        reasons: List[str] = []
        for role in roles_for_application(applicant["application"], roles):
            for reason in check_requirements(applicant.get("talent_profile"), role.get("requirements") or {}):
                if reason not in reasons:
                    reasons.append(reason)
        if reasons:
            rejected.append((applicant, reasons))
        else:
            qualified.append(applicant)
    logger.info("Pre-filter results: %d qualified, %d auto-rejected", len(qualified), len(rejected))
    return qualified, rejected
