import pytest

from domain.errors import InvalidInputError
from domain.services.prefilter import (
    check_requirements,
    normalize_requirements,
    prefilter_applicants,
)


def test_normalize_accepts_camel_case_keys():
    req = normalize_requirements({"minHeight": 170, "maxHeight": "190", "looksTypes": "athletic",
                                  "hairColor": ["Brown", "Black", "Brown"]})
    assert req["min_height_cm"] == 170
    assert req["max_height_cm"] == 190
    assert req["looks_types"] == ["athletic"]
    assert req["hair_color"] == ["Brown", "Black"]
    assert req["gender"] == []
    assert req["age_min"] is None


def test_normalize_converts_form_heights_in_feet():
    req = normalize_requirements({"height_min": 5.5, "height_max": 6, "height_unit": "ft"})
    assert req["min_height_cm"] == 167.6
    assert req["max_height_cm"] == 182.9


def test_normalize_form_heights_in_cm_are_kept():
    req = normalize_requirements({"height_min": 160, "height_unit": "cm"})
    assert req["min_height_cm"] == 160


@pytest.mark.parametrize("raw", [
    {"minHeight": "tall"},
    {"min_weight_kg": -5},
    {"height_min": 5, "height_unit": "in"},
    {"minHeight": 190, "maxHeight": 170},
    {"age_min": 40, "age_max": 20},
])
def test_normalize_rejects_bad_values(raw):
    with pytest.raises(InvalidInputError):
        normalize_requirements(raw)


def test_height_below_minimum_gives_reason():
    req = normalize_requirements({"min_height_cm": 170})
    assert check_requirements({"height_cm": 160}, req) == ["Height below minimum (170cm required)"]


def test_multiple_failures_are_all_reported():
    req = normalize_requirements({"max_weight_kg": 70, "gender": ["female"], "eye_color": ["green"]})
    reasons = check_requirements({"weight_kg": 85, "gender_identity": "male", "eye_color": "blue"}, req)
    assert reasons == [
        "Weight above maximum (70kg required)",
        "Gender doesn't match role requirements",
        "Eye color doesn't match role requirements",
    ]


def test_unknown_attributes_never_reject():
    req = normalize_requirements({"min_height_cm": 170, "gender": ["female"], "ethnicity": ["Asian"]})
    assert check_requirements({"height_cm": None, "gender_identity": None, "ethnicity": []}, req) == []
    assert check_requirements(None, req) == []


def test_matching_is_case_insensitive_and_uses_overlap():
    req = normalize_requirements({"ethnicity": ["Latino", "Asian"], "looks_types": ["Athletic"],
                                  "hair_color": ["brown"]})
    talent = {"ethnicity": ["asian", "white"], "looks_types": ["athletic", "rugged"], "hair_color": "Brown"}
    assert check_requirements(talent, req) == []


def _applicant(app_id, role_id=None, **talent):
    return {"application": {"id": app_id, "role_id": role_id}, "talent_profile": talent}


def test_prefilter_checks_targeted_role_only():
    roles = [
        {"id": "r1", "requirements": normalize_requirements({"min_height_cm": 180})},
        {"id": "r2", "requirements": normalize_requirements({"max_height_cm": 165})},
    ]
    qualified, rejected = prefilter_applicants([
        _applicant("a1", role_id="r2", height_cm=160),
        _applicant("a2", role_id="r1", height_cm=160),
    ], roles)
    assert [a["application"]["id"] for a in qualified] == ["a1"]
    assert [(a["application"]["id"], reasons) for a, reasons in rejected] == [
        ("a2", ["Height below minimum (180cm required)"]),
    ]


def test_prefilter_without_role_checks_every_role():
    roles = [
        {"id": "r1", "requirements": normalize_requirements({"min_height_cm": 150})},
        {"id": "r2", "requirements": normalize_requirements({"gender": ["female"]})},
    ]
    qualified, rejected = prefilter_applicants([_applicant("a1", gender_identity="male", height_cm=170)], roles)
    assert qualified == []
    assert rejected[0][1] == ["Gender doesn't match role requirements"]
