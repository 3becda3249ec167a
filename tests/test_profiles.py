import os
from unittest.mock import patch

from domain.services.profiles import COMPLETION_FIELDS, completion_percentage


def test_completion_percentage_counts_filled_fields():
    assert completion_percentage({}) == 0
    talent = {"height_cm": 180, "weight_kg": 75, "languages": ["English"], "ethnicity": [], "location": ""}
    assert completion_percentage(talent) == round(100 * 3 / len(COMPLETION_FIELDS))
    assert completion_percentage({f: "x" for f in COMPLETION_FIELDS}) == 100


def test_create_and_fetch_profile(client, headers):
    r = client.post("/api/profiles", json={"email": "Ana@Example.com", "full_name": "Ana",
                                           "user_type": "talent"})
    assert r.status_code == 201
    uid = r.json()["user_id"]
    assert r.json()["email"] == "ana@example.com"

    me = client.get("/api/profiles/me", headers=headers(uid)).json()
    assert me["talent_profile"]["profile_completion_percentage"] == 0
    assert me["credits"] == []


def test_duplicate_email_conflicts(client):
    body = {"email": "dup@example.com", "user_type": "director"}
    assert client.post("/api/profiles", json=body).status_code == 201
    assert client.post("/api/profiles", json=body).status_code == 409


def test_missing_or_unknown_user_header(client):
    assert client.get("/api/profiles/me").status_code == 401
    assert client.get("/api/profiles/me", headers={"X-User-Id": "usr_nope"}).status_code == 401


def test_update_talent_recomputes_completion(client, make_user, headers):
    uid = make_user("talent")
    r = client.patch("/api/profiles/me/talent", headers=headers(uid),
                     json={"height_cm": 172, "gender_identity": "female", "languages": ["English"]})
    assert r.status_code == 200
    assert r.json()["profile_completion_percentage"] == round(100 * 3 / len(COMPLETION_FIELDS))


def test_director_cannot_update_talent_details(client, make_user, headers):
    uid = make_user("director")
    r = client.patch("/api/profiles/me/talent", headers=headers(uid), json={"height_cm": 172})
    assert r.status_code == 403


def test_credits_and_discover(client, make_user, headers):
    talent = make_user("talent")
    director = make_user("director")
    r = client.post("/api/profiles/me/credits", headers=headers(talent),
                    json={"project_title": "Harbor", "role_name": "Deckhand", "year": 2024})
    assert r.status_code == 201
    assert client.get(f"/api/profiles/{talent}", headers=headers(director)).json()["credits"][0]["role_name"] == "Deckhand"

    found = client.get("/api/profiles/discover", headers=headers(director)).json()
    assert [p["user_id"] for p in found] == [talent]
    assert client.get("/api/profiles/discover?user_type=director", headers=headers(director)).json() == []


def test_resume_must_be_pdf(client, make_user, headers):
    uid = make_user("talent")
    r = client.post("/api/profiles/me/resume", headers=headers(uid),
                    files={"resume": ("cv.txt", b"plain text resume", "text/plain")})
    assert r.status_code == 400


def test_resume_filename_falls_back_to_resume_pdf(client, make_user, headers):
    uid = make_user("talent")
    with patch("domain.services.profiles.parse_pdf_text", return_value="Stage actor, ten years"):
        for filename in ("..", "headshots.zip"):
            r = client.post("/api/profiles/me/resume", headers=headers(uid),
                            files={"resume": (filename, b"%PDF-1.4 minimal", "application/pdf")})
            assert r.status_code == 201, r.text
            assert os.path.basename(r.json()["resume_url"]) == "resume.pdf"
            assert r.json()["text_length"] == len("Stage actor, ten years")
