import os
import tempfile

_TMP = tempfile.mkdtemp(prefix="casting-tests-")
os.environ["SQLITE_PATH"] = os.path.join(_TMP, "test.sqlite3")
os.environ["STORAGE_DIR"] = os.path.join(_TMP, "storage")
os.environ["TALENT_INDEX_ENABLED"] = "false"
os.environ["LLM_MAX_ATTEMPTS"] = "1"
for key in ("DATABASE_URL", "AI_GATEWAY_API_KEY", "OPENAI_API_KEY", "OPENROUTER_API_KEY"):
    os.environ[key] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402


@pytest.fixture
def client():
    from app.main import app
    from infra.db.session import reset_db

    reset_db()
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(client):
    counter = {"n": 0}

    def _make(user_type="talent", full_name=None, **talent_fields):
        counter["n"] += 1
        r = client.post("/api/profiles", json={
            "email": f"{user_type}{counter['n']}@example.com",
            "full_name": full_name or f"{user_type.title()} {counter['n']}",
            "user_type": user_type,
        })
        assert r.status_code == 201, r.text
        uid = r.json()["user_id"]
        if talent_fields:
            r = client.patch("/api/profiles/me/talent", json=talent_fields, headers=as_user(uid))
            assert r.status_code == 200, r.text
        return uid

    return _make


@pytest.fixture
def open_project(client, make_user):
    """A director with one open project holding a single role."""
    def _make(requirements=None, roles=None):
        director = make_user("director", full_name="Dana Director")
        body = {
            "title": "Night Shift",
            "project_type": "feature_film",
            "description": "A thriller set in a hospital.",
            "shoot_start_date": "2026-03-01",
            "shoot_end_date": "2026-04-15",
            "location": "Vancouver",
            "roles": roles or [{
                "role_name": "Lead Nurse",
                "role_description": "Calm under pressure",
                "emotions": ["determined", "fearful"],
                "requirements": requirements or {},
            }],
        }
        r = client.post("/api/projects", json=body, headers=as_user(director))
        assert r.status_code == 201, r.text
        return director, r.json()

    return _make


def as_user(user_id):
    return {"X-User-Id": user_id}


@pytest.fixture
def headers():
    return as_user
