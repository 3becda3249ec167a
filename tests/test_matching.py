import json
from unittest.mock import AsyncMock, patch


def test_match_talent(client, make_user, open_project, headers):
    director, project = open_project(requirements={"min_height_cm": 165})
    talent = make_user("talent", height_cm=170, languages=["English", "Spanish"])
    client.post("/api/profiles/me/credits", headers=headers(talent),
                json={"project_title": "Tides", "role_name": "Sailor"})
    reply = json.dumps({"matchScore": 74, "strengths": ["Bilingual"], "concerns": ["Few credits"],
                        "recommendation": "Invite to audition"})
    with patch("infra.llm.client._choose_and_call", new=AsyncMock(return_value=reply)) as llm:
        r = client.post("/api/ai/match-talent", headers=headers(director),
                        json={"talent_id": talent, "role_id": project["roles"][0]["id"]})
    assert r.status_code == 200
    assert r.json()["match_score"] == 74
    prompt = llm.await_args.args[0][1]["content"]
    assert "1 credits" in prompt
    assert "Lead Nurse" in prompt


def test_match_talent_unknown_role(client, make_user, headers):
    talent = make_user("talent")
    r = client.post("/api/ai/match-talent", headers=headers(talent),
                    json={"talent_id": talent, "role_id": "rol_missing"})
    assert r.status_code == 404


def test_analyze_own_profile(client, make_user, headers):
    talent = make_user("talent", height_cm=168, location="Austin")
    reply = ("Here is the analysis: " + json.dumps({
        "overallScore": 58, "completeness": 40, "marketability": 62,
        "strengths": ["Clear headshots"], "improvements": ["Add a reel"],
        "priorityActions": ["Upload a resume"], "summary": "A promising start.",
    }))
    with patch("infra.llm.client._choose_and_call", new=AsyncMock(return_value=reply)) as llm:
        r = client.post("/api/ai/analyze-profile", headers=headers(talent), json={})
    assert r.status_code == 200
    assert r.json()["priority_actions"] == ["Upload a resume"]
    assert "Austin" in llm.await_args.args[0][1]["content"]


def test_recommend_candidates_drops_unknown_and_sorts(client, make_user, open_project, headers):
    director, project = open_project()
    t1 = make_user("talent", full_name="First", height_cm=170)
    t2 = make_user("talent", full_name="Second", height_cm=180)
    t3 = make_user("talent", full_name="Third", height_cm=190)
    reply = json.dumps({"recommendations": [
        {"talentId": t1, "matchScore": 61, "reasoning": "ok", "keyStrengths": ["range"]},
        {"talentId": "usr_ghost", "matchScore": 99, "reasoning": "?"},
        {"talentId": t3, "matchScore": 88, "reasoning": "great", "keyStrengths": "height"},
        {"talentId": t2, "matchScore": 70, "reasoning": "good"},
    ]})
    with patch("infra.llm.client._choose_and_call", new=AsyncMock(return_value=reply)):
        r = client.post("/api/ai/recommend-candidates", headers=headers(director),
                        json={"project_id": project["id"], "limit": 2})
    assert r.status_code == 200
    body = r.json()
    assert body["role_id"] == project["roles"][0]["id"]
    assert [(rec["talent_id"], rec["match_score"]) for rec in body["recommendations"]] == [(t3, 88), (t2, 70)]
    assert body["recommendations"][0]["talent_name"] == "Third"
    assert body["recommendations"][0]["key_strengths"] == ["height"]


def test_recommend_candidates_with_empty_pool(client, open_project, headers):
    director, project = open_project()
    with patch("infra.llm.client._choose_and_call", new=AsyncMock()) as llm:
        r = client.post("/api/ai/recommend-candidates", headers=headers(director),
                        json={"project_id": project["id"]})
    assert r.status_code == 200
    assert r.json()["recommendations"] == []
    llm.assert_not_awaited()


def test_recommend_candidates_needs_roles(client, make_user, headers):
    director = make_user("director")
    project = client.post("/api/projects", headers=headers(director), json={
        "title": "Roleless", "project_type": "commercial", "shoot_start_date": "2026-01-01",
        "shoot_end_date": "2026-01-02", "location": "Oslo", "roles": []}).json()
    r = client.post("/api/ai/recommend-candidates", headers=headers(director),
                    json={"project_id": project["id"]})
    assert r.status_code == 400
