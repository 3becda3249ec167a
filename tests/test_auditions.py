import asyncio
import json
from unittest.mock import AsyncMock, patch

from domain.services.auditions import run_audition_evaluation

EVALUATION = {
    "overall_match_score": 81,
    "recommendation": "yes",
    "emotions_detected": {"happy": 0.1, "sad": 0.6, "angry": 0.0, "fear": 0.2,
                          "surprise": 0.0, "disgust": 0.0, "neutral": 0.1},
    "strengths": ["Genuine grief"],
    "improvements": ["Hold the pause longer"],
    "technical_notes": ["Slightly underexposed"],
    "detailed_analysis": {"emotional_intensity": "high", "summary": "Moving take."},
}


def _create(client, project, talent, headers):
    r = client.post("/api/auditions", headers=headers(talent), json={
        "project_id": project["id"],
        "video_url": "https://media/take1.jpg",
        "role_description": "A grieving sister",
        "emotional_keywords": ["sad", " ", "restrained"],
    })
    assert r.status_code == 201, r.text
    return r.json()


def test_create_audition_is_pending(client, make_user, open_project, headers):
    _, project = open_project()
    talent = make_user("talent")
    audition = _create(client, project, talent, headers)
    assert audition["status"] == "pending"
    assert audition["emotional_keywords"] == ["sad", "restrained"]


def test_evaluation_runner_completes(client, make_user, open_project, headers):
    director, project = open_project()
    talent = make_user("talent")
    audition = _create(client, project, talent, headers)

    with patch("infra.llm.client._choose_and_call", new=AsyncMock(return_value=json.dumps(EVALUATION))) as llm:
        asyncio.run(run_audition_evaluation(audition["id"]))
    assert llm.await_args.kwargs["vision"] is True
    [message] = llm.await_args.args[0]
    assert message["content"][1]["image_url"]["url"] == "https://media/take1.jpg"

    got = client.get(f"/api/auditions/{audition['id']}", headers=headers(director)).json()
    assert got["status"] == "completed"
    assert got["evaluation"]["overall_match_score"] == 81
    assert got["evaluation"]["recommendation"] == "yes"
    assert got["evaluation"]["detailed_analysis"]["emotional_intensity"] == "high"


def test_evaluation_runner_records_failure(client, make_user, open_project, headers):
    _, project = open_project()
    talent = make_user("talent")
    audition = _create(client, project, talent, headers)

    with patch("infra.llm.client._choose_and_call", new=AsyncMock(return_value="no json here")):
        asyncio.run(run_audition_evaluation(audition["id"]))

    got = client.get(f"/api/auditions/{audition['id']}", headers=headers(talent)).json()
    assert got["status"] == "failed"
    assert "No JSON object" in got["error"]
    assert got["evaluation"] is None


def test_evaluate_endpoint_returns_analyzing(client, make_user, open_project, headers):
    _, project = open_project()
    talent = make_user("talent")
    audition = _create(client, project, talent, headers)

    with patch("domain.services.auditions.run_audition_evaluation", new=AsyncMock()) as runner:
        r = client.post(f"/api/auditions/{audition['id']}/evaluate", headers=headers(talent))
    assert r.status_code == 202
    assert r.json()["status"] == "analyzing"
    runner.assert_called_once_with(audition["id"])


def test_audition_visibility_and_listing(client, make_user, open_project, headers):
    director, project = open_project()
    talent = make_user("talent")
    audition = _create(client, project, talent, headers)
    stranger = make_user("talent")

    assert client.get(f"/api/auditions/{audition['id']}", headers=headers(stranger)).status_code == 403
    assert [a["id"] for a in client.get("/api/auditions/mine", headers=headers(talent)).json()] == [audition["id"]]
    listed = client.get(f"/api/projects/{project['id']}/auditions", headers=headers(director)).json()
    assert [a["id"] for a in listed] == [audition["id"]]
    assert client.get(f"/api/projects/{project['id']}/auditions", headers=headers(talent)).status_code == 403
