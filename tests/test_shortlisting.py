import json
from unittest.mock import AsyncMock, patch


def _apply(client, project, talent, headers, **extra):
    r = client.post(f"/api/projects/{project['id']}/applications",
                    json={"video_url": "https://videos/reel.mp4", **extra}, headers=headers(talent))
    assert r.status_code == 201, r.text
    return r.json()["id"]


def _reply(*evaluations):
    items = [{"applicationId": aid, "matchScore": score, "strengths": ["Strong presence"],
              "concerns": ["Limited credits"], "recommendation": "Worth a callback."}
             for aid, score in evaluations]
    return "```json\n" + json.dumps(items) + "\n```"


def test_shortlist_prefilters_scores_and_ranks(client, make_user, open_project, headers):
    director, project = open_project(requirements={"minHeight": 170, "gender": ["female"]})
    ana = make_user("talent", full_name="Ana", height_cm=175, gender_identity="Female")
    bea = make_user("talent", full_name="Bea", height_cm=160, gender_identity="female")
    cat = make_user("talent", full_name="Cat", height_cm=180, gender_identity="female")
    dee = make_user("talent", full_name="Dee", height_cm=172, gender_identity="female")
    a_ana = _apply(client, project, ana, headers, cover_letter="I trained as a nurse.")
    a_bea = _apply(client, project, bea, headers)
    a_cat = _apply(client, project, cat, headers)
    a_dee = _apply(client, project, dee, headers)

    reply = _reply((a_cat, 40), (a_ana, 62.4), (a_dee, 91.6), ("app_unknown", 99))
    with patch("infra.llm.client._choose_and_call", new=AsyncMock(return_value=reply)) as llm:
        r = client.post(f"/api/ai/projects/{project['id']}/shortlist", headers=headers(director))

    assert r.status_code == 200, r.text
    body = r.json()
    assert body["project_id"] == project["id"]
    assert body["evaluated_count"] == 3
    assert [e["application_id"] for e in body["shortlisted_applicants"]] == [a_dee, a_ana]
    top = body["shortlisted_applicants"][0]
    assert top["talent_name"] == "Dee"
    assert top["talent_id"] == dee
    assert top["match_score"] == 91.6
    assert top["evaluation"]["concerns"] == ["Limited credits"]
    assert top["application"]["ai_match_score"] == 92

    assert body["auto_rejected"] == [{
        "application_id": a_bea, "talent_id": bea, "talent_name": "Bea",
        "reasons": ["Height below minimum (170cm required)"],
    }]

    prompt = llm.await_args.args[0][1]["content"]
    assert a_ana in prompt and a_cat in prompt and a_bea not in prompt
    assert "I trained as a nurse." in prompt

    rows = client.get(f"/api/projects/{project['id']}/applications", headers=headers(director)).json()
    scores = {row["application"]["id"]: row["application"]["ai_match_score"] for row in rows}
    assert scores == {a_ana: 62, a_cat: 40, a_dee: 92}
    statuses = {row["application"]["status"] for row in rows}
    assert statuses == {"pending"}

    bea_apps = client.get("/api/applications/mine", headers=headers(bea)).json()
    assert (bea_apps[0]["status"], bea_apps[0]["ai_match_score"]) == ("rejected", 0)


def test_shortlist_with_no_applications_skips_model(client, open_project, headers):
    director, project = open_project()
    with patch("infra.llm.client._choose_and_call", new=AsyncMock()) as llm:
        r = client.post(f"/api/ai/projects/{project['id']}/shortlist", headers=headers(director))
    assert r.status_code == 200
    assert r.json() == {"project_id": project["id"], "shortlisted_applicants": [],
                        "auto_rejected": [], "evaluated_count": 0}
    llm.assert_not_awaited()


def test_shortlist_when_everyone_fails_prefilter(client, make_user, open_project, headers):
    director, project = open_project(requirements={"max_weight_kg": 60})
    heavy = make_user("talent", weight_kg=90)
    app_id = _apply(client, project, heavy, headers)
    with patch("infra.llm.client._choose_and_call", new=AsyncMock()) as llm:
        body = client.post(f"/api/ai/projects/{project['id']}/shortlist", headers=headers(director)).json()
    llm.assert_not_awaited()
    assert body["shortlisted_applicants"] == []
    assert body["auto_rejected"][0]["application_id"] == app_id
    assert body["auto_rejected"][0]["reasons"] == ["Weight above maximum (60kg required)"]


def test_shortlist_is_owner_only(client, make_user, open_project, headers):
    _, project = open_project()
    stranger = make_user("director")
    r = client.post(f"/api/ai/projects/{project['id']}/shortlist", headers=headers(stranger))
    assert r.status_code == 403
    assert client.post("/api/ai/projects/prj_missing/shortlist", headers=headers(stranger)).status_code == 404


def test_unparseable_reply_is_bad_gateway(client, make_user, open_project, headers):
    director, project = open_project()
    _apply(client, project, make_user("talent"), headers)
    with patch("infra.llm.client._choose_and_call", new=AsyncMock(return_value="Sorry, I can't.")):
        r = client.post(f"/api/ai/projects/{project['id']}/shortlist", headers=headers(director))
    assert r.status_code == 502


def test_no_ai_provider_is_service_unavailable(client, make_user, open_project, headers):
    director, project = open_project()
    _apply(client, project, make_user("talent"), headers)
    r = client.post(f"/api/ai/projects/{project['id']}/shortlist", headers=headers(director))
    assert r.status_code == 503
