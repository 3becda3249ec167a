def test_conversation_is_reused_and_messages_flow(client, make_user, headers):
    ana, ben = make_user("talent"), make_user("director")

    first = client.post("/api/conversations", json={"other_user_id": ben}, headers=headers(ana)).json()
    again = client.post("/api/conversations", json={"other_user_id": ana}, headers=headers(ben)).json()
    assert first["created"] is True
    assert again["created"] is False
    assert again["id"] == first["id"]

    url = f"/api/conversations/{first['id']}/messages"
    assert client.post(url, json={"content": "   "}, headers=headers(ana)).status_code == 400
    client.post(url, json={"content": "Hi Ben"}, headers=headers(ana))
    client.post(url, json={"content": "Hello!"}, headers=headers(ben))
    assert [m["content"] for m in client.get(url, headers=headers(ben)).json()] == ["Hi Ben", "Hello!"]

    [convo] = client.get("/api/conversations", headers=headers(ana)).json()
    assert convo["other_user"]["user_id"] == ben
    assert convo["last_message"] == "Hello!"
    assert convo["muted"] is False


def test_conversation_guards(client, make_user, headers):
    ana, ben, eve = make_user("talent"), make_user("talent"), make_user("talent")
    assert client.post("/api/conversations", json={"other_user_id": ana}, headers=headers(ana)).status_code == 400
    assert client.post("/api/conversations", json={"other_user_id": "usr_x"}, headers=headers(ana)).status_code == 404

    convo = client.post("/api/conversations", json={"other_user_id": ben}, headers=headers(ana)).json()
    assert client.get(f"/api/conversations/{convo['id']}/messages", headers=headers(eve)).status_code == 403
    assert client.delete(f"/api/conversations/{convo['id']}", headers=headers(eve)).status_code == 403


def test_mute_archive_delete(client, make_user, headers):
    ana, ben = make_user("talent"), make_user("talent")
    convo = client.post("/api/conversations", json={"other_user_id": ben}, headers=headers(ana)).json()
    cid = convo["id"]

    client.put(f"/api/conversations/{cid}/muted", json={"value": True}, headers=headers(ana))
    assert client.get("/api/conversations", headers=headers(ana)).json()[0]["muted"] is True
    assert client.get("/api/conversations", headers=headers(ben)).json()[0]["muted"] is False

    client.put(f"/api/conversations/{cid}/archived", json={"value": True}, headers=headers(ben))
    assert client.get("/api/conversations", headers=headers(ana)).json() == []
    assert [c["id"] for c in client.get("/api/conversations?archived=true", headers=headers(ana)).json()] == [cid]

    assert client.delete(f"/api/conversations/{cid}", headers=headers(ana)).status_code == 204
    assert client.get(f"/api/conversations/{cid}/messages", headers=headers(ana)).status_code == 404


def test_forum_thread_lifecycle(client, make_user, headers):
    author, reader = make_user("director", full_name="Dir"), make_user("talent")
    h = headers(author)

    assert client.post("/api/forums/threads", headers=h, json={
        "title": "Lenses", "category": "gossip", "content": "?"}).status_code == 400
    assert client.post("/api/forums/threads", headers=h, json={
        "title": "  ", "category": "technology", "content": "x"}).status_code == 400
    assert client.post("/api/forums/threads", headers=h, json={
        "title": "Tags", "category": "news", "content": "x",
        "tags": ["a", "b", "c", "d", "e", "f"]}).status_code == 400

    thread = client.post("/api/forums/threads", headers=h, json={
        "title": "Anamorphic lenses?", "category": "technology",
        "content": "Which ones do you use?", "tags": ["gear", "gear", "lenses"]}).json()
    assert thread["tags"] == ["gear", "lenses"]

    r = client.post(f"/api/forums/threads/{thread['id']}/posts", headers=headers(reader), json={
        "content": "  Cooke, mostly.  ",
        "attachments": [{"file_name": "cooke.jpg", "file_url": "https://f/cooke.jpg",
                         "file_type": "image/jpeg", "file_size": 2048}]})
    assert r.status_code == 201
    assert r.json()["content"] == "Cooke, mostly."
    assert r.json()["attachments"][0]["file_size"] == 2048
    assert client.post(f"/api/forums/threads/{thread['id']}/posts", headers=headers(reader),
                       json={"content": " "}).status_code == 400

    [listed] = client.get("/api/forums/threads?category=technology", headers=h).json()
    assert listed["post_count"] == 2
    assert listed["author"]["full_name"] == "Dir"
    assert client.get("/api/forums/threads?category=news", headers=h).json() == []

    full = client.get(f"/api/forums/threads/{thread['id']}", headers=h).json()
    assert full["views"] == 1
    assert [p["content"] for p in full["posts"]] == ["Which ones do you use?", "Cooke, mostly."]
    assert full["posts"][1]["attachments"][0]["file_name"] == "cooke.jpg"
    assert client.get(f"/api/forums/threads/{thread['id']}", headers=h).json()["views"] == 2


def test_notifications_read_flow(client, make_user, open_project, headers):
    director, project = open_project()
    talent = make_user("talent")
    app_id = client.post(f"/api/projects/{project['id']}/applications",
                         json={"video_url": "https://v/1.mp4"}, headers=headers(talent)).json()["id"]
    client.post(f"/api/projects/{project['id']}/shortlist/manual",
                json={"application_ids": [app_id]}, headers=headers(director))

    [note] = client.get("/api/notifications", headers=headers(talent)).json()
    assert note["read"] is False
    assert client.post(f"/api/notifications/{note['id']}/read", headers=headers(director)).status_code == 404
    assert client.post(f"/api/notifications/{note['id']}/read", headers=headers(talent)).status_code == 204
    assert client.get("/api/notifications", headers=headers(talent)).json()[0]["read"] is True
    assert client.post("/api/notifications/read-all", headers=headers(talent)).json() == {"updated": 0}


def test_health(client):
    assert client.get("/api/health").json()["status"] == "ok"
