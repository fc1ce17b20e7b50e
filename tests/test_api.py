from notes_api.app.services.account_service import CURRENT_USER_KEY


def sign_up(client, username, password="pw"):
    return client.post("/api/v1/accounts/signup", json={"username": username, "password": password})


def test_signup_logs_in(client):
    response = sign_up(client, "alice")
    assert response.status_code == 201
    assert response.json() == {"username": "alice"}
    assert client.get("/api/v1/session/").json() == {"username": "alice"}


def test_register_does_not_log_in_and_rejects_duplicates(client):
    first = client.post("/api/v1/accounts/", json={"username": "alice", "password": "pw"})
    duplicate = client.post("/api/v1/accounts/", json={"username": "alice", "password": "x"})

    assert first.status_code == 201
    assert duplicate.status_code == 409
    assert client.get("/api/v1/session/").status_code == 404
    assert client.get("/api/v1/accounts/").json() == [{"username": "alice"}]


def test_login_failures_are_indistinguishable(client):
    client.post("/api/v1/accounts/", json={"username": "alice", "password": "pw"})

    wrong = client.post("/api/v1/session/login", json={"username": "alice", "password": "bad"})
    unknown = client.post("/api/v1/session/login", json={"username": "bob", "password": "pw"})

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()


def test_notes_require_a_session(client):
    assert client.get("/api/v1/notes/").status_code == 401
    assert client.post("/api/v1/notes/", json={"title": "A"}).status_code == 401


def test_note_crud_flow(client):
    sign_up(client, "alice")

    created = client.post("/api/v1/notes/", json={"title": "  Groceries ", "body": "milk\n"})
    assert created.status_code == 201
    note = created.json()
    assert note["title"] == "Groceries"
    assert note["body"] == "milk"
    assert "imageUri" not in note
    assert note["createdAt"] == note["updatedAt"]

    fetched = client.get(f"/api/v1/notes/{note['id']}")
    assert fetched.json() == note

    updated = client.put(f"/api/v1/notes/{note['id']}", json={"imageUri": "file:///p.jpg"})
    assert updated.status_code == 200
    assert updated.json()["imageUri"] == "file:///p.jpg"
    assert updated.json()["title"] == "Groceries"
    assert updated.json()["updatedAt"] > note["updatedAt"]

    cleared = client.put(f"/api/v1/notes/{note['id']}", json={"imageUri": None})
    assert "imageUri" not in cleared.json()

    assert client.delete(f"/api/v1/notes/{note['id']}").status_code == 204
    assert client.delete(f"/api/v1/notes/{note['id']}").status_code == 204
    assert client.get(f"/api/v1/notes/{note['id']}").status_code == 404
    assert client.put(f"/api/v1/notes/{note['id']}", json={"title": "x"}).status_code == 404


def test_blank_title_is_rejected(client):
    sign_up(client, "alice")
    assert client.post("/api/v1/notes/", json={"title": "   "}).status_code == 422
    note = client.post("/api/v1/notes/", json={"title": "A"}).json()
    assert client.put(f"/api/v1/notes/{note['id']}", json={"title": ""}).status_code == 422


def test_listing_filters_and_sorts(client):
    sign_up(client, "alice")
    for title, body in (("Banana", "yellow"), ("apple", "red"), ("Cherry", "red")):
        client.post("/api/v1/notes/", json={"title": title, "body": body})

    by_title = client.get("/api/v1/notes/", params={"sort": "title-asc"}).json()
    assert [n["title"] for n in by_title] == ["apple", "Banana", "Cherry"]

    red = client.get("/api/v1/notes/", params={"q": "RED", "sort": "title-desc"}).json()
    assert [n["title"] for n in red] == ["Cherry", "apple"]

    assert client.get("/api/v1/notes/", params={"sort": "bogus"}).status_code == 422


def test_switch_account_flow(client, store):
    sign_up(client, "alice", "pw1")
    client.post("/api/v1/notes/", json={"title": "alice note"})
    sign_up(client, "bob", "pw2")
    assert client.get("/api/v1/notes/").json() == []

    same = client.post("/api/v1/session/switch", json={"username": "bob", "password": "pw2"})
    assert same.status_code == 400

    blank = client.post("/api/v1/session/switch", json={"username": "alice", "password": "  "})
    assert blank.status_code == 422

    wrong = client.post("/api/v1/session/switch", json={"username": "alice", "password": "pw2"})
    assert wrong.status_code == 401
    assert store.snapshot()[CURRENT_USER_KEY] == "bob"

    switched = client.post("/api/v1/session/switch", json={"username": "alice", "password": "pw1"})
    assert switched.json() == {"username": "alice"}
    assert [n["title"] for n in client.get("/api/v1/notes/").json()] == ["alice note"]


def test_logout_always_succeeds(client, store):
    sign_up(client, "alice")
    store.fail_removes = True
    assert client.delete("/api/v1/session/").status_code == 204
    store.fail_removes = False
    assert client.delete("/api/v1/session/").status_code == 204
    assert client.get("/api/v1/session/").status_code == 404


def test_storage_faults_map_to_503(client, store):
    sign_up(client, "alice")
    store.fail_writes = True
    assert client.post("/api/v1/notes/", json={"title": "A"}).status_code == 503
    assert client.post("/api/v1/accounts/", json={"username": "bob", "password": "pw"}).status_code == 503


def test_missing_title_is_rejected(client):
    sign_up(client, "alice")
    assert client.post("/api/v1/notes/", json={"body": "no title"}).status_code == 422
