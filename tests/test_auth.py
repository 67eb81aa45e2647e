from conftest import DEFAULT_PASSWORD, auth_headers, signup


def test_signup_creates_user_and_default_profile(client):
    data = signup(client, "Alice")

    assert data["tokenType"] == "bearer"
    assert data["accessToken"]
    assert data["user"]["username"] == "Alice"

    profile = data["profile"]
    assert profile["username"] == "Alice"
    assert profile["userId"] == data["user"]["id"]
    assert profile["bio"] == "Welcome to my link hub!"
    assert profile["theme"] == "neon"
    assert profile["primaryColor"] == "#8B5CF6"
    assert profile["backgroundColor"] == "#0A0A0F"
    assert profile["backgroundType"] == "color"
    assert profile["layout"] == "stacked"
    assert profile["fontFamily"] == "DM Sans"
    assert profile["buttonStyle"] == "rounded"
    assert profile["useCustomTemplate"] is False
    assert profile["views"] == 0
    assert "passwordHash" not in data["user"]


def test_signup_duplicate_username_is_case_insensitive(client):
    signup(client, "alice")

    response = client.post("/api/auth/signup", json={"username": "ALICE", "password": DEFAULT_PASSWORD})
    assert response.status_code == 409
    assert response.json() == {"error": "Username already taken"}


def test_signup_rejects_reserved_and_malformed_usernames(client):
    for username in ("me", "ME", "has space", "slash/name", "x" * 51):
        response = client.post("/api/auth/signup", json={"username": username, "password": DEFAULT_PASSWORD})
        assert response.status_code == 400, username
        assert response.json()["error"] == "Invalid request data"


def test_signup_rejects_short_password(client):
    response = client.post("/api/auth/signup", json={"username": "alice", "password": "short"})
    assert response.status_code == 400
    fields = [detail["field"] for detail in response.json()["details"]]
    assert any("password" in field for field in fields)


def test_login_success(client):
    signup(client, "alice")

    response = client.post("/api/auth/login", json={"username": "alice", "password": DEFAULT_PASSWORD})
    assert response.status_code == 200
    data = response.json()
    assert data["accessToken"]
    assert data["profile"]["username"] == "alice"


def test_login_wrong_password(client):
    signup(client, "alice")

    response = client.post("/api/auth/login", json={"username": "alice", "password": "not-the-password"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_login_unknown_user(client):
    response = client.post("/api/auth/login", json={"username": "ghost", "password": DEFAULT_PASSWORD})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_login_with_renamed_profile_username(client, alice):
    response = client.patch("/api/profiles/me", json={"username": "alice_v2"}, headers=alice["mutate"])
    assert response.status_code == 200

    response = client.post("/api/auth/login", json={"username": "alice_v2", "password": DEFAULT_PASSWORD})
    assert response.status_code == 200
    assert response.json()["profile"]["username"] == "alice_v2"


def test_me_requires_token(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json() == {"error": "Not authenticated"}


def test_me_rejects_garbage_token(client):
    response = client.get("/api/auth/me", headers=auth_headers("not-a-jwt"))
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


def test_me_returns_user_and_profile(client, alice):
    response = client.get("/api/auth/me", headers=alice["headers"])
    assert response.status_code == 200
    data = response.json()
    assert data["user"]["id"] == alice["user"]["id"]
    assert data["profile"]["id"] == alice["profile"]["id"]
