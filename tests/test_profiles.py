from datetime import datetime, timedelta, timezone


def test_get_my_profile(client, alice):
    response = client.get("/api/profiles/me", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json()["username"] == "alice"


def test_update_profile_changes_only_sent_fields(client, alice):
    response = client.patch(
        "/api/profiles/me",
        json={"bio": "Building things", "primaryColor": "#FF0000", "customCSS": "h1 { color: red; }"},
        headers=alice["mutate"],
    )
    assert response.status_code == 200
    data = response.json()
    assert data["bio"] == "Building things"
    assert data["primaryColor"] == "#FF0000"
    assert data["customCSS"] == "h1 { color: red; }"
    assert data["theme"] == "neon"
    assert data["fontFamily"] == "DM Sans"


def test_update_profile_null_handling(client, alice):
    response = client.patch(
        "/api/profiles/me",
        json={"theme": None, "bio": None, "layout": "grid"},
        headers=alice["mutate"],
    )
    assert response.status_code == 200
    data = response.json()
    assert data["theme"] == "neon"
    assert data["bio"] == ""
    assert data["layout"] == "grid"


def test_update_profile_rejects_unknown_enum_value(client, alice):
    response = client.patch("/api/profiles/me", json={"buttonStyle": "blob"}, headers=alice["mutate"])
    assert response.status_code == 400


def test_update_template_fields(client, alice):
    response = client.patch(
        "/api/profiles/me",
        json={"templateHTML": "<h1>{{username}}</h1>", "useCustomTemplate": True},
        headers=alice["mutate"],
    )
    assert response.status_code == 200
    assert response.json()["templateHTML"] == "<h1>{{username}}</h1>"
    assert response.json()["useCustomTemplate"] is True


def test_rename_to_taken_username_conflicts(client, alice, bob):
    response = client.patch("/api/profiles/me", json={"username": "BOB"}, headers=alice["mutate"])
    assert response.status_code == 409
    assert response.json() == {"error": "Username already taken"}


def test_rename_keeps_case_and_frees_old_name(client, alice):
    response = client.patch("/api/profiles/me", json={"username": "Alice.Dev"}, headers=alice["mutate"])
    assert response.status_code == 200
    assert response.json()["username"] == "Alice.Dev"

    assert client.get("/api/profiles/alice.dev").status_code == 200
    assert client.get("/api/profiles/alice").status_code == 404


def test_rename_to_reserved_username_is_invalid(client, alice):
    response = client.patch("/api/profiles/me", json={"username": "me"}, headers=alice["mutate"])
    assert response.status_code == 400


def test_public_profile_lookup_is_case_insensitive(client, alice):
    response = client.get("/api/profiles/ALICE")
    assert response.status_code == 200
    assert response.json()["id"] == alice["profile"]["id"]


def test_unknown_profile_is_404(client):
    response = client.get("/api/profiles/nobody")
    assert response.status_code == 404
    assert response.json() == {"error": "Profile not found"}


def test_public_links_hide_inactive_scheduled_links(client, alice):
    now = datetime.now(timezone.utc)
    client.post("/api/links", json={"platform": "github", "url": "https://github.com/alice"}, headers=alice["mutate"])
    client.post(
        "/api/links",
        json={
            "platform": "website",
            "url": "https://old-sale.example.com",
            "isScheduled": True,
            "scheduleStart": (now - timedelta(days=3)).isoformat(),
            "scheduleEnd": (now - timedelta(days=1)).isoformat(),
        },
        headers=alice["mutate"],
    )

    public = client.get("/api/profiles/alice/links").json()
    assert [link["platform"] for link in public] == ["github"]

    owned = client.get("/api/links", headers=alice["headers"]).json()
    assert len(owned) == 2


def test_public_content_blocks_hide_invisible_blocks(client, alice):
    client.post("/api/content-blocks", json={"type": "text", "content": "shown"}, headers=alice["mutate"])
    client.post(
        "/api/content-blocks",
        json={"type": "text", "content": "hidden", "isVisible": False},
        headers=alice["mutate"],
    )

    public = client.get("/api/profiles/alice/content-blocks").json()
    assert [block["content"] for block in public] == ["shown"]


def test_profile_view_increments_counter(client, alice):
    for _ in range(3):
        response = client.post("/api/profiles/alice/view")
        assert response.status_code == 200

    assert client.get("/api/profiles/alice").json()["views"] == 3


def test_view_of_unknown_profile_is_404(client):
    assert client.post("/api/profiles/ghost/view").status_code == 404


def test_template_preview_escapes_and_sanitizes(client, alice):
    client.patch("/api/profiles/me", json={"bio": "<script>alert(1)</script>"}, headers=alice["mutate"])

    response = client.post(
        "/api/profiles/me/template-preview",
        json={"templateHTML": "<div>{{bio}}</div><script>steal()</script>{{#if avatar}}<img src='{{avatar}}'>{{/if}}"},
        headers=alice["headers"],
    )
    assert response.status_code == 200
    html = response.json()["html"]
    assert "<script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "<img" not in html


def test_template_preview_renders_links(client, alice):
    link = client.post(
        "/api/links",
        json={"platform": "github", "url": "https://github.com/alice"},
        headers=alice["mutate"],
    ).json()

    response = client.post(
        "/api/profiles/me/template-preview",
        json={"templateHTML": "<h1>{{username}}</h1>{{#if socialLinks}}<div>{{socialLinks}}</div>{{/if}}"},
        headers=alice["headers"],
    )
    html = response.json()["html"]
    assert "<h1>alice</h1>" in html
    assert f'id="neropage-link-{link["id"]}"' in html
    assert "GitHub" in html


def test_template_preview_requires_auth(client):
    response = client.post("/api/profiles/me/template-preview", json={"templateHTML": "<p>x</p>"})
    assert response.status_code == 401
