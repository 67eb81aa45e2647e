from datetime import datetime, timedelta, timezone

from neropage.platform.config import settings


def test_public_page_renders_profile_and_links(client, alice):
    link = client.post(
        "/api/links",
        json={"platform": "github", "url": "https://github.com/alice", "badge": "new"},
        headers=alice["mutate"],
    ).json()

    response = client.get("/user/alice")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    html = response.text
    assert "@alice" in html
    assert "Welcome to my link hub!" in html
    assert f'id="neropage-link-{link["id"]}"' in html
    assert "https://github.com/alice" in html
    assert "neropage-badge-new" in html
    assert "sendBeacon" in html
    assert "--np-primary: #8B5CF6;" in html
    assert "buttons-rounded" in html


def test_public_page_lookup_is_case_insensitive(client, alice):
    assert client.get("/user/ALICE").status_code == 200


def test_unknown_profile_page_is_html_404(client):
    response = client.get("/user/nobody")
    assert response.status_code == 404
    assert "Profile not found" in response.text
    assert "@nobody" in response.text


def test_expired_links_are_not_shown(client, alice):
    now = datetime.now(timezone.utc)
    client.post(
        "/api/links",
        json={
            "platform": "website",
            "url": "https://expired.example.com",
            "isScheduled": True,
            "scheduleEnd": (now - timedelta(hours=1)).isoformat(),
        },
        headers=alice["mutate"],
    )
    assert "expired.example.com" not in client.get("/user/alice").text


def test_links_are_grouped_into_sections(client, alice):
    group = client.post("/api/link-groups", json={"name": "Merch Store"}, headers=alice["mutate"]).json()
    client.post(
        "/api/links",
        json={"platform": "website", "url": "https://shop.example.com", "groupId": group["id"]},
        headers=alice["mutate"],
    )

    html = client.get("/user/alice").text
    assert "<h2>Merch Store</h2>" in html
    assert "shop.example.com" in html


def test_bio_markup_is_escaped(client, alice):
    client.patch("/api/profiles/me", json={"bio": "<script>alert(1)</script>"}, headers=alice["mutate"])

    html = client.get("/user/alice").text
    assert "<script>alert(1)</script>" not in html


def test_custom_css_cannot_break_out_of_style(client, alice):
    client.patch(
        "/api/profiles/me",
        json={"customCSS": "body { color: red; }</style><script>evil()</script>"},
        headers=alice["mutate"],
    )

    html = client.get("/user/alice").text
    assert "body { color: red; }" in html
    assert "<script>evil()" not in html
    assert "</style><script>" not in html


def test_theme_values_are_sanitized(client, alice):
    client.patch(
        "/api/profiles/me",
        json={"primaryColor": "red;}</style><script>x()</script>", "backgroundColor": "url(javascript:alert(1))"},
        headers=alice["mutate"],
    )

    html = client.get("/user/alice").text
    assert "<script>x()" not in html
    assert "javascript:" not in html


def test_background_image_must_be_http_or_relative(client, alice):
    client.patch(
        "/api/profiles/me",
        json={"backgroundType": "image", "backgroundImage": "javascript:alert(1)"},
        headers=alice["mutate"],
    )
    assert "background-image" not in client.get("/user/alice").text

    client.patch(
        "/api/profiles/me",
        json={"backgroundImage": "/static/uploads/images/bg.png"},
        headers=alice["mutate"],
    )
    assert 'background-image: url("/static/uploads/images/bg.png")' in client.get("/user/alice").text


def test_custom_template_is_used_when_enabled(client, alice):
    client.patch(
        "/api/profiles/me",
        json={
            "templateHTML": '<section class="mine"><h1>{{username}}</h1><iframe src="https://www.youtube.com/embed/x"></iframe><script>bad()</script></section>',
            "useCustomTemplate": True,
        },
        headers=alice["mutate"],
    )

    html = client.get("/user/alice").text
    assert '<section class="mine"><h1>alice</h1>' in html
    assert "<iframe" in html
    assert "<script>bad()" not in html
    assert "Created with" not in html


def test_content_blocks_render_on_page(client, alice):
    client.post(
        "/api/content-blocks",
        json={"type": "video", "title": "Latest", "mediaUrl": "https://www.youtube.com/watch?v=abc123"},
        headers=alice["mutate"],
    )
    client.post("/api/content-blocks", json={"type": "form", "title": "Contact"}, headers=alice["mutate"])

    html = client.get("/user/alice").text
    assert "https://www.youtube.com/embed/abc123" in html
    assert "neropage-form-" in html
    assert "form-submit" in html


def test_root_serves_default_profile_in_single_tenant_mode(client, alice, monkeypatch):
    monkeypatch.setattr(settings, "SINGLE_TENANT_MODE", True)

    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "@alice" in response.text


def test_root_without_profiles_in_single_tenant_mode(client, monkeypatch):
    monkeypatch.setattr(settings, "SINGLE_TENANT_MODE", True)

    response = client.get("/")
    assert response.json()["api_base"] == "/api"
