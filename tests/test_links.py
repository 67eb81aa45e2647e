import pytest


def create_link(client, user, **fields):
    payload = {"platform": "github", "url": "https://github.com/example", **fields}
    response = client.post("/api/links", json=payload, headers=user["mutate"])
    assert response.status_code == 201, response.text
    return response.json()


def listed_ids(client, user):
    return [link["id"] for link in client.get("/api/links", headers=user["headers"]).json()]


def test_create_link_appends_in_order(client, alice):
    first = create_link(client, alice, platform="github")
    second = create_link(client, alice, platform="x", url="https://x.com/alice", customTitle="My X")

    assert first["order"] == 0
    assert second["order"] == 1
    assert second["customTitle"] == "My X"
    assert second["clicks"] == 0
    assert second["profileId"] == alice["profile"]["id"]
    assert listed_ids(client, alice) == [first["id"], second["id"]]


def test_create_link_with_explicit_order(client, alice):
    late = create_link(client, alice, order=10)
    early = create_link(client, alice, order=1)
    assert listed_ids(client, alice) == [early["id"], late["id"]]


@pytest.mark.parametrize("url", ["javascript:alert(1)", " JavaScript:alert(1)", "data:text/html,hi", "vbscript:x"])
def test_create_link_rejects_script_urls(client, alice, url):
    response = client.post("/api/links", json={"platform": "custom", "url": url}, headers=alice["mutate"])
    assert response.status_code == 400


def test_create_link_rejects_inverted_schedule(client, alice):
    response = client.post(
        "/api/links",
        json={
            "platform": "website",
            "url": "https://example.com",
            "isScheduled": True,
            "scheduleStart": "2030-01-02T00:00:00Z",
            "scheduleEnd": "2030-01-01T00:00:00Z",
        },
        headers=alice["mutate"],
    )
    assert response.status_code == 400


def test_update_link_cannot_invert_stored_schedule(client, alice):
    link = create_link(
        client,
        alice,
        isScheduled=True,
        scheduleStart="2026-01-01T00:00:00Z",
        scheduleEnd="2026-02-01T00:00:00Z",
    )

    response = client.patch(
        f"/api/links/{link['id']}",
        json={"scheduleStart": "2026-06-01T00:00:00Z"},
        headers=alice["mutate"],
    )
    assert response.status_code == 400
    assert response.json()["error"] == "scheduleStart must be before scheduleEnd"

    stored = client.get("/api/links", headers=alice["headers"]).json()[0]
    assert stored["scheduleStart"].startswith("2026-01-01")

    # moving both bounds together is fine
    response = client.patch(
        f"/api/links/{link['id']}",
        json={"scheduleStart": "2026-06-01T00:00:00Z", "scheduleEnd": "2026-07-01T00:00:00Z"},
        headers=alice["mutate"],
    )
    assert response.status_code == 200
    assert response.json()["scheduleEnd"].startswith("2026-07-01")


def test_create_link_with_badge(client, alice):
    link = create_link(client, alice, badge="hot", description="Limited drop")
    assert link["badge"] == "hot"
    assert link["description"] == "Limited drop"

    response = client.post(
        "/api/links",
        json={"platform": "github", "url": "https://github.com/x", "badge": "legendary"},
        headers=alice["mutate"],
    )
    assert response.status_code == 400


def test_update_link_partially(client, alice):
    link = create_link(client, alice)

    response = client.patch(
        f"/api/links/{link['id']}",
        json={"customTitle": "Code", "url": None},
        headers=alice["mutate"],
    )
    assert response.status_code == 200
    data = response.json()
    assert data["customTitle"] == "Code"
    assert data["url"] == link["url"]
    assert data["platform"] == "github"


def test_update_missing_link_is_404(client, alice):
    response = client.patch("/api/links/does-not-exist", json={"customTitle": "x"}, headers=alice["mutate"])
    assert response.status_code == 404
    assert response.json() == {"error": "Link not found"}


def test_other_profiles_link_cannot_be_changed(client, alice, bob):
    link = create_link(client, alice)

    response = client.patch(f"/api/links/{link['id']}", json={"customTitle": "pwned"}, headers=bob["mutate"])
    assert response.status_code == 404

    response = client.delete(f"/api/links/{link['id']}", headers=bob["mutate"])
    assert response.status_code == 404

    assert listed_ids(client, alice) == [link["id"]]


def test_delete_link(client, alice):
    link = create_link(client, alice)

    response = client.delete(f"/api/links/{link['id']}", headers=alice["mutate"])
    assert response.status_code == 204
    assert listed_ids(client, alice) == []

    response = client.delete(f"/api/links/{link['id']}", headers=alice["mutate"])
    assert response.status_code == 404


def test_reorder_links(client, alice):
    a = create_link(client, alice, platform="github")
    b = create_link(client, alice, platform="x", url="https://x.com/a")
    c = create_link(client, alice, platform="tiktok", url="https://tiktok.com/@a")

    payload = {"links": [{"id": c["id"], "order": 0}, {"id": a["id"], "order": 1}, {"id": b["id"], "order": 2}]}
    response = client.post("/api/links/reorder", json=payload, headers=alice["mutate"])
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert listed_ids(client, alice) == [c["id"], a["id"], b["id"]]

    # same payload again changes nothing
    client.post("/api/links/reorder", json=payload, headers=alice["mutate"])
    assert listed_ids(client, alice) == [c["id"], a["id"], b["id"]]


def test_reorder_with_foreign_link_is_rejected_atomically(client, alice, bob):
    mine = create_link(client, alice)
    theirs = create_link(client, bob)

    payload = {"links": [{"id": mine["id"], "order": 5}, {"id": theirs["id"], "order": 0}]}
    response = client.post("/api/links/reorder", json=payload, headers=alice["mutate"])
    assert response.status_code == 403
    assert response.json() == {"error": "Cannot reorder links from another profile"}

    assert client.get("/api/links", headers=alice["headers"]).json()[0]["order"] == 0


def test_click_tracking(client, alice):
    link = create_link(client, alice)

    for _ in range(2):
        response = client.post(f"/api/links/{link['id']}/click", headers={"Referer": "https://instagram.com"})
        assert response.status_code == 200

    assert client.get("/api/links", headers=alice["headers"]).json()[0]["clicks"] == 2


def test_click_on_unknown_link_is_404(client):
    assert client.post("/api/links/nope/click").status_code == 404


def test_link_with_unknown_group_is_rejected(client, alice):
    response = client.post(
        "/api/links",
        json={"platform": "github", "url": "https://github.com/a", "groupId": "missing"},
        headers=alice["mutate"],
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Unknown link group"}


def test_links_require_auth(client):
    response = client.get("/api/links")
    assert response.status_code == 401
