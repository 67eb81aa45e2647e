def test_create_and_list_groups(client, alice):
    first = client.post("/api/link-groups", json={"name": "Socials"}, headers=alice["mutate"])
    second = client.post("/api/link-groups", json={"name": "Shop"}, headers=alice["mutate"])
    assert first.status_code == 201
    assert first.json()["order"] == 0
    assert second.json()["order"] == 1

    groups = client.get("/api/link-groups", headers=alice["headers"]).json()
    assert [group["name"] for group in groups] == ["Socials", "Shop"]


def test_group_name_is_required(client, alice):
    response = client.post("/api/link-groups", json={"name": ""}, headers=alice["mutate"])
    assert response.status_code == 400


def test_deleting_group_detaches_links(client, alice):
    group = client.post("/api/link-groups", json={"name": "Socials"}, headers=alice["mutate"]).json()
    link = client.post(
        "/api/links",
        json={"platform": "github", "url": "https://github.com/a", "groupId": group["id"]},
        headers=alice["mutate"],
    ).json()
    assert link["groupId"] == group["id"]

    response = client.delete(f"/api/link-groups/{group['id']}", headers=alice["mutate"])
    assert response.status_code == 204

    links = client.get("/api/links", headers=alice["headers"]).json()
    assert len(links) == 1
    assert links[0]["groupId"] is None


def test_cannot_delete_other_profiles_group(client, alice, bob):
    group = client.post("/api/link-groups", json={"name": "Mine"}, headers=alice["mutate"]).json()

    response = client.delete(f"/api/link-groups/{group['id']}", headers=bob["mutate"])
    assert response.status_code == 404
    assert len(client.get("/api/link-groups", headers=alice["headers"]).json()) == 1


def test_cannot_attach_link_to_other_profiles_group(client, alice, bob):
    group = client.post("/api/link-groups", json={"name": "Mine"}, headers=alice["mutate"]).json()

    response = client.post(
        "/api/links",
        json={"platform": "github", "url": "https://github.com/b", "groupId": group["id"]},
        headers=bob["mutate"],
    )
    assert response.status_code == 400
