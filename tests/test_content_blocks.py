def create_block(client, user, **fields):
    response = client.post("/api/content-blocks", json={"type": "text", **fields}, headers=user["mutate"])
    assert response.status_code == 201, response.text
    return response.json()


def test_create_blocks_of_each_kind(client, alice):
    kinds = ["video", "image", "gallery", "text", "embed", "form", "music", "podcast", "testimonial", "faq"]
    for kind in kinds:
        create_block(client, alice, type=kind, title=kind.title())

    blocks = client.get("/api/content-blocks", headers=alice["headers"]).json()
    assert [block["type"] for block in blocks] == kinds
    assert [block["order"] for block in blocks] == list(range(len(kinds)))
    assert all(block["isVisible"] for block in blocks)


def test_unknown_block_type_is_rejected(client, alice):
    response = client.post("/api/content-blocks", json={"type": "carousel"}, headers=alice["mutate"])
    assert response.status_code == 400


def test_update_block(client, alice):
    block = create_block(client, alice, content="v1")

    response = client.patch(
        f"/api/content-blocks/{block['id']}",
        json={"content": "v2", "isVisible": False},
        headers=alice["mutate"],
    )
    assert response.status_code == 200
    assert response.json()["content"] == "v2"
    assert response.json()["isVisible"] is False
    assert response.json()["type"] == "text"


def test_update_with_null_type_keeps_type(client, alice):
    block = create_block(client, alice, type="faq")

    response = client.patch(f"/api/content-blocks/{block['id']}", json={"type": None}, headers=alice["mutate"])
    assert response.status_code == 200
    assert response.json()["type"] == "faq"


def test_delete_block(client, alice):
    block = create_block(client, alice)

    assert client.delete(f"/api/content-blocks/{block['id']}", headers=alice["mutate"]).status_code == 204
    assert client.get("/api/content-blocks", headers=alice["headers"]).json() == []


def test_other_profiles_block_is_not_found(client, alice, bob):
    block = create_block(client, alice)

    response = client.patch(f"/api/content-blocks/{block['id']}", json={"content": "x"}, headers=bob["mutate"])
    assert response.status_code == 404
    assert response.json() == {"error": "Content block not found"}
    assert client.delete(f"/api/content-blocks/{block['id']}", headers=bob["mutate"]).status_code == 404


def test_reorder_blocks(client, alice):
    a = create_block(client, alice, content="a")
    b = create_block(client, alice, content="b")

    response = client.post(
        "/api/content-blocks/reorder",
        json={"blocks": [{"id": b["id"], "order": 0}, {"id": a["id"], "order": 1}]},
        headers=alice["mutate"],
    )
    assert response.status_code == 200
    blocks = client.get("/api/content-blocks", headers=alice["headers"]).json()
    assert [block["content"] for block in blocks] == ["b", "a"]


def test_reorder_foreign_block_is_forbidden(client, alice, bob):
    theirs = create_block(client, bob)

    response = client.post(
        "/api/content-blocks/reorder",
        json={"blocks": [{"id": theirs["id"], "order": 3}]},
        headers=alice["mutate"],
    )
    assert response.status_code == 403
    assert response.json() == {"error": "Cannot reorder blocks from another profile"}
