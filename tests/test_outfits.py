"""
Tests for outfit endpoints, including how outfit colors are derived and persisted.
"""
from closet.models import Outfit


def test_create_outfit_persists_derived_color(client, auth_headers, make_item, db_session):
    red = make_item(name="Red tee", color="#FF0000")
    blue = make_item(name="Blue jeans", color="#0000FF")

    response = client.post(
        "/outfits", json={"name": "Weekend", "item_ids": [red["id"], blue["id"]]}, headers=auth_headers
    )
    assert response.status_code == 201
    outfit = response.json()
    assert outfit["color"] == "#800080"
    assert outfit["color_is_derived"] is False
    assert [i["id"] for i in outfit["items"]] == [red["id"], blue["id"]]
    assert outfit["favorite"] is False

    assert db_session.get(Outfit, outfit["id"]).color == "#800080"


def test_light_outfit_is_darkened(make_item, make_outfit):
    white = make_item(name="White shirt", color="#FFFFFF")
    assert make_outfit([white["id"]])["color"] == "#CDCDCD"


def test_persisted_color_is_not_recomputed(client, auth_headers, make_item, make_outfit):
    red = make_item(color="#FF0000")
    outfit = make_outfit([red["id"]])

    client.patch(f"/wardrobe/{red['id']}", json={"color": "#FFFFFF"}, headers=auth_headers)

    fetched = client.get(f"/outfits/{outfit['id']}", headers=auth_headers).json()
    assert fetched["items"][0]["color"] == "#FFFFFF"
    assert fetched["color"] == "#FF0000"


def test_legacy_outfit_gets_display_color(client, auth_headers, make_item, db_session):
    red = make_item(color="#FF0000")
    blue = make_item(color="#0000FF")
    me = client.get("/auth/me", headers=auth_headers).json()

    legacy = Outfit(user_id=me["id"], name="Old", items=[red["id"], blue["id"]], color=None)
    db_session.add(legacy)
    db_session.commit()

    fetched = client.get(f"/outfits/{legacy.id}", headers=auth_headers).json()
    assert fetched["color"] == "#800080"
    assert fetched["color_is_derived"] is True

    db_session.expire_all()
    assert db_session.get(Outfit, legacy.id).color is None


def test_manual_color_overrides(client, auth_headers, make_item, make_outfit):
    item = make_item(color="#FF0000")
    outfit = make_outfit([item["id"]])

    response = client.patch(f"/outfits/{outfit['id']}", json={"color": "#123456"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["color"] == "#123456"

    # Changing items afterwards keeps the chosen color
    other = make_item(color="#FFFFFF")
    response = client.patch(f"/outfits/{outfit['id']}", json={"item_ids": [other["id"]]}, headers=auth_headers)
    assert response.json()["color"] == "#123456"


def test_manual_color_must_be_hex(client, auth_headers, make_item, make_outfit):
    outfit = make_outfit([make_item()["id"]])
    response = client.patch(f"/outfits/{outfit['id']}", json={"color": "blue"}, headers=auth_headers)
    assert response.status_code == 422


def test_duplicate_outfit_rejected(client, auth_headers, make_item, make_outfit):
    a = make_item(name="A")
    b = make_item(name="B")
    original = make_outfit([a["id"], b["id"]])

    response = client.post("/outfits", json={"name": "Again", "item_ids": [b["id"], a["id"]]}, headers=auth_headers)
    assert response.status_code == 409
    body = response.json()
    assert body["error_code"] == "CONFLICT"
    assert body["details"]["outfit_id"] == original["id"]


def test_subset_is_not_a_duplicate(client, auth_headers, make_item, make_outfit):
    a = make_item(name="A")
    b = make_item(name="B")
    make_outfit([a["id"], b["id"]])

    response = client.post("/outfits", json={"name": "Just A", "item_ids": [a["id"]]}, headers=auth_headers)
    assert response.status_code == 201


def test_duplicates_are_per_user(client, register, make_item, make_outfit):
    a = make_item(name="A")
    make_outfit([a["id"]])

    other = register(email="other@example.com")
    mine = make_item(name="A", headers=other)
    response = client.post("/outfits", json={"name": "Mine", "item_ids": [mine["id"]]}, headers=other)
    assert response.status_code == 201


def test_create_requires_name_and_items(client, auth_headers, make_item):
    item = make_item()
    assert client.post("/outfits", json={"name": "  ", "item_ids": [item["id"]]}, headers=auth_headers).status_code == 422
    assert client.post("/outfits", json={"name": "Empty", "item_ids": []}, headers=auth_headers).status_code == 422


def test_cannot_use_foreign_items(client, register, make_item):
    foreign = make_item()
    other = register(email="other@example.com")
    response = client.post("/outfits", json={"name": "Stolen", "item_ids": [foreign["id"]]}, headers=other)
    assert response.status_code == 400
    assert response.json()["details"]["field"] == "item_ids"


def test_list_paginates_newest_first(client, auth_headers, make_item, make_outfit):
    created = []
    for n in range(12):
        item = make_item(name=f"Item {n}")
        created.append(make_outfit([item["id"]], name=f"Outfit {n}")["id"])

    first = client.get("/outfits", headers=auth_headers).json()
    assert len(first["items"]) == 10
    assert first["has_more"] is True
    assert [o["id"] for o in first["items"]] == list(reversed(created))[:10]

    second = client.get(f"/outfits?cursor={first['next_cursor']}", headers=auth_headers).json()
    assert [o["id"] for o in second["items"]] == list(reversed(created))[10:]
    assert second["has_more"] is False
    assert second["next_cursor"] is None


def test_invalid_cursor(client, auth_headers):
    response = client.get("/outfits?cursor=not-a-cursor", headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["details"]["field"] == "cursor"


def test_search_and_favorites(client, auth_headers, make_item, make_outfit):
    work = make_outfit([make_item(name="Blazer")["id"]], name="Work day")
    make_outfit([make_item(name="Hoodie")["id"]], name="Gym")

    toggled = client.post(f"/outfits/{work['id']}/favorite", headers=auth_headers).json()
    assert toggled["favorite"] is True

    favorites = client.get("/outfits?favorites_only=true", headers=auth_headers).json()
    assert [o["name"] for o in favorites["items"]] == ["Work day"]

    found = client.get("/outfits?search=GYM", headers=auth_headers).json()
    assert [o["name"] for o in found["items"]] == ["Gym"]


def test_color_preview(client, auth_headers, make_item):
    red = make_item(color="#FF0000")
    blue = make_item(color="#0000FF")

    response = client.post("/outfits/color-preview", json={"item_ids": [red["id"], blue["id"]]}, headers=auth_headers)
    assert response.json() == {"color": "#800080"}

    response = client.post("/outfits/color-preview", json={"item_ids": [], "override": "#ABCDEF"}, headers=auth_headers)
    assert response.json() == {"color": "#ABCDEF"}


def test_outfits_are_private(client, register, make_item, make_outfit):
    outfit = make_outfit([make_item()["id"]])
    other = register(email="other@example.com")
    assert client.get(f"/outfits/{outfit['id']}", headers=other).status_code == 404
    assert client.delete(f"/outfits/{outfit['id']}", headers=other).status_code == 404


def test_delete_outfit(client, auth_headers, make_item, make_outfit):
    outfit = make_outfit([make_item()["id"]])
    assert client.delete(f"/outfits/{outfit['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"/outfits/{outfit['id']}", headers=auth_headers).status_code == 404


def test_preview_matches_saved_color_with_repeated_items(client, auth_headers, make_item):
    red = make_item(color="#FF0000")
    blue = make_item(color="#0000FF")
    selection = [red["id"], red["id"], blue["id"]]

    preview = client.post("/outfits/color-preview", json={"item_ids": selection}, headers=auth_headers).json()
    created = client.post("/outfits", json={"name": "Twice red", "item_ids": selection}, headers=auth_headers).json()
    assert preview["color"] == created["color"] == "#800080"


def test_edit_cannot_duplicate_another_outfit(client, auth_headers, make_item, make_outfit):
    a = make_item(name="A")
    b = make_item(name="B")
    one = make_outfit([a["id"], b["id"]], name="One")
    two = make_outfit([a["id"]], name="Two")

    response = client.patch(f"/outfits/{two['id']}", json={"item_ids": [b["id"], a["id"]]}, headers=auth_headers)
    assert response.status_code == 409
    assert response.json()["details"]["outfit_id"] == one["id"]


def test_edit_may_keep_its_own_items(client, auth_headers, make_item, make_outfit):
    a = make_item(name="A")
    b = make_item(name="B")
    outfit = make_outfit([a["id"], b["id"]])

    response = client.patch(f"/outfits/{outfit['id']}", json={"item_ids": [b["id"], a["id"]]}, headers=auth_headers)
    assert response.status_code == 200
    assert [i["id"] for i in response.json()["items"]] == [b["id"], a["id"]]


def test_search_treats_wildcards_literally(client, auth_headers, make_item, make_outfit):
    make_outfit([make_item(name="A")["id"]], name="100% cotton")
    make_outfit([make_item(name="B")["id"]], name="Linen")

    found = client.get("/outfits?search=%25", headers=auth_headers).json()
    assert [o["name"] for o in found["items"]] == ["100% cotton"]
    assert client.get("/outfits?search=_", headers=auth_headers).json()["items"] == []
