"""
Tests for sharing outfits and reading the feed.
"""
from datetime import date

from closet.models import Post

IMAGE = "https://images.example.com/look.jpg"


def _share(client, headers, outfit_id, caption="New look"):
    return client.post(
        "/posts", json={"caption": caption, "image": IMAGE, "outfit_id": outfit_id}, headers=headers
    )


def test_share_outfit(client, auth_headers, make_item, make_outfit):
    outfit = make_outfit([make_item(color="#FFFFFF")["id"]])

    response = _share(client, auth_headers, outfit["id"], caption="  Sunday best  ")
    assert response.status_code == 201
    post = response.json()
    assert post["caption"] == "Sunday best"
    assert post["image_url"] == IMAGE
    assert post["username"] == "Anonymous"
    assert post["date"] == date.today().isoformat()
    assert post["outfit"]["color"] == "#CDCDCD"


def test_username_is_snapshotted(client, register, make_item, make_outfit):
    headers = register(email="sam@example.com", username="sam")
    outfit = make_outfit([make_item(headers=headers)["id"]], headers=headers)
    post = _share(client, headers, outfit["id"]).json()

    client.patch("/auth/me", json={"username": "samuel"}, headers=headers)
    feed = client.get("/posts/feed", headers=headers).json()
    assert post["username"] == "sam"
    assert feed["items"][0]["username"] == "sam"


def test_caption_required(client, auth_headers, make_item, make_outfit):
    outfit = make_outfit([make_item()["id"]])
    assert _share(client, auth_headers, outfit["id"], caption="   ").status_code == 422


def test_cannot_share_foreign_outfit(client, register, make_item, make_outfit):
    outfit = make_outfit([make_item()["id"]])
    other = register(email="other@example.com")
    assert _share(client, other, outfit["id"]).status_code == 404


def test_feed_is_newest_first_and_paginated(client, auth_headers, make_item, make_outfit):
    outfit = make_outfit([make_item()["id"]])
    ids = [_share(client, auth_headers, outfit["id"], caption=f"Post {n}").json()["id"] for n in range(12)]

    first = client.get("/posts/feed", headers=auth_headers).json()
    assert [p["id"] for p in first["items"]] == list(reversed(ids))[:10]
    assert first["has_more"] is True

    second = client.get(f"/posts/feed?cursor={first['next_cursor']}", headers=auth_headers).json()
    assert [p["id"] for p in second["items"]] == list(reversed(ids))[10:]
    assert second["has_more"] is False


def test_feed_shows_everyone_mine_shows_me(client, auth_headers, register, make_item, make_outfit):
    outfit = make_outfit([make_item()["id"]])
    _share(client, auth_headers, outfit["id"])

    other = register(email="other@example.com")
    theirs = make_outfit([make_item(headers=other)["id"]], headers=other)
    _share(client, other, theirs["id"])

    assert len(client.get("/posts/feed", headers=auth_headers).json()["items"]) == 2
    mine = client.get("/posts/mine", headers=auth_headers).json()
    assert [p["outfit_id"] for p in mine["items"]] == [outfit["id"]]


def test_first_feed_page_is_cached(client, auth_headers, make_item, make_outfit, db_session):
    outfit = make_outfit([make_item()["id"]])
    _share(client, auth_headers, outfit["id"])
    assert len(client.get("/posts/feed", headers=auth_headers).json()["items"]) == 1

    # Written behind the API's back, so the warm cache does not see it
    me = client.get("/auth/me", headers=auth_headers).json()
    db_session.add(Post(user_id=me["id"], caption="Sneaky", image_url=IMAGE, outfit_id=outfit["id"], date=date.today()))
    db_session.commit()
    assert len(client.get("/posts/feed", headers=auth_headers).json()["items"]) == 1

    # Posting through the API invalidates it
    _share(client, auth_headers, outfit["id"])
    assert len(client.get("/posts/feed", headers=auth_headers).json()["items"]) == 3


def test_only_author_can_delete(client, auth_headers, register, make_item, make_outfit):
    outfit = make_outfit([make_item()["id"]])
    post = _share(client, auth_headers, outfit["id"]).json()

    other = register(email="other@example.com")
    response = client.delete(f"/posts/{post['id']}", headers=other)
    assert response.status_code == 403
    assert response.json()["error_code"] == "AUTHORIZATION_ERROR"

    assert client.delete(f"/posts/{post['id']}", headers=auth_headers).status_code == 204
    assert client.get("/posts/feed", headers=auth_headers).json()["items"] == []


def test_post_survives_outfit_deletion(client, auth_headers, make_item, make_outfit):
    outfit = make_outfit([make_item()["id"]])
    _share(client, auth_headers, outfit["id"])

    client.delete(f"/outfits/{outfit['id']}", headers=auth_headers)
    post = client.get("/posts/feed", headers=auth_headers).json()["items"][0]
    assert post["outfit_id"] is None
    assert post["outfit"] is None


def test_editing_outfit_refreshes_cached_feed(client, auth_headers, make_item, make_outfit):
    outfit = make_outfit([make_item(color="#FF0000")["id"]])
    _share(client, auth_headers, outfit["id"])

    before = client.get("/posts/feed", headers=auth_headers).json()["items"][0]["outfit"]
    assert before["color"] == "#FF0000"
    assert before["favorite"] is False

    client.patch(f"/outfits/{outfit['id']}", json={"color": "#123456"}, headers=auth_headers)
    assert client.get("/posts/feed", headers=auth_headers).json()["items"][0]["outfit"]["color"] == "#123456"

    client.post(f"/outfits/{outfit['id']}/favorite", headers=auth_headers)
    assert client.get("/posts/feed", headers=auth_headers).json()["items"][0]["outfit"]["favorite"] is True
