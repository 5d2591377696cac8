"""Tests for follow, like and bookmark edges and their counters."""

from vroommart.social.models import ProductLike
from vroommart.social.service import SocialService
from vroommart.products.service import ProductService
from vroommart.users.service import UserService
from vroommart.vrooms.service import VroomService
from vroommart.schemas.vroom import VroomCreate


def test_follow_and_unfollow_user_updates_both_counters(db_session, alice, bob):
    SocialService.follow_user(db_session, "alice", "bob")

    assert SocialService.is_following_user(db_session, "alice", "bob") is True
    assert SocialService.is_following_user(db_session, "bob", "alice") is False
    assert UserService.get_user(db_session, "alice").following_count == 1
    assert UserService.get_user(db_session, "bob").followers_count == 1

    SocialService.unfollow_user(db_session, "alice", "bob")

    assert SocialService.is_following_user(db_session, "alice", "bob") is False
    assert UserService.get_user(db_session, "alice").following_count == 0
    assert UserService.get_user(db_session, "bob").followers_count == 0


def test_repeated_follow_keeps_a_single_edge(db_session, alice, bob):
    first = SocialService.follow_user(db_session, "alice", "bob")
    second = SocialService.follow_user(db_session, "alice", "bob")

    assert first.id == second.id
    assert UserService.get_user(db_session, "bob").followers_count == 1


def test_follower_and_following_lists(db_session, alice, bob, carol):
    SocialService.follow_user(db_session, "alice", "carol")
    SocialService.follow_user(db_session, "bob", "carol")

    assert {u.id for u in UserService.get_user_followers(db_session, "carol")} == {"alice", "bob"}
    assert [u.id for u in UserService.get_user_following(db_session, "alice")] == ["carol"]


def test_like_then_unlike_restores_counter(db_session, alice, bob, make_product):
    product = make_product("alice")

    SocialService.like_product(db_session, "bob", product.id)
    assert ProductService.get_product(db_session, product.id).likes_count == 1
    assert SocialService.is_product_liked(db_session, "bob", product.id) is True

    SocialService.unlike_product(db_session, "bob", product.id)
    assert ProductService.get_product(db_session, product.id).likes_count == 0
    assert SocialService.is_product_liked(db_session, "bob", product.id) is False


def test_double_like_and_double_unlike_are_idempotent(db_session, alice, bob, make_product):
    product = make_product("alice")

    SocialService.like_product(db_session, "bob", product.id)
    SocialService.like_product(db_session, "bob", product.id)
    assert ProductService.get_product(db_session, product.id).likes_count == 1

    assert SocialService.unlike_product(db_session, "bob", product.id) is True
    assert SocialService.unlike_product(db_session, "bob", product.id) is False
    assert ProductService.get_product(db_session, product.id).likes_count == 0


def test_vroom_follow_adjusts_followers_count(db_session, alice, bob):
    vroom = VroomService.create_vroom(db_session, "alice", VroomCreate(name="Alice's garage"))

    SocialService.follow_vroom(db_session, "bob", vroom.id)
    SocialService.follow_vroom(db_session, "bob", vroom.id)
    assert VroomService.get_vroom(db_session, vroom.id).followers_count == 1
    assert SocialService.is_following_vroom(db_session, "bob", vroom.id) is True

    SocialService.unfollow_vroom(db_session, "bob", vroom.id)
    assert VroomService.get_vroom(db_session, vroom.id).followers_count == 0
    assert SocialService.is_following_vroom(db_session, "bob", vroom.id) is False


def test_bookmarks_listing(db_session, alice, bob, make_product):
    first = make_product("alice", "First")
    second = make_product("alice", "Second")

    SocialService.bookmark_product(db_session, "bob", first.id)
    SocialService.bookmark_product(db_session, "bob", second.id)
    SocialService.unbookmark_product(db_session, "bob", first.id)

    bookmarks = SocialService.get_user_bookmarks(db_session, "bob")
    assert [p.title for p in bookmarks] == ["Second"]
    assert SocialService.is_product_bookmarked(db_session, "bob", second.id) is True
    assert SocialService.is_product_bookmarked(db_session, "bob", first.id) is False


def test_api_follow_flow(client, act_as, alice, bob):
    act_as("alice")

    assert client.post("/api/users/bob/follow").status_code == 201
    assert client.get("/api/users/bob/follow-status").json() == {"is_following": True}
    assert client.get("/api/users/bob").json()["followers_count"] == 1

    assert client.delete("/api/users/bob/follow").status_code == 204
    assert client.get("/api/users/bob/follow-status").json() == {"is_following": False}


def test_api_cannot_follow_self(client, act_as, alice):
    act_as("alice")

    response = client.post("/api/users/alice/follow")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_OPERATION"


def test_api_follow_unknown_user_is_404(client, act_as, alice):
    act_as("alice")

    assert client.post("/api/users/nobody/follow").status_code == 404


def test_api_like_and_bookmark_status(client, act_as, alice, bob, make_product):
    product = make_product("alice")
    act_as("bob")

    assert client.post(f"/api/products/{product.id}/like").status_code == 201
    assert client.post(f"/api/products/{product.id}/bookmark").status_code == 201
    assert client.get(f"/api/products/{product.id}/like-status").json() == {"is_liked": True}
    assert client.get(f"/api/products/{product.id}/bookmark-status").json() == {"is_bookmarked": True}
    assert [p["id"] for p in client.get("/api/users/me/bookmarks").json()] == [str(product.id)]

    assert client.delete(f"/api/products/{product.id}/like").status_code == 204
    assert client.get(f"/api/products/{product.id}/like-status").json() == {"is_liked": False}


def test_like_that_loses_insert_race_returns_existing_edge(db_session, alice, bob, make_product, mocker):
    product = make_product("alice")
    existing = SocialService.like_product(db_session, "bob", product.id)
    # the pre-check misses, as if a concurrent request inserted the row in between
    mocker.patch.object(SocialService, "_find_like", side_effect=[None, existing])

    like = SocialService.like_product(db_session, "bob", product.id)

    assert like.id == existing.id
    assert db_session.query(ProductLike).count() == 1
    assert ProductService.get_product(db_session, product.id).likes_count == 1


def test_follow_that_loses_insert_race_returns_existing_edge(db_session, alice, bob, mocker):
    existing = SocialService.follow_user(db_session, "alice", "bob")
    mocker.patch.object(SocialService, "_find_follow", side_effect=[None, existing])

    follow = SocialService.follow_user(db_session, "alice", "bob")

    assert follow.id == existing.id
    assert UserService.get_user(db_session, "bob").followers_count == 1
