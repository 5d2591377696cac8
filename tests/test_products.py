"""Tests for product listings: feed, search, trending and owner-only edits."""

from datetime import datetime, timedelta
from decimal import Decimal

from vroommart.products.service import ProductService
from vroommart.schemas.product import ProductUpdate


def test_create_product_starts_with_zero_counters_and_normalized_tags(db_session, alice, make_product):
    product = make_product("alice", hashtags=["#Vintage", " shoes ", "vintage", ""])

    assert product.id is not None
    assert product.user_id == "alice"
    assert product.hashtags == ["vintage", "shoes"]
    assert (product.likes_count, product.shares_count, product.comments_count, product.views_count) == (0, 0, 0, 0)
    assert product.is_available is True


def test_feed_is_newest_first_and_skips_unavailable(db_session, alice, make_product):
    base = datetime(2024, 1, 1, 12, 0, 0)
    older = make_product("alice", "Older")
    newer = make_product("alice", "Newer")
    hidden = make_product("alice", "Hidden", is_available=False)
    older.created_at = base
    newer.created_at = base + timedelta(minutes=5)
    hidden.created_at = base + timedelta(minutes=10)
    db_session.commit()

    feed = ProductService.get_products(db_session, limit=10, offset=0)

    assert [p.title for p in feed] == ["Newer", "Older"]


def test_feed_pagination_does_not_repeat_rows(db_session, alice, make_product):
    base = datetime(2024, 1, 1)
    for i in range(5):
        product = make_product("alice", f"Item {i}")
        product.created_at = base + timedelta(minutes=i)
    db_session.commit()

    first = ProductService.get_products(db_session, limit=2, offset=0)
    second = ProductService.get_products(db_session, limit=2, offset=2)
    third = ProductService.get_products(db_session, limit=2, offset=4)

    titles = [p.title for p in first + second + third]
    assert titles == ["Item 4", "Item 3", "Item 2", "Item 1", "Item 0"]


def test_search_matches_text_and_hashtag(db_session, alice, make_product):
    make_product("alice", "Vintage shoe", hashtags=["vintage", "shoes"])
    make_product("alice", "Running shoe", hashtags=["sport"])
    make_product("alice", "Vintage lamp", hashtags=["vintage"])
    make_product("alice", "Old SHOE rack", hashtags=["vintage"], is_available=False)

    results = ProductService.search_products(db_session, "shoe", ["#Vintage"])

    assert [p.title for p in results] == ["Vintage shoe"]


def test_search_is_case_insensitive_over_description(db_session, alice, make_product):
    make_product("alice", "Jacket", description="Genuine LEATHER biker jacket")
    make_product("alice", "Scarf", description="Wool scarf")

    results = ProductService.search_products(db_session, "leather")

    assert [p.title for p in results] == ["Jacket"]


def test_trending_orders_by_likes_then_views(db_session, alice, make_product):
    a = make_product("alice", "A")
    b = make_product("alice", "B")
    c = make_product("alice", "C")
    make_product("alice", "D", is_available=False).likes_count = 100
    a.likes_count, a.views_count = 5, 1
    b.likes_count, b.views_count = 5, 9
    c.likes_count, c.views_count = 1, 50
    db_session.commit()

    trending = ProductService.get_trending_products(db_session, 2)

    assert [p.title for p in trending] == ["B", "A"]


def test_increment_views_and_shares(db_session, alice, make_product):
    product = make_product("alice")

    ProductService.increment_product_views(db_session, product.id)
    ProductService.increment_product_views(db_session, product.id)
    shared = ProductService.increment_product_shares(db_session, product.id)

    assert shared.views_count == 2
    assert shared.shares_count == 1


def test_update_product_renormalizes_hashtags(db_session, alice, make_product):
    product = make_product("alice", hashtags=["one"])

    updated = ProductService.update_product(
        db_session, product.id, ProductUpdate(price=Decimal("9.50"), hashtags=["#Two", "TWO"])
    )

    assert updated.price == Decimal("9.50")
    assert updated.hashtags == ["two"]
    assert updated.title == "Red sneakers"


def test_api_create_product(client, act_as, alice):
    act_as("alice")

    response = client.post(
        "/api/products",
        json={"title": "Camera", "description": "35mm film camera", "price": "120.00", "hashtags": ["#Film"]},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["user_id"] == "alice"
    assert body["hashtags"] == ["film"]
    assert Decimal(body["price"]) == Decimal("120.00")


def test_api_create_product_rejects_non_positive_price(client, act_as, alice):
    act_as("alice")

    response = client.post("/api/products", json={"title": "Free", "description": "x", "price": "0"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_api_create_product_requires_authentication(client):
    response = client.post("/api/products", json={"title": "Camera", "description": "x", "price": "1.00"})

    assert response.status_code == 401


def test_api_get_product_counts_a_view(client, alice, make_product):
    product = make_product("alice")

    response = client.get(f"/api/products/{product.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["views_count"] == 1
    assert body["user"]["id"] == "alice"


def test_api_missing_product_is_404(client):
    response = client.get("/api/products/00000000-0000-0000-0000-000000000000")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_api_only_owner_can_update_or_delete(client, act_as, alice, bob, make_product):
    product = make_product("alice")
    act_as("bob")

    assert client.put(f"/api/products/{product.id}", json={"title": "Mine now"}).status_code == 403
    assert client.delete(f"/api/products/{product.id}").status_code == 403

    act_as("alice")
    assert client.put(f"/api/products/{product.id}", json={"title": "Renamed"}).json()["title"] == "Renamed"
    assert client.delete(f"/api/products/{product.id}").status_code == 204
    assert client.get(f"/api/products/{product.id}").status_code == 404


def test_api_update_rejects_null_for_required_fields(client, act_as, alice, make_product):
    product = make_product("alice", "Lamp")
    act_as("alice")

    for field in ("title", "price", "stock", "is_available"):
        response = client.put(f"/api/products/{product.id}", json={field: None})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    cleared = client.put(f"/api/products/{product.id}", json={"category": None, "title": "Desk lamp"})
    assert cleared.status_code == 200
    assert cleared.json()["title"] == "Desk lamp"


def test_api_search_and_trending_routes(client, alice, make_product):
    make_product("alice", "Vintage shoe", hashtags=["vintage"])
    make_product("alice", "New shoe", hashtags=["new"])

    search = client.get("/api/products/search", params={"q": "shoe", "hashtags": ["vintage"]})
    trending = client.get("/api/products/trending", params={"limit": 1})

    assert [p["title"] for p in search.json()] == ["Vintage shoe"]
    assert len(trending.json()) == 1


def test_api_share_product(client, act_as, alice, bob, make_product):
    product = make_product("alice")
    act_as("bob")

    response = client.post(f"/api/products/{product.id}/share")

    assert response.status_code == 200
    assert response.json()["shares_count"] == 1
