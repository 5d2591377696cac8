"""Tests for pay-on-delivery orders and cart checkout."""

import uuid
from decimal import Decimal

import pytest

from vroommart.cart.service import CartService
from vroommart.core.exceptions import InvalidOperationError
from vroommart.orders.service import OrderService
from vroommart.schemas.order import CreateOrderRequest, ShippingAddress

ADDRESS = {"country": "Egypt", "town": "Giza", "street": "12 Nile St", "details": "Flat 3"}


def _order_request(product_id, quantity=1):
    return CreateOrderRequest(product_id=product_id, quantity=quantity, shipping_address=ShippingAddress(**ADDRESS))


def test_create_order_takes_seller_and_total_from_product(db_session, alice, bob, make_product):
    product = make_product("alice", price=Decimal("12.25"))

    order = OrderService.create_order(db_session, "bob", _order_request(product.id, 3))

    assert order.buyer_id == "bob"
    assert order.seller_id == "alice"
    assert order.total_amount == Decimal("36.75")
    assert order.status == "pending"
    assert order.payment_method == "pay_on_delivery"
    assert order.shipping_address == ADDRESS


def test_create_order_for_missing_product_returns_none(db_session, bob):
    assert OrderService.create_order(db_session, "bob", _order_request(uuid.uuid4())) is None


def test_user_orders_by_role(db_session, alice, bob, make_product):
    product = make_product("alice")
    OrderService.create_order(db_session, "bob", _order_request(product.id))

    assert len(OrderService.get_user_orders(db_session, "bob", "buyer")) == 1
    assert OrderService.get_user_orders(db_session, "bob", "seller") == []
    assert len(OrderService.get_user_orders(db_session, "alice", "seller")) == 1


def test_status_update_accepts_any_known_status(db_session, alice, bob, make_product):
    product = make_product("alice")
    order = OrderService.create_order(db_session, "bob", _order_request(product.id))

    assert OrderService.update_order_status(db_session, order.id, "delivered").status == "delivered"
    assert OrderService.update_order_status(db_session, order.id, "pending").status == "pending"

    with pytest.raises(InvalidOperationError):
        OrderService.update_order_status(db_session, order.id, "teleported")


def test_checkout_creates_one_order_per_cart_item_and_empties_cart(db_session, alice, bob, carol, make_product):
    lamp = make_product("alice", "Lamp", price=Decimal("10.00"))
    rug = make_product("carol", "Rug", price=Decimal("5.00"))
    CartService.add_to_cart(db_session, "bob", lamp.id, 2)
    CartService.add_to_cart(db_session, "bob", rug.id, 1)

    orders = OrderService.checkout_cart(db_session, "bob", ShippingAddress(**ADDRESS))

    assert sorted((o.seller_id, o.total_amount) for o in orders) == [
        ("alice", Decimal("20.00")),
        ("carol", Decimal("5.00")),
    ]
    assert all(o.status == "pending" for o in orders)
    assert CartService.get_cart_items(db_session, "bob") == []


def test_checkout_with_empty_cart_is_rejected(db_session, bob):
    with pytest.raises(InvalidOperationError):
        OrderService.checkout_cart(db_session, "bob", ShippingAddress(**ADDRESS))


def test_checkout_rejects_unavailable_products_and_keeps_cart(db_session, alice, bob, make_product):
    product = make_product("alice")
    CartService.add_to_cart(db_session, "bob", product.id)
    product.is_available = False
    db_session.commit()

    with pytest.raises(InvalidOperationError):
        OrderService.checkout_cart(db_session, "bob", ShippingAddress(**ADDRESS))

    assert len(CartService.get_cart_items(db_session, "bob")) == 1


def test_api_order_flow(client, act_as, alice, bob, make_product):
    product = make_product("alice", price=Decimal("8.00"))
    act_as("bob")

    created = client.post(
        "/api/orders",
        json={"product_id": str(product.id), "quantity": 2, "shipping_address": ADDRESS},
    )
    assert created.status_code == 201
    order = created.json()
    assert order["seller_id"] == "alice"
    assert Decimal(order["total_amount"]) == Decimal("16.00")

    detail = client.get(f"/api/orders/{order['id']}").json()
    assert detail["buyer"]["id"] == "bob"
    assert detail["product"]["id"] == str(product.id)

    act_as("alice")
    assert [o["id"] for o in client.get("/api/orders", params={"type": "seller"}).json()] == [order["id"]]
    updated = client.put(f"/api/orders/{order['id']}/status", json={"status": "shipped"})
    assert updated.json()["status"] == "shipped"


def test_api_rejects_unknown_status_and_payment_method(client, act_as, alice, bob, make_product):
    product = make_product("alice")
    act_as("bob")

    bad_payment = client.post(
        "/api/orders",
        json={"product_id": str(product.id), "shipping_address": ADDRESS, "payment_method": "card"},
    )
    assert bad_payment.status_code == 400

    order_id = client.post("/api/orders", json={"product_id": str(product.id), "shipping_address": ADDRESS}).json()["id"]
    assert client.put(f"/api/orders/{order_id}/status", json={"status": "lost"}).status_code == 400


def test_api_non_participant_cannot_see_order(client, act_as, alice, bob, carol, make_product):
    product = make_product("alice")
    act_as("bob")
    order_id = client.post("/api/orders", json={"product_id": str(product.id), "shipping_address": ADDRESS}).json()["id"]

    act_as("carol")
    assert client.get(f"/api/orders/{order_id}").status_code == 403
    assert client.put(f"/api/orders/{order_id}/status", json={"status": "cancelled"}).status_code == 403


def test_api_checkout(client, act_as, alice, bob, make_product):
    product = make_product("alice")
    act_as("bob")
    client.post("/api/cart", json={"product_id": str(product.id), "quantity": 2})

    response = client.post("/api/orders/checkout", json={"shipping_address": ADDRESS})

    assert response.status_code == 201
    assert [o["quantity"] for o in response.json()] == [2]
    assert client.get("/api/cart").json() == []
    assert client.post("/api/orders/checkout", json={"shipping_address": ADDRESS}).status_code == 400
