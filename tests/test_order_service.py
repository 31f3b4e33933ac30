from decimal import Decimal

import pytest

from storefront.data.models.coupon import CouponModel, CouponUsageModel
from storefront.data.models.order import OrderModel
from storefront.domain.errors import ConflictError, NotFoundError, ValidationError
from storefront.repos.coupon_repo import CouponRepo
from storefront.services.cart_service import CartService
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService


def fill_cart(db, user_id):
    svc = CartService(db)
    svc.add_product(user_id, product_id=3, quantity=2)  # 90.00
    svc.add_product(user_id, product_id=4, quantity=1)  # 28.00
    cart = svc.get_or_create_cart(user_id)
    return svc, cart


def test_create_order_from_snapshot(db, user, address):
    carts, cart = fill_cart(db, user.id)

    order = OrderService(db).create_order(user.id, address.id, carts.items(cart), Decimal("18.00"))

    assert order.total == Decimal("100.00")
    assert order.status == "pending"
    assert order.currency == "MXN"
    assert [(i.product_id, i.quantity) for i in order.items] == [(3, 2), (4, 1)]
    # the assembler leaves the cart alone
    assert carts.item_count(cart) == 3


def test_create_order_total_never_negative(db, user, address):
    carts, cart = fill_cart(db, user.id)

    order = OrderService(db).create_order(user.id, address.id, carts.items(cart), Decimal("500.00"))

    assert order.total == Decimal("0.00")


def test_create_order_without_items(db, user, address):
    with pytest.raises(ValidationError):
        OrderService(db).create_order(user.id, address.id, [], Decimal("0"))


def test_create_order_with_foreign_address(db, user, other_user, address_factory):
    carts, cart = fill_cart(db, user.id)
    foreign = address_factory(other_user.id)

    with pytest.raises(ValidationError):
        OrderService(db).create_order(user.id, foreign.id, carts.items(cart), Decimal("0"))


def test_checkout_with_coupon(db, user, address):
    carts, cart = fill_cart(db, user.id)  # subtotal 118.00
    before = db.query(CouponModel).filter_by(code="BIENVENIDO10").one().used_count

    order = OrderService(db).checkout(user.id, address.id, coupon_code="bienvenido10")

    assert order.total == Decimal("106.20")
    assert carts.items(cart) == []
    coupon = db.query(CouponModel).filter_by(code="BIENVENIDO10").one()
    assert coupon.used_count == before + 1

    notifications = NotificationService(db).list_notifications(user.id)
    assert notifications[0].type == "order"
    assert f"#{order.id}" in notifications[0].message


def test_checkout_with_invalid_coupon_keeps_cart(db, user, address):
    carts, cart = fill_cart(db, user.id)

    with pytest.raises(ValidationError):
        OrderService(db).checkout(user.id, address.id, coupon_code="NOPE")

    assert carts.item_count(cart) == 3
    assert db.query(OrderModel).count() == 0


def test_checkout_cancels_order_when_coupon_runs_out(db, user, address, monkeypatch):
    carts, cart = fill_cart(db, user.id)
    before = db.query(CouponModel).filter_by(code="BIENVENIDO10").one().used_count
    # another checkout takes the last use between validate and apply
    monkeypatch.setattr(CouponRepo, "increment_usage", lambda self, coupon_id: 0)

    with pytest.raises(ConflictError):
        OrderService(db).checkout(user.id, address.id, coupon_code="BIENVENIDO10")

    order = db.query(OrderModel).one()
    assert order.status == "cancelled"
    assert order.total == Decimal("106.20")
    assert carts.item_count(cart) == 3
    assert db.query(CouponModel).filter_by(code="BIENVENIDO10").one().used_count == before
    assert db.query(CouponUsageModel).count() == 0

def test_checkout_empty_cart(db, user, address):
    with pytest.raises(ValidationError):
        OrderService(db).checkout(user.id, address.id)


def test_get_order_ownership(db, user, other_user, address):
    fill_cart(db, user.id)
    svc = OrderService(db)
    order = svc.checkout(user.id, address.id)

    assert svc.get_order(order.id, user.id).id == order.id
    assert [o.id for o in svc.list_orders(user.id)] == [order.id]
    with pytest.raises(PermissionError):
        svc.get_order(order.id, other_user.id)
    with pytest.raises(NotFoundError):
        svc.get_order(999, user.id)


def test_status_transitions(db, user, address):
    fill_cart(db, user.id)
    svc = OrderService(db)
    order = svc.checkout(user.id, address.id)

    assert svc.update_status(order.id, "processing").status == "processing"
    assert svc.update_status(order.id, "shipped").status == "shipped"

    with pytest.raises(ConflictError):
        svc.update_status(order.id, "cancelled")

    assert svc.update_status(order.id, "delivered").status == "delivered"
    # the total is immutable across transitions
    assert svc.get_order(order.id, user.id).total == Decimal("118.00")
