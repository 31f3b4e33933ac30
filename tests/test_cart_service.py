from decimal import Decimal

import pytest

from storefront.data.models.catalog import ProductModel
from storefront.domain.errors import ConflictError, NotFoundError, ValidationError
from storefront.services.cart_service import CartService


def test_get_or_create_cart_returns_same_open_cart(db, user):
    svc = CartService(db)

    first = svc.get_or_create_cart(user.id)
    second = svc.get_or_create_cart(user.id)

    assert first.id == second.id
    assert first.status == "open"


def test_get_or_create_cart_unknown_user(db):
    with pytest.raises(NotFoundError):
        CartService(db).get_or_create_cart(999)


def test_add_same_product_twice_merges_lines(db, user):
    svc = CartService(db)
    cart = svc.get_or_create_cart(user.id)

    svc.add_item(cart, product_id=1, quantity=2, current_unit_price=Decimal("15.00"))
    svc.add_item(cart, product_id=1, quantity=3, current_unit_price=Decimal("15.00"))

    items = svc.items(cart)
    assert len(items) == 1
    assert items[0].quantity == 5
    assert svc.item_count(cart) == 5


def test_add_item_rejects_non_positive_quantity(db, user):
    svc = CartService(db)
    cart = svc.get_or_create_cart(user.id)

    with pytest.raises(ValidationError):
        svc.add_item(cart, product_id=1, quantity=0, current_unit_price=Decimal("15.00"))


def test_total_uses_price_snapshot_not_live_price(db, user):
    svc = CartService(db)

    svc.add_product(user.id, product_id=1, quantity=2)  # 15.00
    svc.add_product(user.id, product_id=3, quantity=1)  # 45.00

    product = db.get(ProductModel, 1)
    product.price = Decimal("99.00")
    db.commit()

    cart = svc.get_or_create_cart(user.id)
    assert svc.total(cart) == Decimal("75.00")

    # a merge keeps the captured price
    svc.add_product(user.id, product_id=1, quantity=1)
    assert svc.total(cart) == Decimal("90.00")


def test_total_is_decimal_precise(db, user):
    svc = CartService(db)
    cart = svc.get_or_create_cart(user.id)

    svc.add_item(cart, product_id=1, quantity=3, current_unit_price=Decimal("0.10"))
    svc.add_item(cart, product_id=2, quantity=1, current_unit_price=Decimal("0.20"))

    assert svc.total(cart) == Decimal("0.50")


def test_update_quantity_sets_value(db, user):
    svc = CartService(db)
    item = svc.add_product(user.id, product_id=2, quantity=1)

    updated = svc.update_quantity(item.id, 4)

    assert updated.quantity == 4


def test_update_quantity_to_zero_equals_remove(db, user):
    svc = CartService(db)
    cart = svc.get_or_create_cart(user.id)
    item = svc.add_product(user.id, product_id=2, quantity=1)

    assert svc.update_quantity(item.id, 0) is None
    assert svc.items(cart) == []


def test_update_quantity_unknown_item(db):
    with pytest.raises(NotFoundError):
        CartService(db).update_quantity(12345, 2)


def test_remove_item_is_idempotent(db, user):
    svc = CartService(db)
    item = svc.add_product(user.id, product_id=2, quantity=1)

    assert svc.remove_item(item.id) is True
    assert svc.remove_item(item.id) is False


def test_add_product_unknown_product(db, user):
    with pytest.raises(NotFoundError):
        CartService(db).add_product(user.id, product_id=404, quantity=1)


def test_add_product_into_someone_elses_cart(db, user, other_user):
    svc = CartService(db)
    foreign = svc.get_or_create_cart(other_user.id)

    with pytest.raises(PermissionError):
        svc.add_product(user.id, product_id=1, quantity=1, cart_id=foreign.id)


def test_add_product_with_matching_expected_price(db, user):
    item = CartService(db).add_product(user.id, product_id=2, quantity=1, expected_price=Decimal("12"))

    assert item.price_at_moment == Decimal("12.00")


def test_add_product_with_stale_expected_price(db, user):
    svc = CartService(db)
    cart = svc.get_or_create_cart(user.id)

    with pytest.raises(ConflictError):
        svc.add_product(user.id, product_id=2, quantity=1, expected_price=Decimal("10.00"))

    assert svc.items(cart) == []

def test_clear_cart(db, user):
    svc = CartService(db)
    cart = svc.get_or_create_cart(user.id)
    svc.add_product(user.id, product_id=1, quantity=1)
    svc.add_product(user.id, product_id=2, quantity=1)

    assert svc.clear_cart(cart) == 2
    assert svc.total(cart) == Decimal("0.00")
