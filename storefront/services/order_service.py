# storefront/services/order_service.py
from decimal import Decimal
from typing import Iterable

from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel, OrderItemModel
from storefront.domain.errors import ConflictError, NotFoundError, ValidationError
from storefront.repos.address_repo import AddressRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.cart_service import CartService
from storefront.services.coupon_service import CouponService
from storefront.services.lock_service import LocalLockService, LockService
from storefront.services.notification_service import NotificationService
from storefront.utils.money import ZERO, line_total, to_money
from storefront.utils.settings import DEFAULT_CURRENCY
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# pending -> processing -> shipped -> delivered, cancel only before shipping
ALLOWED_TRANSITIONS = {
    "pending": {"processing", "cancelled"},
    "processing": {"shipped", "cancelled"},
    "shipped": {"delivered"},
    "delivered": set(),
    "cancelled": set(),
}


class OrderService:
    """
    Order domain, kept apart from the cart.
    create_order assembles an order from a frozen snapshot of cart lines,
    checkout is the full workflow around it.
    """

    def __init__(self, db: Session, lock_service: LockService | LocalLockService | None = None):
        self.db = db
        self.repo = OrderRepo(db)
        self.addresses = AddressRepo(db)
        self.carts = CartService(db)
        self.coupons = CouponService(db, lock_service=lock_service)
        self.notification_service = NotificationService(db)

    def create_order(
        self,
        user_id: int,
        address_id: int,
        cart_items: Iterable,
        discount: Decimal = ZERO,
        currency: str = DEFAULT_CURRENCY,
    ) -> OrderModel:
        """
        Use case: assemble an order.

        1. subtotal from the snapshot (price_at_moment x quantity)
        2. total = max(subtotal - discount, 0)
        3. persist as pending

        Never clears the cart and never touches product stock.
        """
        items = list(cart_items)
        if not items:
            raise ValidationError("Cannot create an order without items")

        address = self.addresses.get_address(address_id)
        if not address or address.user_id != user_id:
            raise ValidationError("Address does not belong to the user")

        subtotal = line_total(items)
        total = max(subtotal - to_money(discount), ZERO)

        order = OrderModel(
            user_id=user_id,
            address_id=address_id,
            total=to_money(total),
            currency=currency,
            status="pending",
            items=[
                OrderItemModel(
                    product_id=i.product_id,
                    quantity=i.quantity,
                    price=to_money(i.price_at_moment),
                )
                for i in items
            ],
        )

        created = self.repo.create_order(order)
        logger.info(
            f"Order {created.id} created for user {user_id}: subtotal {subtotal}, "
            f"discount {to_money(discount)}, total {created.total} {created.currency}"
        )
        return created

    def checkout(self, user_id: int, address_id: int, coupon_code: str | None = None) -> OrderModel:
        """
        Use case: checkout of the user's open cart.

        1. snapshot cart lines and subtotal
        2. validate the coupon against the subtotal
        3. assemble the order
        4. redeem the coupon, clear the cart, notify
        """
        cart = self.carts.get_or_create_cart(user_id)
        items = self.carts.items(cart)

        if not items:
            raise ValidationError("Cart is empty")

        discount = ZERO
        validation = None
        if coupon_code:
            validation = self.coupons.validate(coupon_code, user_id, line_total(items))
            if not validation.valid:
                raise ValidationError(validation.message)
            discount = validation.discount

        order = self.create_order(user_id, address_id, items, discount)

        if validation is not None:
            try:
                self.coupons.apply(user_id, validation.coupon.id, order.id)
            except ConflictError:
                #lost the redemption race, the discounted order must not stand
                self.repo.update_order_status(order.id, "cancelled")
                logger.warning(f"Order {order.id} cancelled, coupon {validation.coupon.code} exhausted")
                raise

        self.carts.clear_cart(cart)
        self.notification_service.notify_order_created(user_id, order.id, order.total, order.currency)

        return order

    def list_orders(self, user_id: int) -> list[OrderModel]:
        return self.repo.list_by_user(user_id)

    def get_order(self, order_id: int, user_id: int) -> OrderModel:
        """
        Use case: read an order (query).
        """
        order = self.repo.get_order(order_id)

        if not order:
            raise NotFoundError("Order not found")

        if order.user_id != user_id:
            raise PermissionError("Order belongs to another user")

        return order

    def update_status(self, order_id: int, status: str) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")

        if status not in ALLOWED_TRANSITIONS:
            raise ValidationError(f"Unknown order status {status!r}")

        if status not in ALLOWED_TRANSITIONS[order.status]:
            raise ConflictError(f"Cannot move order from {order.status} to {status}")

        previous = order.status
        updated = self.repo.update_order_status(order_id, status)
        logger.info(f"Order {order_id} status {previous} -> {status}")

        self.notification_service.create(
            user_id=order.user_id,
            type="order",
            title="Order update",
            message=f"Your order #{order_id} is now {status}",
        )
        return updated
