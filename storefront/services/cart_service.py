from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import ConflictError, NotFoundError, ValidationError
from storefront.repos.cart_repo import CartRepo
from storefront.repos.catalog_repo import CatalogRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.money import line_total, to_money
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Cart aggregate: one open cart per user, line items with a price snapshot.
    commands (get_or_create, add, update, remove, clear) change state
    queries (total, item_count, get_cart) only read
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.catalog = CatalogRepo(db)
        self.users = UserRepo(db)

    #queries
    def total(self, cart: CartModel) -> Decimal:
        return line_total(self.repo.get_cart_items(cart.id))

    def item_count(self, cart: CartModel) -> int:
        return sum(i.quantity for i in self.repo.get_cart_items(cart.id))

    def items(self, cart: CartModel) -> list[CartItemModel]:
        return self.repo.get_cart_items(cart.id)

    def get_cart(self, user_id: int) -> Dict[str, Any]:
        cart = self.get_or_create_cart(user_id)
        items = self.repo.get_cart_items(cart.id)

        #dict shaped for CartOut
        return {
            "id": cart.id,
            "user_id": cart.user_id,
            "status": cart.status,
            "items": items,
            "total": line_total(items),
            "item_count": sum(i.quantity for i in items),
        }

    #commands
    def get_or_create_cart(self, user_id: int) -> CartModel:
        existing = self.repo.get_open_cart_by_user(user_id)
        if existing:
            return existing

        if not self.users.get_user(user_id):
            raise NotFoundError("User not found")

        created = self.repo.create_cart(CartModel(user_id=user_id, status="open"))
        logger.info(f"Created cart {created.id} for user {user_id}")
        return created

    def add_item(
        self,
        cart: CartModel,
        product_id: int,
        quantity: int,
        current_unit_price: Decimal,
    ) -> CartItemModel:
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        existing_item = self.repo.get_cart_item(cart.id, product_id)

        if existing_item:
            logger.info(
                f"Product {product_id} already in cart {cart.id}, quantity "
                f"{existing_item.quantity} -> {existing_item.quantity + quantity}"
            )
            # merge, the original price snapshot stays
            existing_item.quantity += quantity
            return self.repo.save_item(existing_item)

        logger.info(f"Adding product {product_id} to cart {cart.id} at {current_unit_price}")
        return self.repo.save_item(
            CartItemModel(
                cart_id=cart.id,
                user_id=cart.user_id,
                product_id=product_id,
                quantity=quantity,
                price_at_moment=to_money(current_unit_price),
            )
        )

    def add_product(
        self,
        user_id: int,
        product_id: int,
        quantity: int,
        cart_id: int | None = None,
        expected_price: Decimal | None = None,
    ) -> CartItemModel:
        """
        Add a catalog product at its current price.

        - cart_id, when given, must be the user's own cart
        - the product must exist in the catalog
        - expected_price, when given, must match the catalog price
        """
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        cart = self.get_or_create_cart(user_id)

        if cart_id is not None and cart_id != cart.id:
            other = self.repo.get_cart(cart_id)
            if not other:
                raise NotFoundError("Cart not found")
            if other.user_id != user_id:
                raise PermissionError("Cart belongs to another user")
            raise ValidationError("Cart is not open")

        product = self.catalog.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")

        current_price = to_money(product.price)
        if expected_price is not None and to_money(expected_price) != current_price:
            logger.warning(
                f"Stale price for product {product_id} from user {user_id}: "
                f"{to_money(expected_price)} != {current_price}"
            )
            raise ConflictError(f"Product price changed to {current_price}")

        return self.add_item(cart, product.id, quantity, current_price)

    def update_quantity(self, item_id: int, new_quantity: int) -> CartItemModel | None:
        """Returns the updated line, or None when it was removed."""
        item = self.repo.get_item(item_id)
        if not item:
            raise NotFoundError("Cart item not found")

        if new_quantity <= 0:
            self.remove_item(item_id)
            return None

        item.quantity = new_quantity
        logger.info(f"Cart item {item_id} quantity set to {new_quantity}")
        return self.repo.save_item(item)

    def remove_item(self, item_id: int) -> bool:
        removed = self.repo.delete_item(item_id) > 0
        if removed:
            logger.info(f"Cart item {item_id} removed")
        return removed

    def clear_cart(self, cart: CartModel) -> int:
        count = self.repo.clear_items(cart.id)
        logger.info(f"Cart {cart.id} cleared ({count} lines)")
        return count
