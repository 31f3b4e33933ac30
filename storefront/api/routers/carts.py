#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import DomainError
from storefront.domain.schemas import (
    CartAddIn,
    CartUpdateIn,
    CartItemOut,
    CartOut,
    MessageOut,
)
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("/{user_id}", response_model=CartOut)
def get_cart(user_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_cart(user_id)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/add", response_model=CartItemOut)
def add_item(payload: CartAddIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.add_product(
            user_id=payload.user_id,
            product_id=payload.product_id,
            quantity=payload.quantity,
            cart_id=payload.cart_id,
            expected_price=payload.price_at_moment,
        )
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/update/{item_id}", response_model=CartItemOut | MessageOut)
def update_item(item_id: int, payload: CartUpdateIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        item = svc.update_quantity(item_id, payload.quantity)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    if item is None:
        return MessageOut(message="Item removed from cart")
    return CartItemOut.model_validate(item)


@router.delete("/remove/{item_id}", response_model=MessageOut)
def remove_item(item_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    #aggregate is idempotent, the API still reports unknown ids
    if not svc.remove_item(item_id):
        raise HTTPException(status_code=404, detail="Cart item not found")
    return MessageOut(message="Item removed from cart")


@router.delete("/{user_id}", response_model=MessageOut)
def clear_cart(user_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        cart = svc.get_or_create_cart(user_id)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    svc.clear_cart(cart)
    return MessageOut(message="Cart cleared")
