# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import DomainError
from storefront.domain.schemas import OrderCreate, OrderOut, OrderStatusIn
from storefront.services.lock_service import build_lock_service
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db, lock_service=build_lock_service())


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    db: Session = Depends(get_db),
):
    """
    Checkout of the user's open cart.
    Redeems the coupon, clears the cart and notifies the user.
    """
    svc = get_service(db)
    try:
        return svc.checkout(payload.user_id, payload.address_id, payload.coupon_code)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/user/{user_id}", response_model=List[OrderOut])
def list_orders(user_id: int, db: Session = Depends(get_db)):
    return get_service(db).list_orders(user_id)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user_id: int = Query(...),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.get_order(order_id, user_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{order_id}/status", response_model=OrderOut)
def update_status(order_id: int, payload: OrderStatusIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.update_status(order_id, payload.status.value)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
