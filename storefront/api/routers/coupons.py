# storefront/api/routers/coupons.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import DomainError
from storefront.domain.schemas import (
    CouponApplyIn,
    CouponOut,
    CouponValidateIn,
    CouponValidateOut,
    MessageOut,
)
from storefront.services.coupon_service import CouponService
from storefront.services.lock_service import build_lock_service

router = APIRouter(prefix="/coupons", tags=["coupons"])


def get_service(db: Session):
    return CouponService(db, lock_service=build_lock_service())


@router.get("", response_model=List[CouponOut])
def list_coupons(active_only: bool = Query(True), db: Session = Depends(get_db)):
    return get_service(db).list_coupons(active_only=active_only)


@router.get("/{code}", response_model=CouponOut)
def get_coupon(code: str, db: Session = Depends(get_db)):
    try:
        return get_service(db).get_coupon(code)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/validate", response_model=CouponValidateOut)
def validate_coupon(payload: CouponValidateIn, db: Session = Depends(get_db)):
    result = get_service(db).validate(payload.code, payload.user_id, payload.total)
    return CouponValidateOut(
        valid=result.valid,
        discount=result.discount,
        coupon=CouponOut.model_validate(result.coupon) if result.coupon else None,
        message=result.message,
    )


@router.post("/apply", response_model=MessageOut)
def apply_coupon(payload: CouponApplyIn, db: Session = Depends(get_db)):
    """
    Redeems a coupon validated just before.
    409 when the usage limit was reached in the meantime.
    """
    svc = get_service(db)
    try:
        svc.apply(payload.user_id, payload.coupon_id, payload.order_id)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return MessageOut(message="Coupon applied")
