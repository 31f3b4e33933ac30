from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import DomainError
from storefront.domain.schemas import ReviewCreate, ReviewHelpfulIn, ReviewOut
from storefront.services.review_service import ReviewService

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("/{product_id}", response_model=List[ReviewOut])
def list_reviews(product_id: int, db: Session = Depends(get_db)):
    return ReviewService(db).list_reviews(product_id)


@router.post("", response_model=ReviewOut, status_code=201)
def add_review(payload: ReviewCreate, db: Session = Depends(get_db)):
    try:
        return ReviewService(db).add_review(
            payload.user_id, payload.product_id, payload.rating, payload.comment
        )
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/{review_id}/helpful", response_model=ReviewOut)
def mark_helpful(review_id: int, payload: ReviewHelpfulIn, db: Session = Depends(get_db)):
    try:
        return ReviewService(db).mark_helpful(review_id, payload.user_id, payload.is_helpful)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
