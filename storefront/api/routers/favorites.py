from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import DomainError
from storefront.domain.schemas import FavoriteIn, FavoriteOut, MessageOut
from storefront.services.favorite_service import FavoriteService

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("/{user_id}", response_model=List[FavoriteOut])
def list_favorites(user_id: int, db: Session = Depends(get_db)):
    return FavoriteService(db).list_favorites(user_id)


@router.post("", response_model=FavoriteOut)
def add_favorite(payload: FavoriteIn, db: Session = Depends(get_db)):
    try:
        return FavoriteService(db).add_favorite(payload.user_id, payload.product_id)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{user_id}/{product_id}", response_model=MessageOut)
def remove_favorite(user_id: int, product_id: int, db: Session = Depends(get_db)):
    FavoriteService(db).remove_favorite(user_id, product_id)
    return MessageOut(message="Favorite removed")
