from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from storefront.data.models.favorite import FavoriteModel


class FavoriteRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_by_user(self, user_id: int) -> list[FavoriteModel]:
        stmt = select(FavoriteModel).where(FavoriteModel.user_id == user_id).order_by(FavoriteModel.id)
        return list(self.db.execute(stmt).scalars().all())

    def get(self, user_id: int, product_id: int) -> FavoriteModel | None:
        return self.db.execute(
            select(FavoriteModel).where(
                FavoriteModel.user_id == user_id,
                FavoriteModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add(self, favorite: FavoriteModel) -> FavoriteModel:
        self.db.add(favorite)
        self.db.commit()
        self.db.refresh(favorite)
        return favorite

    def remove(self, user_id: int, product_id: int) -> int:
        result = self.db.execute(
            delete(FavoriteModel).where(
                FavoriteModel.user_id == user_id,
                FavoriteModel.product_id == product_id,
            )
        )
        self.db.commit()
        return result.rowcount
