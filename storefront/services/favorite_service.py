from sqlalchemy.orm import Session

from storefront.data.models.favorite import FavoriteModel
from storefront.domain.errors import NotFoundError
from storefront.repos.catalog_repo import CatalogRepo
from storefront.repos.favorite_repo import FavoriteRepo


class FavoriteService:
    def __init__(self, db: Session):
        self.repo = FavoriteRepo(db)
        self.catalog = CatalogRepo(db)

    def list_favorites(self, user_id: int) -> list[FavoriteModel]:
        return self.repo.list_by_user(user_id)

    def add_favorite(self, user_id: int, product_id: int) -> FavoriteModel:
        #idempotent, the same product twice returns the existing row
        existing = self.repo.get(user_id, product_id)
        if existing:
            return existing

        if not self.catalog.get_product(product_id):
            raise NotFoundError("Product not found")

        return self.repo.add(FavoriteModel(user_id=user_id, product_id=product_id))

    def remove_favorite(self, user_id: int, product_id: int) -> bool:
        return self.repo.remove(user_id, product_id) > 0
