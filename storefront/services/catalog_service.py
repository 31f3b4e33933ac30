from sqlalchemy.orm import Session

from storefront.data.models.catalog import CategoryModel, ProductModel
from storefront.domain.errors import NotFoundError
from storefront.repos.catalog_repo import CatalogRepo
from storefront.repos.review_repo import ReviewRepo
from storefront.utils.settings import FEATURED_PRODUCTS_LIMIT


class CatalogService:
    """Read-only product and category lookups."""

    def __init__(self, db: Session):
        self.repo = CatalogRepo(db)
        self.reviews = ReviewRepo(db)

    def list_products(self, category_id: int | None = None, search: str | None = None) -> list[ProductModel]:
        return self.repo.list_products(category_id=category_id, search=search)

    def featured_products(self) -> list[ProductModel]:
        return self.repo.first_products(FEATURED_PRODUCTS_LIMIT)

    def get_product(self, product_id: int) -> dict:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")

        return {
            **{c.name: getattr(product, c.name) for c in ProductModel.__table__.columns},
            "galleries": self.repo.get_galleries(product_id),
            "reviews": self.reviews.list_by_product(product_id),
        }

    def list_categories(self) -> list[CategoryModel]:
        return self.repo.list_categories()

    def get_category(self, category_id: int) -> CategoryModel:
        category = self.repo.get_category(category_id)
        if not category:
            raise NotFoundError("Category not found")
        return category
