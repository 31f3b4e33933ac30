# storefront/repos/catalog_repo.py
from sqlalchemy import select, or_, func
from sqlalchemy.orm import Session

from storefront.data.models.catalog import CategoryModel, ProductModel, ProductGalleryModel


class CatalogRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_products(self, category_id: int | None = None, search: str | None = None) -> list[ProductModel]:
        stmt = select(ProductModel).order_by(ProductModel.id)

        if category_id:
            stmt = stmt.where(ProductModel.category_id == category_id)

        if search:
            pattern = f"%{search.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(ProductModel.name).like(pattern),
                    func.lower(ProductModel.description).like(pattern),
                )
            )

        return list(self.db.execute(stmt).scalars().all())

    def first_products(self, limit: int) -> list[ProductModel]:
        stmt = select(ProductModel).order_by(ProductModel.id).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_galleries(self, product_id: int) -> list[ProductGalleryModel]:
        stmt = select(ProductGalleryModel).where(ProductGalleryModel.product_id == product_id)
        return list(self.db.execute(stmt).scalars().all())

    def list_categories(self) -> list[CategoryModel]:
        return list(self.db.execute(select(CategoryModel).order_by(CategoryModel.id)).scalars().all())

    def get_category(self, category_id: int) -> CategoryModel | None:
        return self.db.get(CategoryModel, category_id)

    def has_categories(self) -> bool:
        return self.db.execute(select(CategoryModel.id).limit(1)).first() is not None

    def add_all(self, rows: list) -> None:
        self.db.add_all(rows)
        self.db.commit()
