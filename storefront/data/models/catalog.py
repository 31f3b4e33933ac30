# storefront/data/models/catalog.py
from sqlalchemy import Column, Integer, ForeignKey, String, Text, Numeric, Boolean
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CategoryModel(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text)

    products = relationship("ProductModel", back_populates="category")


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)

    name = Column(String, nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    is_digital = Column(Boolean, nullable=False, default=False)
    recipe = Column(Text)
    magical_properties = Column(Text)

    category = relationship("CategoryModel", back_populates="products")
    galleries = relationship(
        "ProductGalleryModel",
        back_populates="product",
        cascade="all, delete-orphan",
    )


class ProductGalleryModel(Base):
    __tablename__ = "product_galleries"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    image_url = Column(String, nullable=False)
    alt_text = Column(String)

    product = relationship("ProductModel", back_populates="galleries")
