from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint

from storefront.data.database import Base


class FavoriteModel(Base):
    __tablename__ = "favorites"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "product_id", name="u_user_favorite"),)
