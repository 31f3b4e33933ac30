from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, Text, DateTime, Boolean, UniqueConstraint

from storefront.data.database import Base


class ReviewModel(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)

    rating = Column(Integer, nullable=False)
    comment = Column(Text)
    helpful_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))


class ReviewHelpfulModel(Base):
    __tablename__ = "review_helpful"

    id = Column(Integer, primary_key=True)
    review_id = Column(Integer, ForeignKey("reviews.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, nullable=False)
    is_helpful = Column(Boolean, nullable=False)

    __table_args__ = (UniqueConstraint("review_id", "user_id", name="u_review_vote"),)
