# storefront/data/models/coupon.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, Text, DateTime, Numeric, Boolean

from storefront.data.database import Base


class CouponModel(Base):
    __tablename__ = "coupons"

    id = Column(Integer, primary_key=True)
    code = Column(String, nullable=False, unique=True, index=True)  # stored uppercase
    name = Column(String, nullable=False)
    description = Column(Text)

    type = Column(String, nullable=False)  # percentage, fixed
    value = Column(Numeric(10, 2), nullable=False)
    minimum_amount = Column(Numeric(10, 2))
    max_discount = Column(Numeric(10, 2))  # percentage only

    usage_limit = Column(Integer)
    used_count = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    valid_from = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    valid_until = Column(DateTime(timezone=True))


class CouponUsageModel(Base):
    __tablename__ = "coupon_usages"

    id = Column(Integer, primary_key=True)
    coupon_id = Column(Integer, ForeignKey("coupons.id"), nullable=False, index=True)
    user_id = Column(Integer, nullable=False)
    order_id = Column(Integer, ForeignKey("orders.id"))
    used_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
