# storefront/repos/coupon_repo.py
from sqlalchemy import select, update, or_
from sqlalchemy.orm import Session

from storefront.data.models.coupon import CouponModel, CouponUsageModel


class CouponRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_coupons(self, active_only: bool = False) -> list[CouponModel]:
        stmt = select(CouponModel).order_by(CouponModel.id)
        if active_only:
            stmt = stmt.where(CouponModel.is_active.is_(True))
        return list(self.db.execute(stmt).scalars().all())

    def get_coupon(self, coupon_id: int) -> CouponModel | None:
        return self.db.get(CouponModel, coupon_id)

    def get_by_code(self, code: str) -> CouponModel | None:
        return self.db.execute(
            select(CouponModel).where(CouponModel.code == code)
        ).scalar_one_or_none()

    def create_coupon(self, coupon: CouponModel) -> CouponModel:
        self.db.add(coupon)
        self.db.commit()
        self.db.refresh(coupon)
        return coupon

    def increment_usage(self, coupon_id: int) -> int:
        """
        Compare-and-increment in a single UPDATE.
        Returns rowcount: 0 means the limit was already reached.
        """
        result = self.db.execute(
            update(CouponModel)
            .where(
                CouponModel.id == coupon_id,
                or_(
                    CouponModel.usage_limit.is_(None),
                    CouponModel.used_count < CouponModel.usage_limit,
                ),
            )
            .values(used_count=CouponModel.used_count + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def add_usage(self, usage: CouponUsageModel) -> CouponUsageModel:
        self.db.add(usage)
        return usage

    def list_usages(self, coupon_id: int) -> list[CouponUsageModel]:
        stmt = select(CouponUsageModel).where(CouponUsageModel.coupon_id == coupon_id)
        return list(self.db.execute(stmt).scalars().all())

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    def refresh(self, coupon: CouponModel) -> CouponModel:
        self.db.refresh(coupon)
        return coupon
