# storefront/services/coupon_service.py
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from sqlalchemy.orm import Session

from storefront.data.models.coupon import CouponModel, CouponUsageModel
from storefront.domain.errors import ConflictError, NotFoundError
from storefront.repos.coupon_repo import CouponRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.lock_service import LocalLockService, LockService
from storefront.utils.money import ZERO, to_money
from storefront.utils.settings import COUPON_LOCK_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CouponRejection(str, Enum):
    NOT_FOUND = "not_found"
    INACTIVE = "inactive"
    NOT_STARTED = "not_started"
    EXPIRED = "expired"
    EXHAUSTED = "exhausted"
    BELOW_MINIMUM = "below_minimum"


_MESSAGES = {
    None: "Coupon applied",
    CouponRejection.NOT_FOUND: "Coupon code not found",
    CouponRejection.INACTIVE: "Coupon is not active",
    CouponRejection.NOT_STARTED: "Coupon is not valid yet",
    CouponRejection.EXPIRED: "Coupon has expired",
    CouponRejection.EXHAUSTED: "Coupon usage limit reached",
    CouponRejection.BELOW_MINIMUM: "Order total does not meet the coupon minimum",
}


@dataclass(frozen=True)
class CouponValidation:
    valid: bool
    discount: Decimal
    coupon: CouponModel | None = None
    reason: CouponRejection | None = None

    @property
    def message(self) -> str:
        return _MESSAGES[self.reason]


def _as_utc(value: datetime) -> datetime:
    #sqlite hands back naive datetimes, everything is stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def compute_discount(coupon: CouponModel, order_total: Decimal) -> Decimal:
    order_total = to_money(order_total)
    value = Decimal(str(coupon.value))

    if coupon.type == "percentage":
        discount = order_total * value / Decimal("100")
        if coupon.max_discount is not None and discount > Decimal(str(coupon.max_discount)):
            discount = Decimal(str(coupon.max_discount))
    else:
        discount = value

    # a discount never exceeds what is being paid
    return to_money(min(discount, order_total))


class CouponService:
    """
    Coupon engine.
    validate - pure pipeline, first failing check wins
    apply - redemption, compare-and-increment of used_count
    """

    def __init__(self, db: Session, lock_service: LockService | LocalLockService | None = None):
        self.repo = CouponRepo(db)
        self.orders = OrderRepo(db)
        self.lock_service = lock_service if lock_service is not None else LocalLockService()

    #query
    def list_coupons(self, active_only: bool = True) -> list[CouponModel]:
        return self.repo.list_coupons(active_only=active_only)

    def get_coupon(self, code: str) -> CouponModel:
        coupon = self.repo.get_by_code(code.strip().upper())
        if not coupon:
            raise NotFoundError("Coupon not found")
        return coupon

    def validate(
        self,
        code: str,
        user_id: int,
        order_total: Decimal,
        now: datetime | None = None,
    ) -> CouponValidation:
        now = _as_utc(now or datetime.now(timezone.utc))
        order_total = to_money(order_total)

        coupon = self.repo.get_by_code(code.strip().upper())
        reason = self._rejection(coupon, order_total, now)

        if reason is not None:
            logger.info(f"Coupon {code!r} rejected for user {user_id}: {reason.value}")
            return CouponValidation(valid=False, discount=ZERO, reason=reason)

        discount = compute_discount(coupon, order_total)
        logger.info(f"Coupon {coupon.code} valid for user {user_id}, discount {discount}")
        return CouponValidation(valid=True, discount=discount, coupon=coupon)

    @staticmethod
    def _rejection(
        coupon: CouponModel | None,
        order_total: Decimal,
        now: datetime,
    ) -> CouponRejection | None:
        if coupon is None:
            return CouponRejection.NOT_FOUND

        if not coupon.is_active:
            return CouponRejection.INACTIVE

        if coupon.valid_from is not None and now < _as_utc(coupon.valid_from):
            return CouponRejection.NOT_STARTED

        if coupon.valid_until is not None and now > _as_utc(coupon.valid_until):
            return CouponRejection.EXPIRED

        if coupon.usage_limit is not None and coupon.used_count >= coupon.usage_limit:
            return CouponRejection.EXHAUSTED

        if coupon.minimum_amount is not None and order_total < to_money(coupon.minimum_amount):
            return CouponRejection.BELOW_MINIMUM

        return None

    #commands
    def apply(self, user_id: int, coupon_id: int, order_id: int | None = None) -> CouponUsageModel:
        """
        Redeem a coupon the caller has just validated.
        Does not re-validate; only the usage limit is enforced, atomically.
        """
        coupon = self.repo.get_coupon(coupon_id)
        if not coupon:
            raise NotFoundError("Coupon not found")

        if order_id is not None and not self.orders.get_order(order_id):
            raise NotFoundError("Order not found")

        token = f"{user_id}:{order_id or '-'}"

        locked = self.lock_service.acquire_coupon_lock(
            coupon_id=coupon_id,
            token=token,
            ttl=COUPON_LOCK_TTL_SECONDS,
        )
        if not locked:
            logger.warning(f"Coupon {coupon_id} redemption already in progress")
            raise ConflictError("Coupon redemption already in progress")

        try:
            # UPDATE coupons SET used_count = used_count + 1
            # WHERE id = :id AND (usage_limit IS NULL OR used_count < usage_limit)
            rowcount = self.repo.increment_usage(coupon_id)

            if rowcount == 0:
                self.repo.rollback()
                logger.warning(f"Coupon {coupon_id} exhausted, redemption by user {user_id} refused")
                raise ConflictError("Coupon usage limit reached")

            usage = self.repo.add_usage(
                CouponUsageModel(coupon_id=coupon_id, user_id=user_id, order_id=order_id)
            )
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise
        finally:
            self.lock_service.release_coupon_lock(coupon_id, token)

        self.repo.refresh(coupon)
        logger.info(
            f"Coupon {coupon.code} redeemed by user {user_id} (order {order_id}), "
            f"used {coupon.used_count}/{coupon.usage_limit}"
        )
        return usage
