# storefront/services/notification_service.py
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.celery_worker import celery_app
from storefront.data.models.notification import NotificationModel
from storefront.domain.errors import NotFoundError
from storefront.repos.notification_repo import NotificationRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    In-app notifications.
    Rows are written in the request; delivery goes through Celery.
    """

    def __init__(self, db: Session):
        self.repo = NotificationRepo(db)

    def list_notifications(self, user_id: int, unread_only: bool = False) -> list[NotificationModel]:
        return self.repo.list_by_user(user_id, unread_only=unread_only)

    def create(self, user_id: int, title: str, message: str, type: str = "info") -> NotificationModel:
        notification = self.repo.create(
            NotificationModel(user_id=user_id, type=type, title=title, message=message)
        )
        send_notification_task.delay(notification.id, user_id, title)
        return notification

    def mark_read(self, notification_id: int) -> None:
        if self.repo.mark_read(notification_id) == 0:
            raise NotFoundError("Notification not found")

    def mark_all_read(self, user_id: int) -> int:
        return self.repo.mark_all_read(user_id)

    def notify_order_created(self, user_id: int, order_id: int, total: Decimal, currency: str):
        """
        Order confirmation for the customer.
        """
        return self.create(
            user_id=user_id,
            type="order",
            title="Order received",
            message=f"Order #{order_id} for {total} {currency} is pending",
        )


@celery_app.task(name="storefront.services.notification_service.send_notification_task")
def send_notification_task(notification_id: int, user_id: int, title: str):
    """
    Celery task - a real deployment would push email/SMS/web push here.
    For now it only logs.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: {title} (#{notification_id})")

    return {"notification_id": notification_id, "user_id": user_id, "status": "sent"}
