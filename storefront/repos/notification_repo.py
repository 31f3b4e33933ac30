from sqlalchemy import select, update
from sqlalchemy.orm import Session

from storefront.data.models.notification import NotificationModel


class NotificationRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_by_user(self, user_id: int, unread_only: bool = False) -> list[NotificationModel]:
        stmt = select(NotificationModel).where(NotificationModel.user_id == user_id)
        if unread_only:
            stmt = stmt.where(NotificationModel.is_read.is_(False))
        stmt = stmt.order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def get(self, notification_id: int) -> NotificationModel | None:
        return self.db.get(NotificationModel, notification_id)

    def create(self, notification: NotificationModel) -> NotificationModel:
        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def mark_read(self, notification_id: int) -> int:
        result = self.db.execute(
            update(NotificationModel)
            .where(NotificationModel.id == notification_id)
            .values(is_read=True)
            .execution_options(synchronize_session="fetch")
        )
        self.db.commit()
        return result.rowcount

    def mark_all_read(self, user_id: int) -> int:
        result = self.db.execute(
            update(NotificationModel)
            .where(NotificationModel.user_id == user_id, NotificationModel.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session="fetch")
        )
        self.db.commit()
        return result.rowcount
