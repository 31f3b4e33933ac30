from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import DomainError
from storefront.domain.schemas import MessageOut, NotificationCreate, NotificationOut
from storefront.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/{user_id}", response_model=List[NotificationOut])
def list_notifications(
    user_id: int,
    unread_only: bool = Query(False),
    db: Session = Depends(get_db),
):
    return NotificationService(db).list_notifications(user_id, unread_only=unread_only)


@router.post("", response_model=NotificationOut, status_code=201)
def create_notification(payload: NotificationCreate, db: Session = Depends(get_db)):
    return NotificationService(db).create(
        user_id=payload.user_id,
        type=payload.type,
        title=payload.title,
        message=payload.message,
    )


@router.put("/{notification_id}/read", response_model=MessageOut)
def mark_read(notification_id: int, db: Session = Depends(get_db)):
    try:
        NotificationService(db).mark_read(notification_id)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return MessageOut(message="Notification marked as read")


@router.put("/user/{user_id}/read-all", response_model=MessageOut)
def mark_all_read(user_id: int, db: Session = Depends(get_db)):
    count = NotificationService(db).mark_all_read(user_id)
    return MessageOut(message=f"{count} notifications marked as read")
