import uuid
from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session, select, update

from nagarconnect.core.errors import NotFound
from nagarconnect.db.db import get_session
from nagarconnect.models.notification import Notification
from nagarconnect.models.user import User
from nagarconnect.schemas.notification_schemas import NotificationRead
from nagarconnect.utils.auth_helper import get_current_user_required


router = APIRouter()


@router.get("", response_model=List[NotificationRead])
def list_notifications(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
):
    return session.exec(
        select(Notification)
        .where(Notification.user_id == current_user.id)
        .order_by(Notification.created_at.desc())
    ).all()


@router.get("/unread-count")
def unread_count(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
):
    unread = session.exec(
        select(Notification.id).where(
            Notification.user_id == current_user.id,
            Notification.is_read.is_(False),
        )
    ).all()
    return {"unread": len(unread)}


@router.post("/{notification_id}/read", response_model=NotificationRead)
def mark_read(
    notification_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
):
    notification = session.get(Notification, notification_id)
    if not notification or notification.user_id != current_user.id:
        raise NotFound("notification_not_found")

    notification.is_read = True
    session.add(notification)
    session.commit()
    session.refresh(notification)
    return notification


@router.post("/read-all")
def mark_all_read(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
):
    result = session.exec(
        update(Notification)
        .where(
            Notification.user_id == current_user.id,
            Notification.is_read.is_(False),
        )
        .values(is_read=True)
    )
    session.commit()
    return {"updated": result.rowcount}
