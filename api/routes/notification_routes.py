"""
Per-account notifications.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from api.config import get_db
from api.models.models import Notification, UserAccount
from api.models.types import utcnow
from api.schemas.moderation_schemas import (
    NotificationCreate,
    NotificationRequest,
    NotificationResponse,
    NotificationUpdate,
)
from api.schemas.page_schemas import Page
from api.services.moderation_service import notify
from api.utils.auth import Actor, get_current_actor, require_roles
from api.utils.common import get_or_404, paginate

notification_routes = APIRouter()


def _account_actor(actor: Actor = Depends(get_current_actor)) -> Actor:
    if actor.user_account_id is None:
        raise HTTPException(status_code=403, detail="Guests have no notifications")
    return actor


def _own_notification(notification_id: str, actor: Actor, db: Session) -> Notification:
    notification = get_or_404(db, Notification, notification_id)
    if notification.user_account_id != actor.user_account_id:
        raise HTTPException(status_code=403, detail="Not your notification")
    return notification


@notification_routes.post("/administrator/notifications", response_model=NotificationResponse)
async def create_notification(
    req: NotificationCreate,
    actor: Actor = Depends(require_roles("administrator")),
    db: Session = Depends(get_db),
):
    get_or_404(db, UserAccount, req.user_account_id, label="User account")
    notification = notify(db, req.user_account_id, req.title, req.body)
    db.commit()
    db.refresh(notification)
    return notification


@notification_routes.patch("/notifications", response_model=Page[NotificationResponse])
async def index_notifications(
    req: NotificationRequest,
    actor: Actor = Depends(_account_actor),
    db: Session = Depends(get_db),
):
    query = db.query(Notification).filter(Notification.user_account_id == actor.user_account_id)
    if req.unread is True:
        query = query.filter(Notification.read_at.is_(None))
    elif req.unread is False:
        query = query.filter(Notification.read_at.is_not(None))
    return paginate(query.order_by(Notification.created_at.desc(), Notification.id), req, NotificationResponse)


@notification_routes.get("/notifications/{notification_id}", response_model=NotificationResponse)
async def get_notification(
    notification_id: str,
    actor: Actor = Depends(_account_actor),
    db: Session = Depends(get_db),
):
    return _own_notification(notification_id, actor, db)


@notification_routes.put("/notifications/{notification_id}", response_model=NotificationResponse)
async def update_notification(
    notification_id: str,
    req: NotificationUpdate,
    actor: Actor = Depends(_account_actor),
    db: Session = Depends(get_db),
):
    notification = _own_notification(notification_id, actor, db)
    notification.read_at = utcnow() if req.read else None
    db.commit()
    db.refresh(notification)
    return notification
