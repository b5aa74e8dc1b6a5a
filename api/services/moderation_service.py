"""
Side effects of moderation decisions: content removal, member status changes
and the notifications that tell members about them.
"""

from fastapi import HTTPException
from sqlalchemy.orm import Session

from api.models.models import (
    Appeal,
    Comment,
    ContentReport,
    Member,
    ModerationAction,
    Notification,
    Post,
)
from api.models.types import utcnow
from api.utils.common import get_or_404, new_id
from api.utils.logger import configure_logging

logger = configure_logging()

STATUS_BY_ACTION = {"suspend": "suspended", "ban": "banned"}


def notify(db: Session, user_account_id: str, title: str, body: str) -> Notification:
    notification = Notification(id=new_id(), user_account_id=user_account_id, title=title, body=body)
    db.add(notification)
    return notification


def check_action_targets(db: Session, action: ModerationAction) -> None:
    """Referenced content must exist and belong to the target member."""
    target = get_or_404(db, Member, action.target_member_id)
    if action.post_id is not None:
        post = get_or_404(db, Post, action.post_id, include_deleted=True)
        if post.author_member_id != target.id:
            raise HTTPException(status_code=400, detail="Post does not belong to the target member")
    if action.comment_id is not None:
        comment = get_or_404(db, Comment, action.comment_id, include_deleted=True)
        if comment.author_member_id != target.id:
            raise HTTPException(status_code=400, detail="Comment does not belong to the target member")
    if action.report_id is not None:
        get_or_404(db, ContentReport, action.report_id)


def apply_action(db: Session, action: ModerationAction) -> None:
    """Carry out what the action says and notify the target member."""
    now = utcnow()
    target = db.get(Member, action.target_member_id)
    if action.action_type in ("hide", "remove"):
        if action.post_id is not None:
            post = db.get(Post, action.post_id)
            if action.action_type == "hide":
                post.business_status = "private"
            elif post.deleted_at is None:
                post.deleted_at = now
            post.updated_at = now
        if action.comment_id is not None:
            comment = db.get(Comment, action.comment_id)
            if action.action_type == "hide":
                comment.is_locked = True
            elif comment.deleted_at is None:
                comment.deleted_at = now
            comment.updated_at = now
    if action.action_type in STATUS_BY_ACTION:
        target.status = STATUS_BY_ACTION[action.action_type]
        target.updated_at = now
    if action.report_id is not None:
        report = db.get(ContentReport, action.report_id)
        report.status = "resolved"
        report.updated_at = now
    notify(
        db,
        target.user_account_id,
        title=f"Moderation action: {action.action_type}",
        body=action.reason,
    )
    logger.info(
        "moderation action applied action_id=%s type=%s target=%s",
        action.id,
        action.action_type,
        action.target_member_id,
    )


def resolve_appeal(db: Session, appeal: Appeal) -> None:
    """An accepted appeal against a suspension or ban reactivates the member."""
    action = db.get(ModerationAction, appeal.moderation_action_id)
    member = db.get(Member, appeal.appellant_member_id)
    if appeal.status == "accepted" and action.action_type in STATUS_BY_ACTION:
        member.status = "active"
        member.updated_at = utcnow()
    notify(
        db,
        member.user_account_id,
        title=f"Appeal {appeal.status}",
        body=appeal.resolution_comment or f"Your appeal was {appeal.status}.",
    )
