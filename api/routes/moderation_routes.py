"""
Content reports (filed by members) and moderation actions (taken by staff).
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from api.config import get_db
from api.models.models import Comment, ContentReport, ModerationAction, Post
from api.models.types import utcnow
from api.schemas.moderation_schemas import (
    ModerationActionCreate,
    ModerationActionRequest,
    ModerationActionResponse,
    ModerationActionUpdate,
    ReportCreate,
    ReportRequest,
    ReportResponse,
)
from api.schemas.page_schemas import Page
from api.services.moderation_service import apply_action, check_action_targets
from api.utils.auth import STAFF_ROLES, Actor, require_roles
from api.utils.common import get_or_404, new_id, paginate

moderation_routes = APIRouter()


@moderation_routes.post("/member/content-reports", response_model=ReportResponse)
async def create_report(
    req: ReportCreate,
    actor: Actor = Depends(require_roles("member")),
    db: Session = Depends(get_db),
):
    if req.post_id is not None:
        get_or_404(db, Post, req.post_id)
        target = ContentReport.post_id == req.post_id
    else:
        get_or_404(db, Comment, req.comment_id)
        target = ContentReport.comment_id == req.comment_id
    if db.query(ContentReport).filter(ContentReport.reporter_member_id == actor.member_id, target).first():
        raise HTTPException(status_code=409, detail="You have already reported this content")
    report = ContentReport(
        id=new_id(),
        reporter_member_id=actor.member_id,
        post_id=req.post_id,
        comment_id=req.comment_id,
        reason=req.reason,
        status="open",
    )
    db.add(report)
    db.commit()
    db.refresh(report)
    return report


@moderation_routes.patch("/moderator/content-reports", response_model=Page[ReportResponse])
async def index_reports(
    req: ReportRequest,
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    query = db.query(ContentReport)
    if req.status:
        query = query.filter(ContentReport.status == req.status)
    return paginate(query.order_by(ContentReport.created_at.desc(), ContentReport.id), req, ReportResponse)


@moderation_routes.get("/moderator/content-reports/{report_id}", response_model=ReportResponse)
async def get_report(
    report_id: str,
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    return get_or_404(db, ContentReport, report_id)


@moderation_routes.post("/moderator/moderation-actions", response_model=ModerationActionResponse)
async def create_moderation_action(
    req: ModerationActionCreate,
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    action = ModerationAction(
        id=new_id(),
        actor_role=actor.role,
        actor_id=actor.id,
        target_member_id=req.target_member_id,
        action_type=req.action_type,
        reason=req.reason,
        post_id=req.post_id,
        comment_id=req.comment_id,
        report_id=req.report_id,
    )
    check_action_targets(db, action)
    db.add(action)
    apply_action(db, action)
    db.commit()
    db.refresh(action)
    return action


@moderation_routes.patch("/moderator/moderation-actions", response_model=Page[ModerationActionResponse])
async def index_moderation_actions(
    req: ModerationActionRequest,
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    query = db.query(ModerationAction)
    if req.action_type:
        query = query.filter(ModerationAction.action_type == req.action_type)
    if req.target_member_id:
        query = query.filter(ModerationAction.target_member_id == req.target_member_id)
    return paginate(
        query.order_by(ModerationAction.created_at.desc(), ModerationAction.id), req, ModerationActionResponse
    )


@moderation_routes.get("/moderator/moderation-actions/{action_id}", response_model=ModerationActionResponse)
async def get_moderation_action(
    action_id: str,
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    return get_or_404(db, ModerationAction, action_id)


@moderation_routes.put("/administrator/moderation-actions/{action_id}", response_model=ModerationActionResponse)
async def update_moderation_action(
    action_id: str,
    req: ModerationActionUpdate,
    actor: Actor = Depends(require_roles("administrator")),
    db: Session = Depends(get_db),
):
    action = get_or_404(db, ModerationAction, action_id)
    action.reason = req.reason
    action.updated_at = utcnow()
    db.commit()
    db.refresh(action)
    return action
