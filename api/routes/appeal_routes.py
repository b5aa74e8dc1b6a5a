"""
Appeals against moderation actions.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from api.config import get_db
from api.models.models import Appeal, ModerationAction
from api.models.types import utcnow
from api.schemas.moderation_schemas import (
    AppealCreate,
    AppealRequest,
    AppealResponse,
    AppealReview,
    AppealUpdate,
)
from api.schemas.page_schemas import Page
from api.services.moderation_service import resolve_appeal
from api.utils.auth import STAFF_ROLES, Actor, require_roles
from api.utils.common import ensure_owner, get_or_404, new_id, paginate

appeal_routes = APIRouter()

member_actor = require_roles("member", allow_blocked=True)


def _filtered(query, req: AppealRequest):
    if req.status:
        query = query.filter(Appeal.status == req.status)
    if req.appellant_member_id:
        query = query.filter(Appeal.appellant_member_id == req.appellant_member_id)
    return query.order_by(Appeal.created_at.desc(), Appeal.id)


@appeal_routes.post("/member/appeals", response_model=AppealResponse)
async def create_appeal(
    req: AppealCreate,
    actor: Actor = Depends(member_actor),
    db: Session = Depends(get_db),
):
    action = get_or_404(db, ModerationAction, req.moderation_action_id)
    if action.target_member_id != actor.member_id:
        raise HTTPException(status_code=403, detail="Only the affected member may appeal this action")
    open_appeal = (
        db.query(Appeal)
        .filter(
            Appeal.moderation_action_id == action.id,
            Appeal.status == "pending",
            Appeal.deleted_at.is_(None),
        )
        .first()
    )
    if open_appeal is not None:
        raise HTTPException(status_code=409, detail="An appeal for this action is already pending")
    appeal = Appeal(
        id=new_id(),
        appellant_member_id=actor.member_id,
        moderation_action_id=action.id,
        reason=req.reason,
        status="pending",
    )
    db.add(appeal)
    db.commit()
    db.refresh(appeal)
    return appeal


@appeal_routes.put("/member/appeals/{appeal_id}", response_model=AppealResponse)
async def update_appeal(
    appeal_id: str,
    req: AppealUpdate,
    actor: Actor = Depends(member_actor),
    db: Session = Depends(get_db),
):
    appeal = get_or_404(db, Appeal, appeal_id)
    ensure_owner(appeal.appellant_member_id, actor.member_id, "appeal")
    if appeal.status != "pending":
        raise HTTPException(status_code=409, detail="Appeal has already been reviewed")
    appeal.reason = req.reason
    appeal.updated_at = utcnow()
    db.commit()
    db.refresh(appeal)
    return appeal


@appeal_routes.patch("/member/appeals", response_model=Page[AppealResponse])
async def index_own_appeals(
    req: AppealRequest,
    actor: Actor = Depends(member_actor),
    db: Session = Depends(get_db),
):
    """A member only ever sees their own appeals, whatever ``appellant_member_id`` says."""
    query = db.query(Appeal).filter(Appeal.appellant_member_id == actor.member_id, Appeal.deleted_at.is_(None))
    return paginate(_filtered(query, req), req, AppealResponse)


@appeal_routes.patch("/moderator/appeals", response_model=Page[AppealResponse])
async def index_appeals(
    req: AppealRequest,
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    query = db.query(Appeal).filter(Appeal.deleted_at.is_(None))
    return paginate(_filtered(query, req), req, AppealResponse)


@appeal_routes.get("/moderator/appeals/{appeal_id}", response_model=AppealResponse)
async def get_appeal(
    appeal_id: str,
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    return get_or_404(db, Appeal, appeal_id)


@appeal_routes.put("/moderator/appeals/{appeal_id}/review", response_model=AppealResponse)
async def review_appeal(
    appeal_id: str,
    req: AppealReview,
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    appeal = get_or_404(db, Appeal, appeal_id)
    if appeal.status != "pending":
        raise HTTPException(status_code=409, detail="Appeal has already been reviewed")
    now = utcnow()
    appeal.status = req.status
    appeal.resolution_comment = req.resolution_comment
    appeal.reviewed_by_role = actor.role
    appeal.reviewed_by_id = actor.id
    appeal.reviewed_at = now
    appeal.updated_at = now
    resolve_appeal(db, appeal)
    db.commit()
    db.refresh(appeal)
    return appeal


@appeal_routes.delete("/administrator/appeals/{appeal_id}", response_model=AppealResponse)
async def erase_appeal(
    appeal_id: str,
    actor: Actor = Depends(require_roles("administrator")),
    db: Session = Depends(get_db),
):
    appeal = get_or_404(db, Appeal, appeal_id)
    appeal.deleted_at = utcnow()
    db.commit()
    db.refresh(appeal)
    return appeal
