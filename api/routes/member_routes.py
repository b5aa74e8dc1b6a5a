"""
Administrator-only member management.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.config import get_db
from api.models.models import Member
from api.models.types import utcnow
from api.schemas.member_schemas import MemberRequest, MemberResponse, MemberUpdate
from api.schemas.page_schemas import Page
from api.utils.auth import Actor, require_roles
from api.utils.common import get_or_404, paginate, search_filter
from api.utils.logger import configure_logging

member_routes = APIRouter()
logger = configure_logging()


@member_routes.patch("/administrator/members", response_model=Page[MemberResponse])
async def index_members(
    req: MemberRequest,
    actor: Actor = Depends(require_roles("administrator")),
    db: Session = Depends(get_db),
):
    query = db.query(Member).filter(Member.deleted_at.is_(None))
    if req.status:
        query = query.filter(Member.status == req.status)
    nickname = search_filter(Member.nickname, req.nickname)
    if nickname is not None:
        query = query.filter(nickname)
    return paginate(query.order_by(Member.created_at.desc(), Member.id), req, MemberResponse)


@member_routes.get("/administrator/members/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: str,
    actor: Actor = Depends(require_roles("administrator")),
    db: Session = Depends(get_db),
):
    return get_or_404(db, Member, member_id)


@member_routes.put("/administrator/members/{member_id}", response_model=MemberResponse)
async def update_member(
    member_id: str,
    req: MemberUpdate,
    actor: Actor = Depends(require_roles("administrator")),
    db: Session = Depends(get_db),
):
    """Change a member's status (suspend, ban, reactivate)."""
    member = get_or_404(db, Member, member_id)
    member.status = req.status
    member.updated_at = utcnow()
    db.commit()
    db.refresh(member)
    logger.info("member status changed member_id=%s status=%s by=%s", member.id, member.status, actor.id)
    return member
