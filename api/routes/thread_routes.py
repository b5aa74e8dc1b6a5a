"""
Discussion threads: public browse, member-owned create/update/soft delete.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.config import get_db
from api.models.models import Thread
from api.models.types import utcnow
from api.schemas.board_schemas import ThreadCreate, ThreadRequest, ThreadResponse, ThreadUpdate
from api.schemas.page_schemas import Page
from api.utils.auth import Actor, require_roles
from api.utils.common import ensure_owner, get_or_404, new_id, paginate, search_filter

thread_routes = APIRouter()


@thread_routes.post("/member/threads", response_model=ThreadResponse)
async def create_thread(
    req: ThreadCreate,
    actor: Actor = Depends(require_roles("member")),
    db: Session = Depends(get_db),
):
    thread = Thread(id=new_id(), author_member_id=actor.member_id, title=req.title)
    db.add(thread)
    db.commit()
    db.refresh(thread)
    return thread


@thread_routes.patch("/threads", response_model=Page[ThreadResponse])
async def index_threads(req: ThreadRequest, db: Session = Depends(get_db)):
    """Public search over live threads."""
    query = db.query(Thread).filter(Thread.deleted_at.is_(None))
    if req.author_member_id:
        query = query.filter(Thread.author_member_id == req.author_member_id)
    title = search_filter(Thread.title, req.search)
    if title is not None:
        query = query.filter(title)
    return paginate(query.order_by(Thread.created_at.desc(), Thread.id), req, ThreadResponse)


@thread_routes.get("/threads/{thread_id}", response_model=ThreadResponse)
async def get_thread(thread_id: str, db: Session = Depends(get_db)):
    return get_or_404(db, Thread, thread_id)


@thread_routes.put("/member/threads/{thread_id}", response_model=ThreadResponse)
async def update_thread(
    thread_id: str,
    req: ThreadUpdate,
    actor: Actor = Depends(require_roles("member")),
    db: Session = Depends(get_db),
):
    thread = get_or_404(db, Thread, thread_id)
    ensure_owner(thread.author_member_id, actor.member_id, "thread")
    thread.title = req.title
    thread.updated_at = utcnow()
    db.commit()
    db.refresh(thread)
    return thread


@thread_routes.delete("/member/threads/{thread_id}", response_model=ThreadResponse)
async def erase_thread(
    thread_id: str,
    actor: Actor = Depends(require_roles("member")),
    db: Session = Depends(get_db),
):
    thread = get_or_404(db, Thread, thread_id)
    ensure_owner(thread.author_member_id, actor.member_id, "thread")
    thread.deleted_at = utcnow()
    db.commit()
    db.refresh(thread)
    return thread
