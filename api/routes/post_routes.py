"""
Posts: member authoring, staff edits, edit history and soft delete.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session

from api.config import get_db
from api.models.models import Post, PostEditHistory, Thread
from api.models.types import utcnow
from api.schemas.board_schemas import (
    PostCreate,
    PostHistoryResponse,
    PostRequest,
    PostResponse,
    PostUpdate,
)
from api.schemas.page_schemas import Page
from api.utils.auth import STAFF_ROLES, Actor, get_optional_actor, require_roles
from api.utils.common import ensure_owner, get_or_404, new_id, paginate, search_filter

post_routes = APIRouter()


def _visible_post(post_id: str, actor: Optional[Actor], db: Session) -> Post:
    """Deleted posts stay readable by staff; private posts only by their author and staff."""
    post = get_or_404(db, Post, post_id, include_deleted=actor is not None and actor.is_staff)
    if post.business_status == "private" and not (
        actor is not None and (actor.is_staff or actor.member_id == post.author_member_id)
    ):
        raise HTTPException(status_code=404, detail="Post not found")
    return post


def _apply_update(post: Post, req: PostUpdate, actor: Actor, db: Session) -> Post:
    db.add(
        PostEditHistory(
            id=new_id(),
            post_id=post.id,
            editor_role=actor.role,
            editor_id=actor.id,
            title=post.title,
            body=post.body,
        )
    )
    if req.title is not None:
        post.title = req.title
    if req.body is not None:
        post.body = req.body
    if req.business_status is not None:
        post.business_status = req.business_status
    post.updated_at = utcnow()
    db.commit()
    db.refresh(post)
    return post


@post_routes.post("/member/posts", response_model=PostResponse)
async def create_post(
    req: PostCreate,
    actor: Actor = Depends(require_roles("member")),
    db: Session = Depends(get_db),
):
    if req.thread_id is not None:
        get_or_404(db, Thread, req.thread_id)
    post = Post(
        id=new_id(),
        thread_id=req.thread_id,
        author_member_id=actor.member_id,
        title=req.title,
        body=req.body,
        business_status=req.business_status,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


@post_routes.patch("/posts", response_model=Page[PostResponse])
async def index_posts(
    req: PostRequest,
    actor: Optional[Actor] = Depends(get_optional_actor),
    db: Session = Depends(get_db),
):
    query = db.query(Post).filter(Post.deleted_at.is_(None))
    if actor is None or not actor.is_staff:
        own = actor.member_id if actor is not None else None
        query = query.filter(or_(Post.business_status == "public", Post.author_member_id == own))
    if req.thread_id:
        query = query.filter(Post.thread_id == req.thread_id)
    if req.author_member_id:
        query = query.filter(Post.author_member_id == req.author_member_id)
    title = search_filter(Post.title, req.search)
    if title is not None:
        query = query.filter(title)
    return paginate(query.order_by(Post.created_at.desc(), Post.id), req, PostResponse)


@post_routes.get("/posts/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    actor: Optional[Actor] = Depends(get_optional_actor),
    db: Session = Depends(get_db),
):
    return _visible_post(post_id, actor, db)


@post_routes.get("/posts/{post_id}/histories", response_model=list[PostHistoryResponse])
async def get_post_histories(
    post_id: str,
    actor: Optional[Actor] = Depends(get_optional_actor),
    db: Session = Depends(get_db),
):
    """Edit history, oldest first. Each entry holds the content before that edit."""
    post = _visible_post(post_id, actor, db)
    return (
        db.query(PostEditHistory)
        .filter(PostEditHistory.post_id == post.id)
        .order_by(PostEditHistory.created_at.asc(), PostEditHistory.id)
        .all()
    )


@post_routes.put("/member/posts/{post_id}", response_model=PostResponse)
async def update_own_post(
    post_id: str,
    req: PostUpdate,
    actor: Actor = Depends(require_roles("member")),
    db: Session = Depends(get_db),
):
    post = get_or_404(db, Post, post_id)
    ensure_owner(post.author_member_id, actor.member_id, "post")
    return _apply_update(post, req, actor, db)


@post_routes.put("/moderator/posts/{post_id}", response_model=PostResponse)
async def update_any_post(
    post_id: str,
    req: PostUpdate,
    actor: Actor = Depends(require_roles(*STAFF_ROLES)),
    db: Session = Depends(get_db),
):
    post = get_or_404(db, Post, post_id)
    return _apply_update(post, req, actor, db)


@post_routes.delete("/member/posts/{post_id}", response_model=PostResponse)
async def erase_post(
    post_id: str,
    actor: Actor = Depends(require_roles("member")),
    db: Session = Depends(get_db),
):
    """Soft delete: content is kept for audit, ``deleted_at`` is stamped."""
    post = get_or_404(db, Post, post_id)
    ensure_owner(post.author_member_id, actor.member_id, "post")
    post.deleted_at = utcnow()
    db.commit()
    db.refresh(post)
    return post
