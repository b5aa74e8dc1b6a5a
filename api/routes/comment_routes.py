"""
Comments under a post.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from api.config import get_db
from api.models.models import Comment, Post
from api.models.types import utcnow
from api.schemas.board_schemas import CommentCreate, CommentRequest, CommentResponse, CommentUpdate
from api.schemas.page_schemas import Page
from api.utils.auth import Actor, require_roles
from api.utils.common import ensure_owner, get_or_404, new_id, paginate

comment_routes = APIRouter()


def _comment_of(post_id: str, comment_id: str, db: Session) -> Comment:
    comment = get_or_404(db, Comment, comment_id)
    if comment.post_id != post_id:
        raise HTTPException(status_code=404, detail="Comment not found")
    return comment


@comment_routes.post("/member/posts/{post_id}/comments", response_model=CommentResponse)
async def create_comment(
    post_id: str,
    req: CommentCreate,
    actor: Actor = Depends(require_roles("member")),
    db: Session = Depends(get_db),
):
    post = get_or_404(db, Post, post_id)
    comment = Comment(id=new_id(), post_id=post.id, author_member_id=actor.member_id, content=req.content)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


@comment_routes.patch("/posts/{post_id}/comments", response_model=Page[CommentResponse])
async def index_comments(post_id: str, req: CommentRequest, db: Session = Depends(get_db)):
    get_or_404(db, Post, post_id)
    query = db.query(Comment).filter(Comment.post_id == post_id, Comment.deleted_at.is_(None))
    if req.author_member_id:
        query = query.filter(Comment.author_member_id == req.author_member_id)
    return paginate(query.order_by(Comment.created_at.asc(), Comment.id), req, CommentResponse)


@comment_routes.get("/posts/{post_id}/comments/{comment_id}", response_model=CommentResponse)
async def get_comment(post_id: str, comment_id: str, db: Session = Depends(get_db)):
    return _comment_of(post_id, comment_id, db)


@comment_routes.put("/member/posts/{post_id}/comments/{comment_id}", response_model=CommentResponse)
async def update_comment(
    post_id: str,
    comment_id: str,
    req: CommentUpdate,
    actor: Actor = Depends(require_roles("member")),
    db: Session = Depends(get_db),
):
    comment = _comment_of(post_id, comment_id, db)
    ensure_owner(comment.author_member_id, actor.member_id, "comment")
    if comment.is_locked:
        raise HTTPException(status_code=409, detail="Comment is locked")
    comment.content = req.content
    comment.updated_at = utcnow()
    db.commit()
    db.refresh(comment)
    return comment


@comment_routes.delete("/member/posts/{post_id}/comments/{comment_id}", response_model=CommentResponse)
async def erase_comment(
    post_id: str,
    comment_id: str,
    actor: Actor = Depends(require_roles("member")),
    db: Session = Depends(get_db),
):
    comment = _comment_of(post_id, comment_id, db)
    ensure_owner(comment.author_member_id, actor.member_id, "comment")
    comment.deleted_at = utcnow()
    db.commit()
    db.refresh(comment)
    return comment
