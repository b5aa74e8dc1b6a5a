"""
Like/dislike reactions on comments. One live reaction per member and comment.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from api.config import get_db
from api.models.models import Comment, CommentReaction
from api.models.types import utcnow
from api.schemas.board_schemas import ReactionCreate, ReactionRequest, ReactionResponse
from api.schemas.page_schemas import Page
from api.utils.auth import Actor, require_roles
from api.utils.common import ensure_owner, get_or_404, new_id, paginate

reaction_routes = APIRouter()


@reaction_routes.post("/member/comment-reactions", response_model=ReactionResponse)
async def create_reaction(
    req: ReactionCreate,
    actor: Actor = Depends(require_roles("member")),
    db: Session = Depends(get_db),
):
    """React to someone else's comment; a soft-deleted earlier reaction is revived."""
    comment = get_or_404(db, Comment, req.comment_id)
    if comment.is_locked:
        raise HTTPException(status_code=409, detail="Comment is locked")
    if comment.author_member_id == actor.member_id:
        raise HTTPException(status_code=403, detail="Members cannot react to their own comments")

    prior = (
        db.query(CommentReaction)
        .filter(CommentReaction.member_id == actor.member_id, CommentReaction.comment_id == comment.id)
        .first()
    )
    now = utcnow()
    if prior is not None and prior.deleted_at is None:
        raise HTTPException(status_code=409, detail="You have already reacted to this comment")
    if prior is not None:
        prior.reaction_type = req.reaction_type
        prior.deleted_at = None
        prior.updated_at = now
        reaction = prior
    else:
        reaction = CommentReaction(
            id=new_id(),
            member_id=actor.member_id,
            comment_id=comment.id,
            reaction_type=req.reaction_type,
            created_at=now,
            updated_at=now,
        )
        db.add(reaction)
    db.commit()
    db.refresh(reaction)
    return reaction


@reaction_routes.patch("/member/comment-reactions", response_model=Page[ReactionResponse])
async def index_reactions(
    req: ReactionRequest,
    actor: Actor = Depends(require_roles("member")),
    db: Session = Depends(get_db),
):
    query = db.query(CommentReaction).filter(
        CommentReaction.member_id == actor.member_id, CommentReaction.deleted_at.is_(None)
    )
    if req.comment_id:
        query = query.filter(CommentReaction.comment_id == req.comment_id)
    if req.reaction_type:
        query = query.filter(CommentReaction.reaction_type == req.reaction_type)
    return paginate(query.order_by(CommentReaction.created_at.desc(), CommentReaction.id), req, ReactionResponse)


@reaction_routes.get("/member/comment-reactions/{reaction_id}", response_model=ReactionResponse)
async def get_reaction(
    reaction_id: str,
    actor: Actor = Depends(require_roles("member")),
    db: Session = Depends(get_db),
):
    reaction = get_or_404(db, CommentReaction, reaction_id)
    if reaction.member_id != actor.member_id:
        raise HTTPException(status_code=403, detail="Only the owner may view this reaction")
    return reaction


@reaction_routes.delete("/member/comment-reactions/{reaction_id}", response_model=ReactionResponse)
async def erase_reaction(
    reaction_id: str,
    actor: Actor = Depends(require_roles("member")),
    db: Session = Depends(get_db),
):
    reaction = get_or_404(db, CommentReaction, reaction_id)
    ensure_owner(reaction.member_id, actor.member_id, "reaction")
    reaction.deleted_at = utcnow()
    db.commit()
    db.refresh(reaction)
    return reaction
