"""
Up/down votes on posts.
"""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from api.config import get_db
from api.models.models import Post, Vote
from api.schemas.board_schemas import VoteCreate, VoteRequest, VoteResponse
from api.schemas.page_schemas import Page
from api.utils.auth import Actor, require_roles
from api.utils.common import ensure_owner, get_or_404, new_id, paginate

vote_routes = APIRouter()


@vote_routes.post("/member/votes", response_model=VoteResponse)
async def create_vote(
    req: VoteCreate,
    actor: Actor = Depends(require_roles("member")),
    db: Session = Depends(get_db),
):
    post = get_or_404(db, Post, req.post_id)
    if db.query(Vote).filter(Vote.member_id == actor.member_id, Vote.post_id == post.id).first():
        raise HTTPException(status_code=409, detail="Already voted on this post")
    vote = Vote(id=new_id(), member_id=actor.member_id, post_id=post.id, vote_type=req.vote_type)
    db.add(vote)
    db.commit()
    db.refresh(vote)
    return vote


@vote_routes.patch("/member/votes", response_model=Page[VoteResponse])
async def index_votes(
    req: VoteRequest,
    actor: Actor = Depends(require_roles("member")),
    db: Session = Depends(get_db),
):
    query = db.query(Vote).filter(Vote.member_id == actor.member_id)
    if req.post_id:
        query = query.filter(Vote.post_id == req.post_id)
    if req.vote_type:
        query = query.filter(Vote.vote_type == req.vote_type)
    return paginate(query.order_by(Vote.created_at.desc(), Vote.id), req, VoteResponse)


@vote_routes.delete("/member/votes/{vote_id}", status_code=204)
async def erase_vote(
    vote_id: str,
    actor: Actor = Depends(require_roles("member")),
    db: Session = Depends(get_db),
) -> Response:
    vote = get_or_404(db, Vote, vote_id)
    ensure_owner(vote.member_id, actor.member_id, "vote")
    db.delete(vote)
    db.commit()
    return Response(status_code=204)
