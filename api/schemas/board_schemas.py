"""
Thread, post, comment, reaction and vote schemas.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from api.schemas.page_schemas import OrmModel, PageRequest

BusinessStatus = Literal["public", "private"]
ReactionType = Literal["like", "dislike"]
VoteType = Literal["up", "down"]


class ThreadCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)


class ThreadUpdate(BaseModel):
    title: str = Field(min_length=1, max_length=200)


class ThreadResponse(OrmModel):
    id: str
    author_member_id: str
    title: str
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


class ThreadRequest(PageRequest):
    author_member_id: Optional[str] = None
    search: Optional[str] = None


class PostCreate(BaseModel):
    title: str = Field(min_length=5, max_length=150)
    body: str = Field(min_length=10, max_length=10_000)
    thread_id: Optional[str] = None
    business_status: BusinessStatus = "public"


class PostUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=5, max_length=150)
    body: Optional[str] = Field(default=None, min_length=10, max_length=10_000)
    business_status: Optional[BusinessStatus] = None


class PostResponse(OrmModel):
    id: str
    thread_id: Optional[str] = None
    author_member_id: str
    title: str
    body: str
    business_status: BusinessStatus
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


class PostRequest(PageRequest):
    thread_id: Optional[str] = None
    author_member_id: Optional[str] = None
    search: Optional[str] = None


class PostHistoryResponse(OrmModel):
    id: str
    post_id: str
    editor_role: str
    editor_id: str
    title: str
    body: str
    created_at: datetime


class CommentCreate(BaseModel):
    content: str = Field(min_length=1, max_length=5_000)


class CommentUpdate(BaseModel):
    content: str = Field(min_length=1, max_length=5_000)


class CommentResponse(OrmModel):
    id: str
    post_id: str
    author_member_id: str
    content: str
    is_locked: bool
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


class CommentRequest(PageRequest):
    author_member_id: Optional[str] = None


class ReactionCreate(BaseModel):
    comment_id: str
    reaction_type: ReactionType


class ReactionResponse(OrmModel):
    id: str
    member_id: str
    comment_id: str
    reaction_type: ReactionType
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


class ReactionRequest(PageRequest):
    comment_id: Optional[str] = None
    reaction_type: Optional[ReactionType] = None


class VoteCreate(BaseModel):
    post_id: str
    vote_type: VoteType


class VoteResponse(OrmModel):
    id: str
    member_id: str
    post_id: str
    vote_type: VoteType
    created_at: datetime


class VoteRequest(PageRequest):
    post_id: Optional[str] = None
    vote_type: Optional[VoteType] = None
