"""
Content report, moderation action, appeal and notification schemas.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from api.schemas.page_schemas import OrmModel, PageRequest

ReportStatus = Literal["open", "resolved"]
ActionType = Literal["warn", "hide", "remove", "suspend", "ban"]
AppealStatus = Literal["pending", "accepted", "rejected"]


class ReportCreate(BaseModel):
    post_id: Optional[str] = None
    comment_id: Optional[str] = None
    reason: str = Field(min_length=1, max_length=2_000)

    @model_validator(mode="after")
    def _exactly_one_target(self):
        if (self.post_id is None) == (self.comment_id is None):
            raise ValueError("exactly one of post_id or comment_id is required")
        return self


class ReportResponse(OrmModel):
    id: str
    reporter_member_id: str
    post_id: Optional[str] = None
    comment_id: Optional[str] = None
    reason: str
    status: ReportStatus
    created_at: datetime
    updated_at: datetime


class ReportRequest(PageRequest):
    status: Optional[ReportStatus] = None


class ModerationActionCreate(BaseModel):
    target_member_id: str
    action_type: ActionType
    reason: str = Field(min_length=1, max_length=2_000)
    post_id: Optional[str] = None
    comment_id: Optional[str] = None
    report_id: Optional[str] = None


class ModerationActionUpdate(BaseModel):
    reason: str = Field(min_length=1, max_length=2_000)


class ModerationActionResponse(OrmModel):
    id: str
    actor_role: str
    actor_id: str
    target_member_id: str
    action_type: ActionType
    reason: str
    post_id: Optional[str] = None
    comment_id: Optional[str] = None
    report_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ModerationActionRequest(PageRequest):
    action_type: Optional[ActionType] = None
    target_member_id: Optional[str] = None


class AppealCreate(BaseModel):
    moderation_action_id: str
    reason: str = Field(min_length=1, max_length=5_000)


class AppealUpdate(BaseModel):
    reason: str = Field(min_length=1, max_length=5_000)


class AppealReview(BaseModel):
    status: Literal["accepted", "rejected"]
    resolution_comment: Optional[str] = None


class AppealResponse(OrmModel):
    id: str
    appellant_member_id: str
    moderation_action_id: str
    reason: str
    status: AppealStatus
    resolution_comment: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


class AppealRequest(PageRequest):
    # Free-form: an unknown status simply matches nothing.
    status: Optional[str] = None
    appellant_member_id: Optional[str] = None


class NotificationCreate(BaseModel):
    user_account_id: str
    title: str = Field(min_length=1, max_length=200)
    body: str = Field(min_length=1, max_length=5_000)


class NotificationUpdate(BaseModel):
    read: bool


class NotificationResponse(OrmModel):
    id: str
    user_account_id: str
    title: str
    body: str
    read_at: Optional[datetime] = None
    created_at: datetime


class NotificationRequest(PageRequest):
    unread: Optional[bool] = None
