from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from api.schemas.page_schemas import OrmModel, PageRequest

AttendanceStatus = Literal["present", "late", "absent", "leave"]


class AttendanceCreate(BaseModel):
    member_id: str
    session_label: str = Field(min_length=1, max_length=100)
    checked_at: datetime
    status: AttendanceStatus
    exception_reason: Optional[str] = None


class AttendanceUpdate(BaseModel):
    status: Optional[AttendanceStatus] = None
    exception_reason: Optional[str] = None


class AttendanceResponse(OrmModel):
    id: str
    member_id: str
    recorded_by_role: str
    recorded_by_id: str
    session_label: str
    checked_at: datetime
    status: AttendanceStatus
    exception_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class AttendanceRequest(PageRequest):
    member_id: Optional[str] = None
    session_label: Optional[str] = None
    status: Optional[AttendanceStatus] = None
