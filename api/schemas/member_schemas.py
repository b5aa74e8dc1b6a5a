"""
Member administration schemas.
"""

from datetime import datetime
from typing import Literal, Optional

from api.schemas.page_schemas import OrmModel, PageRequest
from pydantic import BaseModel

MemberStatus = Literal["active", "suspended", "banned"]


class MemberResponse(OrmModel):
    id: str
    user_account_id: str
    nickname: str
    status: MemberStatus
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


class MemberUpdate(BaseModel):
    status: MemberStatus


class MemberRequest(PageRequest):
    status: Optional[MemberStatus] = None
    nickname: Optional[str] = None
