from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field

Role = Literal["guest", "member", "moderator", "administrator"]


class Consent(BaseModel):
    policy_type: str
    policy_version: str
    consent_action: Literal["granted", "revoked"]


class MemberJoin(BaseModel):
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=10, max_length=128)
    nickname: str = Field(min_length=1, max_length=64)
    consent: list[Consent]


class AdministratorJoin(BaseModel):
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=10, max_length=128)
    nickname: str = Field(min_length=1, max_length=64)


class ModeratorJoin(BaseModel):
    member_id: str


class LoginRequest(BaseModel):
    email: str
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class Token(BaseModel):
    access: str
    refresh: str
    expired_at: datetime
    refreshable_until: datetime


class Authorized(BaseModel):
    id: str
    role: Role
    user_account_id: Optional[str] = None
    email: Optional[str] = None
    nickname: Optional[str] = None
    token: Token


class AuthTokenPayload(BaseModel):
    sub: str
    role: Role
    type: Literal["access", "refresh"] = "access"
    exp: Optional[datetime] = None
