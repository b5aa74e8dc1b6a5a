"""
Actor sessions.

A ``Session`` is the immutable result of joining, logging in or refreshing.
``ActorSessionManager`` binds at most one session to a connection at a time;
switching actors is an explicit ``login`` (or ``activate``) call, and
``with_role`` scopes a switch so the previous actor comes back afterwards.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import AsyncIterator, Optional

from pydantic import ValidationError as PydanticValidationError

from api.schemas import AdministratorJoin, Authorized, Consent, LoginRequest, MemberJoin, ModeratorJoin
from harness import random
from harness.connection import Connection
from harness.errors import ApiError, RegistrationError
from harness.log import get_logger
from harness.sdk import auth

logger = get_logger()

ROLES = ("guest", "member", "moderator", "administrator")

REQUIRED_CONSENTS = ("privacy_policy", "terms_of_service")


@dataclass(frozen=True)
class Credentials:
    email: str
    password: str
    nickname: Optional[str] = None

    @classmethod
    def random(cls) -> "Credentials":
        return cls(email=random.email(), password=random.password(), nickname=random.alpha_numeric(12))


@dataclass(frozen=True)
class Session:
    role: str
    actor_id: str
    access_token: str
    refresh_token: str
    expired_at: datetime
    refreshable_until: datetime
    email: Optional[str] = None
    nickname: Optional[str] = None
    user_account_id: Optional[str] = None
    credentials: Optional[Credentials] = None

    @classmethod
    def from_authorized(cls, authorized: Authorized, credentials: Optional[Credentials] = None) -> "Session":
        return cls(
            role=authorized.role,
            actor_id=authorized.id,
            access_token=authorized.token.access,
            refresh_token=authorized.token.refresh,
            expired_at=authorized.token.expired_at,
            refreshable_until=authorized.token.refreshable_until,
            email=authorized.email,
            nickname=authorized.nickname,
            user_account_id=authorized.user_account_id,
            credentials=credentials,
        )


def _check_role(role: str) -> None:
    if role not in ROLES:
        raise ValueError(f"unknown role {role!r}; expected one of {', '.join(ROLES)}")


def _join_body(role: str, credentials: Optional[Credentials], member_id: Optional[str]):
    if role == "guest":
        return None
    if role == "moderator":
        if member_id is None:
            raise ValueError("registering a moderator needs the member_id being promoted")
        return ModeratorJoin(member_id=member_id)
    if credentials is None:
        raise ValueError(f"registering a {role} needs credentials")
    if role == "administrator":
        return AdministratorJoin(
            email=credentials.email, password=credentials.password, nickname=credentials.nickname or random.name()
        )
    return MemberJoin(
        email=credentials.email,
        password=credentials.password,
        nickname=credentials.nickname or random.alpha_numeric(12),
        consent=[
            Consent(policy_type=policy, policy_version="1.0", consent_action="granted")
            for policy in REQUIRED_CONSENTS
        ],
    )


class ActorSessionManager:
    """Keeps exactly one active credential set on a connection."""

    def __init__(self, connection: Connection):
        self.connection = connection
        self._active: Optional[Session] = None

    @property
    def active(self) -> Optional[Session]:
        return self._active

    def activate(self, session: Session) -> Session:
        self.connection.authorize(session.access_token)
        self._active = session
        logger.debug("session active role=%s actor_id=%s", session.role, session.actor_id)
        return session

    def deactivate(self) -> None:
        self.connection.unauthorize()
        self._active = None

    async def register(
        self,
        role: str,
        credentials: Optional[Credentials] = None,
        *,
        member_id: Optional[str] = None,
    ) -> Session:
        """Join as ``role`` and bind the new session.

        A moderator is registered by the active administrator promoting
        ``member_id``; pass that member's credentials so the moderator can log
        in later. A refused or invalid payload raises ``RegistrationError``
        whether the service or the request model rejected it.
        """
        _check_role(role)
        try:
            body = _join_body(role, credentials, member_id)
            authorized = await auth.join(self.connection, role, body)
        except (ApiError, PydanticValidationError) as e:
            raise RegistrationError(role, e) from e
        logger.info("registered role=%s actor_id=%s", role, authorized.id)
        return self.activate(Session.from_authorized(authorized, credentials))

    async def login(self, role: str, credentials: Credentials) -> Session:
        """Log in and replace the active session. Bad credentials raise ``AuthError``."""
        _check_role(role)
        if role == "guest":
            raise ValueError("guests have no login; register a new guest instead")
        body = LoginRequest(email=credentials.email, password=credentials.password)
        authorized = await auth.login(self.connection, role, body)
        return self.activate(Session.from_authorized(authorized, credentials))

    async def refresh(self) -> Session:
        if self._active is None:
            raise ValueError("no active session to refresh")
        current = self._active
        authorized = await auth.refresh(self.connection, current.role, current.refresh_token)
        return self.activate(Session.from_authorized(authorized, current.credentials))

    @asynccontextmanager
    async def with_role(self, role: str, credentials: Credentials) -> AsyncIterator[Session]:
        """Log in as someone for the duration of the block, then restore whoever was active."""
        previous = self._active
        try:
            yield await self.login(role, credentials)
        finally:
            self.restore(previous)

    @asynccontextmanager
    async def using(self, session: Session) -> AsyncIterator[Session]:
        """Like ``with_role`` for a session already in hand, without a login call."""
        previous = self._active
        try:
            yield self.activate(session)
        finally:
            self.restore(previous)

    def restore(self, previous: Optional[Session]) -> None:
        """Bind ``previous`` again, or clear the connection when it is None."""
        if previous is None:
            self.deactivate()
        else:
            self.activate(previous)
