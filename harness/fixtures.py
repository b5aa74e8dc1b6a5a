"""
Fixture builder: creates the remote resources a scenario needs, parents first.

Each kind declares the parent fixtures it depends on. A missing or mistyped
parent raises ``FixtureDependencyError`` before any request goes out; a parent
that no longer exists on the server surfaces as the service's own error.
Creating a fixture never changes which actor is active on the connection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from api.schemas import (
    AttendanceCreate,
    CommentCreate,
    ModerationActionCreate,
    AppealCreate,
    NotificationCreate,
    PostCreate,
    ReactionCreate,
    ReportCreate,
    ThreadCreate,
    VoteCreate,
)
from harness import random
from harness.connection import Connection
from harness.errors import FixtureDependencyError
from harness.log import get_logger
from harness.sdk import appeals, attendance, comments, moderation, notifications, posts, reactions, reports, threads, votes
from harness.session import ActorSessionManager, Credentials, Session

logger = get_logger()

ACTOR_KINDS = ("guest", "member", "moderator", "administrator")
STAFF_KINDS = ("moderator", "administrator")


@dataclass(frozen=True)
class Fixture:
    kind: str
    id: str
    payload: Any
    parents: Mapping[str, "Fixture"] = field(default_factory=dict)

    @property
    def session(self) -> Session:
        """The session of an actor fixture."""
        if self.kind not in ACTOR_KINDS:
            raise AttributeError(f"{self.kind} fixtures carry no session")
        return self.payload


@dataclass(frozen=True)
class Requirement:
    key: str
    kinds: tuple[str, ...]
    optional: bool = False


REQUIREMENTS: dict[str, tuple[Requirement, ...]] = {
    "guest": (),
    "member": (),
    "administrator": (),
    "moderator": (Requirement("administrator", ("administrator",)), Requirement("member", ("member",))),
    "thread": (Requirement("member", ("member",)),),
    "post": (Requirement("member", ("member",)), Requirement("thread", ("thread",), optional=True)),
    "comment": (Requirement("post", ("post",)), Requirement("member", ("member",), optional=True)),
    "reaction": (Requirement("comment", ("comment",)), Requirement("member", ("member",))),
    "vote": (Requirement("post", ("post",)), Requirement("member", ("member",))),
    "report": (
        Requirement("member", ("member",)),
        Requirement("post", ("post",), optional=True),
        Requirement("comment", ("comment",), optional=True),
    ),
    "moderation_action": (
        Requirement("staff", STAFF_KINDS),
        Requirement("member", ("member",)),
        Requirement("post", ("post",), optional=True),
        Requirement("comment", ("comment",), optional=True),
        Requirement("report", ("report",), optional=True),
    ),
    "appeal": (Requirement("moderation_action", ("moderation_action",)),),
    "notification": (Requirement("administrator", ("administrator",)), Requirement("recipient", ACTOR_KINDS)),
    "attendance_record": (Requirement("staff", STAFF_KINDS), Requirement("member", ("member",))),
}


def check_parents(kind: str, parents: Mapping[str, Fixture]) -> None:
    if kind not in REQUIREMENTS:
        raise FixtureDependencyError(f"unknown fixture kind {kind!r}")
    for req in REQUIREMENTS[kind]:
        parent = parents.get(req.key)
        if parent is None:
            if req.optional:
                continue
            raise FixtureDependencyError(f"{kind} fixture needs a {req.key!r} parent ({' or '.join(req.kinds)})")
        if parent.kind not in req.kinds:
            raise FixtureDependencyError(
                f"{kind} fixture: parent {req.key!r} must be {' or '.join(req.kinds)}, got {parent.kind}"
            )
    if kind == "report" and "post" not in parents and "comment" not in parents:
        raise FixtureDependencyError("report fixture needs a 'post' or a 'comment' parent")


class FixtureBuilder:
    def __init__(self, connection: Connection, sessions: Optional[ActorSessionManager] = None):
        self.connection = connection
        self.sessions = sessions or ActorSessionManager(connection)

    async def create(
        self,
        kind: str,
        parent_refs: Optional[Mapping[str, Fixture]] = None,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> Fixture:
        parents = dict(parent_refs or {})
        check_parents(kind, parents)
        previous = self.sessions.active
        try:
            fixture = await getattr(self, f"_create_{kind}")(parents, dict(overrides or {}))
        finally:
            self.sessions.restore(previous)
        logger.debug("fixture created kind=%s id=%s", kind, fixture.id)
        return fixture

    def _act_as(self, actor: Fixture) -> None:
        self.sessions.activate(actor.session)

    # actors

    async def _create_guest(self, parents, overrides) -> Fixture:
        session = await self.sessions.register("guest")
        return Fixture("guest", session.actor_id, session, parents)

    async def _create_member(self, parents, overrides) -> Fixture:
        defaults = Credentials.random()
        credentials = Credentials(
            email=overrides.get("email", defaults.email),
            password=overrides.get("password", defaults.password),
            nickname=overrides.get("nickname", defaults.nickname),
        )
        session = await self.sessions.register("member", credentials)
        return Fixture("member", session.actor_id, session, parents)

    async def _create_administrator(self, parents, overrides) -> Fixture:
        defaults = Credentials.random()
        credentials = Credentials(
            email=overrides.get("email", defaults.email),
            password=overrides.get("password", defaults.password),
            nickname=overrides.get("nickname", random.name()),
        )
        session = await self.sessions.register("administrator", credentials)
        return Fixture("administrator", session.actor_id, session, parents)

    async def _create_moderator(self, parents, overrides) -> Fixture:
        member = parents["member"]
        self._act_as(parents["administrator"])
        session = await self.sessions.register(
            "moderator", member.session.credentials, member_id=member.id
        )
        return Fixture("moderator", session.actor_id, session, parents)

    # content

    async def _create_thread(self, parents, overrides) -> Fixture:
        self._act_as(parents["member"])
        body = ThreadCreate(**{"title": random.name(3), **overrides})
        thread = await threads.create(self.connection, body)
        return Fixture("thread", thread.id, thread, parents)

    async def _create_post(self, parents, overrides) -> Fixture:
        self._act_as(parents["member"])
        data = {"title": random.paragraph(1), "body": random.content(2)}
        if "thread" in parents:
            data["thread_id"] = parents["thread"].id
        post = await posts.create(self.connection, PostCreate(**{**data, **overrides}))
        return Fixture("post", post.id, post, parents)

    async def _create_comment(self, parents, overrides) -> Fixture:
        post = parents["post"]
        author = parents.get("member") or post.parents["member"]
        self._act_as(author)
        body = CommentCreate(**{"content": random.paragraph(2), **overrides})
        comment = await comments.create(self.connection, post.id, body)
        return Fixture("comment", comment.id, comment, {**parents, "member": author})

    async def _create_reaction(self, parents, overrides) -> Fixture:
        self._act_as(parents["member"])
        body = ReactionCreate(**{"comment_id": parents["comment"].id, "reaction_type": "like", **overrides})
        reaction = await reactions.create(self.connection, body)
        return Fixture("reaction", reaction.id, reaction, parents)

    async def _create_vote(self, parents, overrides) -> Fixture:
        self._act_as(parents["member"])
        body = VoteCreate(**{"post_id": parents["post"].id, "vote_type": "up", **overrides})
        vote = await votes.create(self.connection, body)
        return Fixture("vote", vote.id, vote, parents)

    # moderation

    async def _create_report(self, parents, overrides) -> Fixture:
        self._act_as(parents["member"])
        data = {"reason": random.paragraph(1)}
        if "comment" in parents:
            data["comment_id"] = parents["comment"].id
        else:
            data["post_id"] = parents["post"].id
        report = await reports.create(self.connection, ReportCreate(**{**data, **overrides}))
        return Fixture("report", report.id, report, parents)

    async def _create_moderation_action(self, parents, overrides) -> Fixture:
        self._act_as(parents["staff"])
        data = {
            "target_member_id": parents["member"].id,
            "action_type": "warn",
            "reason": random.paragraph(1),
        }
        for key in ("post", "comment", "report"):
            if key in parents:
                data[f"{key}_id"] = parents[key].id
        action = await moderation.create(self.connection, ModerationActionCreate(**{**data, **overrides}))
        return Fixture("moderation_action", action.id, action, parents)

    async def _create_appeal(self, parents, overrides) -> Fixture:
        action = parents["moderation_action"]
        appellant = action.parents["member"]
        self._act_as(appellant)
        body = AppealCreate(**{"moderation_action_id": action.id, "reason": random.paragraph(2), **overrides})
        appeal = await appeals.create(self.connection, body)
        return Fixture("appeal", appeal.id, appeal, {**parents, "member": appellant})

    async def _create_notification(self, parents, overrides) -> Fixture:
        recipient = parents["recipient"].session
        if recipient.user_account_id is None:
            raise FixtureDependencyError("notification recipient must have a user account (not a guest)")
        self._act_as(parents["administrator"])
        data = {"user_account_id": recipient.user_account_id, "title": random.name(3), "body": random.paragraph(2)}
        notification = await notifications.create(self.connection, NotificationCreate(**{**data, **overrides}))
        return Fixture("notification", notification.id, notification, parents)

    async def _create_attendance_record(self, parents, overrides) -> Fixture:
        self._act_as(parents["staff"])
        data = {
            "member_id": parents["member"].id,
            "session_label": f"session-{random.alpha_numeric(6)}",
            "checked_at": datetime.now(timezone.utc).replace(microsecond=0),
            "status": "present",
        }
        record = await attendance.create(self.connection, AttendanceCreate(**{**data, **overrides}))
        return Fixture("attendance_record", record.id, record, parents)
