from api.schemas import (
    ModerationActionCreate,
    ModerationActionRequest,
    ModerationActionUpdate,
    NotificationRequest,
    ReportCreate,
    ReportRequest,
)
from harness import random
from harness.connection import Connection
from harness.errors import ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from harness.runner import scenario
from harness.scenarios import setup
from harness.sdk import comments, moderation, notifications, posts, reports
from harness.validator import assert_equals, assert_predicate, assert_throws


@scenario
async def report_is_unique_per_reporter(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    post = await fixtures.create("post", {"member": await fixtures.create("member")})
    reporter = await fixtures.create("member")
    report = await fixtures.create("report", {"member": reporter, "post": post})
    assert_equals("opens as open", report.payload.status, "open")

    async with sessions.using(reporter.session):
        await assert_throws(
            "same reporter, same post",
            lambda: reports.create(connection, ReportCreate(post_id=post.id, reason=random.paragraph(1))),
            expected=ConflictError,
        )
        await assert_throws(
            "no target",
            lambda: reports.create(connection, {"reason": random.paragraph(1)}),
            expected=ValidationError,
        )
        await assert_throws(
            "members cannot list reports", lambda: reports.index(connection), expected=PermissionDeniedError
        )


@scenario
async def moderation_remove_resolves_report_and_notifies(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    offender = await fixtures.create("member")
    post = await fixtures.create("post", {"member": offender})
    comment = await fixtures.create("comment", {"post": post})
    report = await fixtures.create("report", {"member": await fixtures.create("member"), "post": post})
    admin = await fixtures.create("administrator")
    moderator = await fixtures.create("moderator", {"administrator": admin, "member": await fixtures.create("member")})

    action = await fixtures.create(
        "moderation_action",
        {"staff": moderator, "member": offender, "post": post, "report": report},
        {"action_type": "remove"},
    )
    assert_equals("recorded by the moderator", action.payload.actor_id, moderator.id)

    async with sessions.using(moderator.session):
        resolved = await reports.at(connection, report.id)
        assert_equals("report resolved", resolved.status, "resolved")
        removed = await posts.at(connection, post.id)
        assert_predicate("post soft-deleted", removed.deleted_at is not None)
        open_reports = await reports.index(connection, ReportRequest(status="open"))
        assert_predicate("not among open reports", report.id not in {r.id for r in open_reports.data})
        listed = await moderation.index(connection, ModerationActionRequest(target_member_id=offender.id))
        assert_equals("one action against offender", [a.id for a in listed.data], [action.id])

    hide = await fixtures.create(
        "moderation_action", {"staff": admin, "member": offender, "comment": comment}, {"action_type": "hide"}
    )
    assert_equals("hide by administrator", hide.payload.actor_role, "administrator")
    assert_equals("comment locked", (await comments.at(connection, post.id, comment.id)).is_locked, True)

    async with sessions.using(offender.session):
        inbox = await notifications.index(connection, NotificationRequest(unread=True))
        assert_equals("two notifications", inbox.pagination.records, 2)


@scenario
async def moderation_action_rules(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    offender = await fixtures.create("member")
    bystander = await fixtures.create("member")
    post = await fixtures.create("post", {"member": bystander})
    admin = await fixtures.create("administrator")
    moderator = await fixtures.create("moderator", {"administrator": admin, "member": await fixtures.create("member")})

    async with sessions.using(bystander.session):
        await assert_throws(
            "member taking a moderation action",
            lambda: moderation.create(
                connection, ModerationActionCreate(target_member_id=offender.id, action_type="warn", reason="spam")
            ),
            expected=PermissionDeniedError,
        )
    async with sessions.using(moderator.session):
        await assert_throws(
            "post of another member",
            lambda: moderation.create(
                connection,
                ModerationActionCreate(target_member_id=offender.id, action_type="remove", reason="spam", post_id=post.id),
            ),
            expected=ValidationError,
        )
        await assert_throws(
            "unknown target",
            lambda: moderation.create(
                connection, ModerationActionCreate(target_member_id=random.uuid(), action_type="warn", reason="spam")
            ),
            expected=NotFoundError,
        )

    action = await fixtures.create("moderation_action", {"staff": moderator, "member": offender})
    async with sessions.using(moderator.session):
        await assert_throws(
            "moderator editing the reason",
            lambda: moderation.update(connection, action.id, ModerationActionUpdate(reason="edited")),
            expected=PermissionDeniedError,
        )
    async with sessions.using(admin.session):
        updated = await moderation.update(connection, action.id, ModerationActionUpdate(reason="edited"))
        assert_equals("reason edited", updated.reason, "edited")
        assert_equals("same action", (await moderation.at(connection, action.id)).id, action.id)
