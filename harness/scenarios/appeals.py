from api.schemas import AppealCreate, AppealRequest, AppealReview, AppealUpdate, NotificationRequest
from harness import random
from harness.connection import Connection
from harness.errors import ConflictError, NotFoundError, PermissionDeniedError
from harness.runner import scenario
from harness.scenarios import setup
from harness.sdk import appeals, members, notifications
from harness.validator import assert_equals, assert_predicate, assert_throws


@scenario
async def appeal_accepted_restores_suspended_member(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    offender = await fixtures.create("member")
    admin = await fixtures.create("administrator")
    moderator = await fixtures.create("moderator", {"administrator": admin, "member": await fixtures.create("member")})
    action = await fixtures.create(
        "moderation_action", {"staff": moderator, "member": offender}, {"action_type": "suspend"}
    )

    await assert_throws(
        "suspended member logging in",
        lambda: sessions.login("member", offender.session.credentials),
        expected=PermissionDeniedError,
    )

    # The session issued before the suspension still reaches appeals.
    appeal = await fixtures.create("appeal", {"moderation_action": action})
    assert_equals("pending", appeal.payload.status, "pending")
    async with sessions.using(offender.session):
        await assert_throws(
            "second pending appeal",
            lambda: appeals.create(connection, AppealCreate(moderation_action_id=action.id, reason=random.paragraph(1))),
            expected=ConflictError,
        )
        edited = await appeals.update(connection, appeal.id, AppealUpdate(reason="please reconsider"))
        assert_equals("reason edited", edited.reason, "please reconsider")

    async with sessions.with_role("moderator", moderator.session.credentials):
        reviewed = await appeals.review(
            connection, appeal.id, AppealReview(status="accepted", resolution_comment="lifted")
        )
        assert_equals("accepted", reviewed.status, "accepted")
        assert_predicate("review time recorded", reviewed.reviewed_at is not None)
        await assert_throws(
            "reviewing twice",
            lambda: appeals.review(connection, appeal.id, AppealReview(status="rejected")),
            expected=ConflictError,
        )

    async with sessions.using(admin.session):
        assert_equals("member active again", (await members.at(connection, offender.id)).status, "active")

    await sessions.login("member", offender.session.credentials)
    await assert_throws(
        "editing a reviewed appeal",
        lambda: appeals.update(connection, appeal.id, AppealUpdate(reason="too late")),
        expected=ConflictError,
    )
    inbox = await notifications.index(connection, NotificationRequest())
    titles = {n.title for n in inbox.data}
    assert_predicate("told about the suspension", "Moderation action: suspend" in titles)
    assert_predicate("told about the appeal", "Appeal accepted" in titles)


@scenario
async def appeal_only_by_the_affected_member(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    offender = await fixtures.create("member")
    other = await fixtures.create("member")
    admin = await fixtures.create("administrator")
    action = await fixtures.create("moderation_action", {"staff": admin, "member": offender})

    async with sessions.using(other.session):
        await assert_throws(
            "appeal someone else's action",
            lambda: appeals.create(connection, AppealCreate(moderation_action_id=action.id, reason=random.paragraph(1))),
            expected=PermissionDeniedError,
        )
        await assert_throws(
            "appeal an unknown action",
            lambda: appeals.create(connection, AppealCreate(moderation_action_id=random.uuid(), reason="x")),
            expected=NotFoundError,
        )
    appeal = await fixtures.create("appeal", {"moderation_action": action})
    async with sessions.using(other.session):
        await assert_throws(
            "edit someone else's appeal",
            lambda: appeals.update(connection, appeal.id, AppealUpdate(reason="hijack")),
            expected=PermissionDeniedError,
        )


@scenario
async def appeal_index_pagination(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    offender = await fixtures.create("member")
    other = await fixtures.create("member")
    admin = await fixtures.create("administrator")
    for _ in range(3):
        action = await fixtures.create("moderation_action", {"staff": admin, "member": offender})
        await fixtures.create("appeal", {"moderation_action": action})
    other_action = await fixtures.create("moderation_action", {"staff": admin, "member": other})
    await fixtures.create("appeal", {"moderation_action": other_action})

    async with sessions.using(offender.session):
        page = await appeals.index_own(connection, AppealRequest(page=1, limit=2))
        assert_predicate("within limit", len(page.data) <= 2)
        assert_equals("current", page.pagination.current, 1)
        assert_equals("only own appeals", page.pagination.records, 3)
        assert_predicate("all own", all(a.appellant_member_id == offender.id for a in page.data))

        spoofed = await appeals.index_own(connection, AppealRequest(appellant_member_id=other.id))
        assert_equals("cannot read others through the filter", spoofed.data, [])

        beyond = await appeals.index_own(connection, AppealRequest(page=3, limit=2))
        assert_equals("past the end", beyond.data, [])
        unknown = await appeals.index_own(connection, AppealRequest(status="no_such_status"))
        assert_equals("unknown status matches nothing", unknown.data, [])

    async with sessions.using(admin.session):
        staff_view = await appeals.index(connection, AppealRequest(appellant_member_id=other.id))
        assert_equals("staff filter by appellant", staff_view.pagination.records, 1)


@scenario
async def appeal_erase_is_soft_and_once(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    offender = await fixtures.create("member")
    admin = await fixtures.create("administrator")
    action = await fixtures.create("moderation_action", {"staff": admin, "member": offender})
    appeal = await fixtures.create("appeal", {"moderation_action": action})

    async with sessions.using(offender.session):
        await assert_throws("member erasing", lambda: appeals.erase(connection, appeal.id), expected=PermissionDeniedError)

    async with sessions.using(admin.session):
        erased = await appeals.erase(connection, appeal.id)
        assert_predicate("deleted_at set", erased.deleted_at is not None)
        assert_equals("reason kept", erased.reason, appeal.payload.reason)
        await assert_throws("second erase", lambda: appeals.erase(connection, appeal.id), expected=NotFoundError)
