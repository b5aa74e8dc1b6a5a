from api.schemas import NotificationRequest, NotificationUpdate
from harness.connection import Connection
from harness.errors import NotFoundError, PermissionDeniedError
from harness.runner import scenario
from harness.scenarios import setup
from harness.sdk import notifications
from harness.validator import assert_equals, assert_predicate, assert_throws


@scenario
async def notification_owner_reads_and_marks_read(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    admin = await fixtures.create("administrator")
    recipient = await fixtures.create("member")
    stranger = await fixtures.create("member")
    notification = await fixtures.create("notification", {"administrator": admin, "recipient": recipient})

    async with sessions.using(stranger.session):
        await assert_throws(
            "stranger reads", lambda: notifications.at(connection, notification.id), expected=PermissionDeniedError
        )
        await assert_throws(
            "stranger marks read",
            lambda: notifications.update(connection, notification.id, NotificationUpdate(read=True)),
            expected=PermissionDeniedError,
        )

    async with sessions.using(recipient.session):
        fetched = await notifications.at(connection, notification.id)
        assert_equals("id", fetched.id, notification.id)
        assert_equals("unread", fetched.read_at, None)

        read = await notifications.update(connection, notification.id, NotificationUpdate(read=True))
        assert_predicate("read_at set", read.read_at is not None)
        unread = await notifications.index(connection, NotificationRequest(unread=True))
        assert_equals("nothing unread", unread.data, [])
        seen = await notifications.index(connection, NotificationRequest(unread=False))
        assert_equals("listed as read", [n.id for n in seen.data], [notification.id])

        again = await notifications.update(connection, notification.id, NotificationUpdate(read=False))
        assert_equals("unread again", again.read_at, None)
        await assert_throws(
            "unknown notification", lambda: notifications.at(connection, "missing"), expected=NotFoundError
        )


@scenario
async def notification_guest_has_no_inbox(connection: Connection) -> None:
    sessions, _ = setup(connection)
    await sessions.register("guest")
    await assert_throws("guest inbox", lambda: notifications.index(connection), expected=PermissionDeniedError)
