from datetime import datetime, timedelta, timezone

from api.schemas import AttendanceCreate, AttendanceRequest, AttendanceResponse, AttendanceUpdate
from harness import random
from harness.connection import Connection
from harness.errors import ConflictError, NotFoundError, PermissionDeniedError
from harness.runner import scenario
from harness.scenarios import setup
from harness.sdk import attendance
from harness.validator import assert_equals, assert_schema, assert_throws


@scenario
async def attendance_record_lifecycle(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    admin = await fixtures.create("administrator")
    moderator = await fixtures.create("moderator", {"administrator": admin, "member": await fixtures.create("member")})
    student = await fixtures.create("member")
    checked_at = datetime.now(timezone.utc).replace(microsecond=0) - timedelta(hours=1)
    label = f"session-{random.alpha_numeric(6)}"
    record = await fixtures.create(
        "attendance_record",
        {"staff": moderator, "member": student},
        {"session_label": label, "checked_at": checked_at, "status": "late"},
    )

    async with sessions.using(moderator.session):
        fetched = assert_schema(AttendanceResponse, await attendance.at(connection, record.id))
        assert_equals("id", fetched.id, record.id)
        assert_equals("checked_at round-trips", fetched.checked_at, checked_at)
        await assert_throws(
            "same member, session and time",
            lambda: attendance.create(
                connection,
                AttendanceCreate(member_id=student.id, session_label=label, checked_at=checked_at, status="present"),
            ),
            expected=ConflictError,
        )
        await assert_throws(
            "unknown member",
            lambda: attendance.create(
                connection,
                AttendanceCreate(member_id=random.uuid(), session_label=label, checked_at=checked_at, status="present"),
            ),
            expected=NotFoundError,
        )
        updated = await attendance.update(
            connection, record.id, AttendanceUpdate(status="leave", exception_reason="family matter")
        )
        assert_equals("status", updated.status, "leave")
        listed = await attendance.index(connection, AttendanceRequest(member_id=student.id, limit=10))
        assert_equals("one record", [r.id for r in listed.data], [record.id])
        assert_equals("current", listed.pagination.current, 1)

    async with sessions.using(student.session):
        own = await attendance.at(connection, record.id)
        assert_equals("member reads own record", own.id, record.id)

    stranger = await fixtures.create("member")
    async with sessions.using(stranger.session):
        await assert_throws("other member", lambda: attendance.at(connection, record.id), expected=PermissionDeniedError)
        await assert_throws(
            "member erasing", lambda: attendance.erase(connection, record.id), expected=PermissionDeniedError
        )

    async with sessions.using(admin.session):
        await attendance.erase(connection, record.id)
        await assert_throws("erase twice", lambda: attendance.erase(connection, record.id), expected=NotFoundError)
        await assert_throws("erase unknown id", lambda: attendance.erase(connection, random.uuid()), expected=NotFoundError)
