from api.schemas import LoginRequest, MemberResponse, MemberUpdate, Page, PostCreate, ReportResponse, ThreadCreate, ThreadResponse
from harness import random
from harness.connection import Connection
from harness.errors import ApiError, AuthError, ConflictError, PermissionDeniedError, RegistrationError, ValidationError
from harness.runner import scenario
from harness.scenarios import setup
from harness.sdk import auth, members, posts, reports, threads
from harness.session import Credentials
from harness.validator import assert_equals, assert_predicate, assert_schema, assert_throws


@scenario
async def auth_login_enables_privileged_calls(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    admin = await fixtures.create("administrator")
    member = await fixtures.create("member")
    promoted = await fixtures.create("member")
    await fixtures.create("moderator", {"administrator": admin, "member": promoted})

    sessions.deactivate()
    await assert_throws(
        "member call without login",
        lambda: threads.create(connection, ThreadCreate(title=random.name(3))),
        expected=AuthError,
    )
    await sessions.login("member", member.session.credentials)
    assert_schema(ThreadResponse, await threads.create(connection, ThreadCreate(title=random.name(3))))

    sessions.deactivate()
    await assert_throws("moderator call without login", lambda: reports.index(connection), expected=AuthError)
    await sessions.login("moderator", promoted.session.credentials)
    assert_schema(Page[ReportResponse], await reports.index(connection))

    sessions.deactivate()
    await assert_throws("administrator call without login", lambda: members.index(connection), expected=AuthError)
    await sessions.login("administrator", admin.session.credentials)
    assert_schema(Page[MemberResponse], await members.index(connection))


@scenario
async def auth_duplicate_member_join_conflicts(connection: Connection) -> None:
    sessions, _ = setup(connection)
    credentials = Credentials.random()
    await sessions.register("member", credentials)

    again = Credentials(email=credentials.email, password=random.password(), nickname=random.alpha_numeric(12))
    error = await assert_throws(
        "second join with the same email",
        lambda: sessions.register("member", again),
        expected=RegistrationError,
    )
    assert_predicate("caused by a conflict", isinstance(error.cause, ConflictError))


@scenario
async def auth_member_join_requires_consent(connection: Connection) -> None:
    body = {
        "email": random.email(),
        "password": random.password(),
        "nickname": random.alpha_numeric(12),
        "consent": [{"policy_type": "privacy_policy", "policy_version": "1.0", "consent_action": "granted"}],
    }
    await assert_throws("join without terms consent", lambda: auth.join(connection, "member", body), expected=ValidationError)

    body["password"] = "short"
    await assert_throws("join with a short password", lambda: auth.join(connection, "member", body), expected=ValidationError)

    sessions, _ = setup(connection)
    short = Credentials(email=random.email(), password="short", nickname=random.alpha_numeric(12))
    error = await assert_throws(
        "registering with a short password",
        lambda: sessions.register("member", short),
        expected=RegistrationError,
    )
    assert_predicate("rejected before sending", not isinstance(error.cause, ApiError))
    assert_equals("no session was bound", sessions.active, None)


@scenario
async def auth_wrong_password_is_auth_error(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    member = await fixtures.create("member")
    wrong = Credentials(email=member.session.email, password=random.password())
    await assert_throws("login with a wrong password", lambda: sessions.login("member", wrong), expected=AuthError)
    assert_equals("no session was bound", sessions.active, None)


@scenario
async def auth_refresh_issues_a_working_session(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    member = await fixtures.create("member")
    await sessions.login("member", member.session.credentials)

    refreshed = await sessions.refresh()
    assert_equals("same actor", refreshed.actor_id, member.id)
    assert_equals("bound after refresh", sessions.active, refreshed)
    assert_schema(ThreadResponse, await threads.create(connection, ThreadCreate(title=random.name(3))))

    await assert_throws(
        "refresh token used for another role",
        lambda: auth.refresh(connection, "administrator", refreshed.refresh_token),
        expected=AuthError,
    )
    await assert_throws(
        "access token used as refresh token",
        lambda: auth.refresh(connection, "member", refreshed.access_token),
        expected=AuthError,
    )


@scenario
async def auth_suspended_member_cannot_login(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    admin = await fixtures.create("administrator")
    member = await fixtures.create("member")
    moderator = await fixtures.create("moderator", {"administrator": admin, "member": member})

    async with sessions.with_role("administrator", admin.session.credentials):
        updated = await members.update(connection, member.id, MemberUpdate(status="suspended"))
        assert_equals("status", updated.status, "suspended")

    await assert_throws(
        "suspended login",
        lambda: sessions.login("member", member.session.credentials),
        expected=PermissionDeniedError,
    )
    await assert_throws(
        "suspended member logging in as moderator",
        lambda: sessions.login("moderator", member.session.credentials),
        expected=PermissionDeniedError,
    )
    assert_equals("no session was bound", sessions.active, None)

    async with sessions.using(member.session):
        await assert_throws(
            "suspended member posting",
            lambda: posts.create(connection, PostCreate(title=random.paragraph(1), body=random.content(1))),
            expected=PermissionDeniedError,
        )
        await assert_throws("suspended member refreshing", sessions.refresh, expected=PermissionDeniedError)
    async with sessions.using(moderator.session):
        await assert_throws(
            "moderator session issued before the suspension",
            lambda: reports.index(connection),
            expected=PermissionDeniedError,
        )
        await assert_throws("suspended moderator refreshing", sessions.refresh, expected=PermissionDeniedError)

    async with sessions.with_role("administrator", admin.session.credentials):
        await members.update(connection, member.id, MemberUpdate(status="active"))
    session = await sessions.login("moderator", member.session.credentials)
    assert_equals("moderator login once reactivated", session.actor_id, moderator.id)
    assert_schema(Page[ReportResponse], await reports.index(connection))


@scenario
async def auth_moderator_login_requires_assignment(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    admin = await fixtures.create("administrator")
    member = await fixtures.create("member")
    body = LoginRequest(email=member.session.email, password=member.session.credentials.password)

    await assert_throws(
        "moderator login before assignment",
        lambda: auth.login(connection, "moderator", body),
        expected=PermissionDeniedError,
    )
    moderator = await fixtures.create("moderator", {"administrator": admin, "member": member})
    session = await sessions.login("moderator", member.session.credentials)
    assert_equals("moderator id", session.actor_id, moderator.id)

    async with sessions.with_role("administrator", admin.session.credentials):
        await assert_throws(
            "promoting the same member twice",
            lambda: sessions.register("moderator", member.session.credentials, member_id=member.id),
            expected=RegistrationError,
        )


@scenario
async def auth_with_role_restores_previous_session(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    first = await fixtures.create("member")
    second = await fixtures.create("member")

    await sessions.login("member", first.session.credentials)
    before = sessions.active
    async with sessions.with_role("member", second.session.credentials) as inner:
        assert_equals("inner actor", sessions.active.actor_id, second.id)
        assert_equals("yielded session is active", sessions.active, inner)
    assert_equals("outer session restored", sessions.active, before)
    assert_equals("header restored", connection.authorization, f"Bearer {before.access_token}")

    async def failing_step():
        async with sessions.with_role("member", second.session.credentials):
            raise RuntimeError("step failed")

    await assert_throws("error inside the block propagates", failing_step, expected=RuntimeError)
    assert_equals("restored after an error", sessions.active, before)

    sessions.deactivate()
    async with sessions.with_role("member", first.session.credentials):
        pass
    assert_equals("no session restored", connection.authorization, None)


@scenario
async def auth_guest_join(connection: Connection) -> None:
    sessions, _ = setup(connection)
    session = await sessions.register("guest")
    assert_equals("role", session.role, "guest")
    assert_predicate("token issued", bool(session.access_token))
    await assert_throws(
        "guest creating a thread",
        lambda: threads.create(connection, ThreadCreate(title=random.name(3))),
        expected=PermissionDeniedError,
    )
