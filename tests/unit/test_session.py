"""Unit tests for the actor session manager against a mocked transport."""
import json

import httpx
import pytest
from pydantic import ValidationError as PydanticValidationError

from harness.errors import AuthError, PermissionDeniedError, RegistrationError
from harness.session import ActorSessionManager, Credentials

CREDS = Credentials(email="a@example.com", password="password-123", nickname="nick")


@pytest.mark.unit
class TestRegister:
    @pytest.mark.asyncio
    async def test_member_join_binds_session(self, mock_connection, authorized_body):
        seen = []

        def handler(request: httpx.Request):
            seen.append((request.url.path, json.loads(request.content)))
            return httpx.Response(200, json=authorized_body(access="join-token"))

        connection = mock_connection(handler)
        sessions = ActorSessionManager(connection)
        session = await sessions.register("member", CREDS)

        path, body = seen[0]
        assert path == "/auth/member/join"
        assert body["email"] == CREDS.email
        assert {c["policy_type"] for c in body["consent"]} == {"privacy_policy", "terms_of_service"}
        assert session.access_token == "join-token"
        assert session.credentials == CREDS
        assert sessions.active == session
        assert connection.authorization == "Bearer join-token"

    @pytest.mark.asyncio
    async def test_conflict_becomes_registration_error(self, mock_connection):
        connection = mock_connection(lambda request: httpx.Response(409, json={"detail": "Email already registered"}))
        sessions = ActorSessionManager(connection)
        with pytest.raises(RegistrationError) as exc:
            await sessions.register("member", CREDS)
        assert exc.value.cause.status == 409
        assert isinstance(exc.value.__cause__, type(exc.value.cause))
        assert sessions.active is None

    @pytest.mark.asyncio
    async def test_invalid_payload_becomes_registration_error(self, mock_connection):
        sent = []
        connection = mock_connection(lambda request: sent.append(request) or httpx.Response(500))
        sessions = ActorSessionManager(connection)
        short = Credentials(email="x@example.com", password="short", nickname="n")
        with pytest.raises(RegistrationError) as exc:
            await sessions.register("member", short)
        assert isinstance(exc.value.cause, PydanticValidationError)
        assert exc.value.role == "member"
        assert sent == []
        assert sessions.active is None

    @pytest.mark.asyncio
    async def test_moderator_needs_member_id(self, mock_connection):
        sessions = ActorSessionManager(mock_connection(lambda request: httpx.Response(500)))
        with pytest.raises(ValueError):
            await sessions.register("moderator", CREDS)

    @pytest.mark.asyncio
    async def test_unknown_role(self, mock_connection):
        sessions = ActorSessionManager(mock_connection(lambda request: httpx.Response(500)))
        with pytest.raises(ValueError):
            await sessions.register("superuser", CREDS)


@pytest.mark.unit
class TestLogin:
    @pytest.mark.asyncio
    async def test_login_replaces_active_session(self, mock_connection, authorized_body):
        tokens = iter(["first", "second"])
        connection = mock_connection(lambda request: httpx.Response(200, json=authorized_body(access=next(tokens))))
        sessions = ActorSessionManager(connection)
        await sessions.login("member", CREDS)
        second = await sessions.login("administrator", CREDS)
        assert sessions.active == second
        assert connection.authorization == "Bearer second"

    @pytest.mark.asyncio
    async def test_bad_credentials_keep_previous_session(self, mock_connection, authorized_body):
        responses = iter(
            [
                httpx.Response(200, json=authorized_body(access="good")),
                httpx.Response(401, json={"detail": "Incorrect email or password"}),
            ]
        )
        connection = mock_connection(lambda request: next(responses))
        sessions = ActorSessionManager(connection)
        good = await sessions.login("member", CREDS)
        with pytest.raises(AuthError):
            await sessions.login("member", Credentials(email=CREDS.email, password="wrong-password"))
        assert sessions.active == good

    @pytest.mark.asyncio
    async def test_blocked_member_is_permission_error(self, mock_connection):
        connection = mock_connection(lambda request: httpx.Response(403, json={"detail": "Member is suspended"}))
        with pytest.raises(PermissionDeniedError):
            await ActorSessionManager(connection).login("member", CREDS)

    @pytest.mark.asyncio
    async def test_guests_cannot_login(self, mock_connection):
        with pytest.raises(ValueError):
            await ActorSessionManager(mock_connection(lambda request: httpx.Response(500))).login("guest", CREDS)

    @pytest.mark.asyncio
    async def test_refresh_sends_refresh_token(self, mock_connection, authorized_body):
        seen = []

        def handler(request: httpx.Request):
            seen.append((request.url.path, json.loads(request.content)))
            return httpx.Response(200, json=authorized_body(access=f"a{len(seen)}", refresh=f"r{len(seen)}"))

        sessions = ActorSessionManager(mock_connection(handler))
        await sessions.login("member", CREDS)
        refreshed = await sessions.refresh()
        assert seen[1] == ("/auth/member/refresh", {"refresh_token": "r1"})
        assert refreshed.access_token == "a2"
        assert refreshed.credentials == CREDS

    @pytest.mark.asyncio
    async def test_refresh_without_session(self, mock_connection):
        with pytest.raises(ValueError):
            await ActorSessionManager(mock_connection(lambda request: httpx.Response(500))).refresh()


@pytest.mark.unit
class TestWithRole:
    @pytest.mark.asyncio
    async def test_restores_previous_session(self, mock_connection, authorized_body):
        tokens = iter(["outer", "inner"])
        connection = mock_connection(lambda request: httpx.Response(200, json=authorized_body(access=next(tokens))))
        sessions = ActorSessionManager(connection)
        outer = await sessions.login("member", CREDS)
        async with sessions.with_role("administrator", CREDS) as inner:
            assert connection.authorization == "Bearer inner"
            assert sessions.active == inner
        assert sessions.active == outer
        assert connection.authorization == "Bearer outer"

    @pytest.mark.asyncio
    async def test_restores_on_error(self, mock_connection, authorized_body):
        connection = mock_connection(lambda request: httpx.Response(200, json=authorized_body()))
        sessions = ActorSessionManager(connection)
        with pytest.raises(RuntimeError):
            async with sessions.with_role("member", CREDS):
                raise RuntimeError("step failed")
        assert sessions.active is None
        assert connection.authorization is None

    @pytest.mark.asyncio
    async def test_failed_login_restores_nothing_changed(self, mock_connection):
        connection = mock_connection(lambda request: httpx.Response(401, json={"detail": "bad"}))
        sessions = ActorSessionManager(connection)
        with pytest.raises(AuthError):
            async with sessions.with_role("member", CREDS):
                pytest.fail("block must not run")
        assert sessions.active is None

    @pytest.mark.asyncio
    async def test_using_existing_session(self, mock_connection, authorized_body):
        connection = mock_connection(lambda request: httpx.Response(200, json=authorized_body(access="kept")))
        sessions = ActorSessionManager(connection)
        kept = await sessions.login("member", CREDS)
        sessions.deactivate()
        async with sessions.using(kept):
            assert connection.authorization == "Bearer kept"
        assert connection.authorization is None
