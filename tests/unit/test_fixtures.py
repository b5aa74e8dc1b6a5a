"""Unit tests for fixture dependency checks (no request is sent when they fail)."""
import httpx
import pytest

from harness.errors import FixtureDependencyError
from harness.fixtures import Fixture, FixtureBuilder, check_parents


def _fail(request):
    raise AssertionError(f"unexpected request {request.method} {request.url}")


POST = Fixture("post", "p1", None)
MEMBER = Fixture("member", "m1", None)
ADMIN = Fixture("administrator", "a1", None)


@pytest.mark.unit
class TestCheckParents:
    def test_actors_need_nothing(self):
        check_parents("member", {})
        check_parents("administrator", {})

    def test_missing_required_parent(self):
        with pytest.raises(FixtureDependencyError, match="'post'"):
            check_parents("comment", {})

    def test_optional_parent_may_be_absent(self):
        check_parents("post", {"member": MEMBER})

    def test_wrong_parent_kind(self):
        with pytest.raises(FixtureDependencyError, match="must be member"):
            check_parents("vote", {"post": POST, "member": ADMIN})

    def test_staff_accepts_administrator(self):
        check_parents("moderation_action", {"staff": ADMIN, "member": MEMBER})

    def test_report_needs_a_target(self):
        with pytest.raises(FixtureDependencyError, match="'post' or a 'comment'"):
            check_parents("report", {"member": MEMBER})

    def test_unknown_kind(self):
        with pytest.raises(FixtureDependencyError, match="unknown fixture kind"):
            check_parents("poll", {})


@pytest.mark.unit
class TestFixtureBuilder:
    @pytest.mark.asyncio
    async def test_dependency_error_sends_nothing(self, mock_connection):
        builder = FixtureBuilder(mock_connection(_fail))
        with pytest.raises(FixtureDependencyError):
            await builder.create("reaction", {"member": MEMBER})

    @pytest.mark.asyncio
    async def test_member_fixture_restores_active_session(self, mock_connection, authorized_body):
        connection = mock_connection(lambda request: httpx.Response(200, json=authorized_body(actor_id="m9")))
        builder = FixtureBuilder(connection)
        member = await builder.create("member", overrides={"email": "fixed@example.com"})
        assert member.kind == "member"
        assert member.id == "m9"
        assert member.session.credentials.email == "fixed@example.com"
        assert builder.sessions.active is None
        assert connection.authorization is None

    def test_content_fixture_has_no_session(self):
        with pytest.raises(AttributeError):
            POST.session
