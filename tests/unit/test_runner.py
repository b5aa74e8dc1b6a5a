"""Unit tests for the scenario registry and runner."""
import pytest

from harness import runner
from harness.connection import Connection
from harness.errors import ExpectationError, ScenarioNotFoundError


@pytest.fixture
def registry(monkeypatch):
    """An empty registry for the duration of a test."""
    fresh = {}
    monkeypatch.setattr(runner, "REGISTRY", fresh)
    return fresh


@pytest.mark.unit
class TestRegistry:
    def test_decorator_registers_by_name(self, registry):
        @runner.scenario
        async def post_create(connection):
            pass

        @runner.scenario(name="custom")
        async def other(connection):
            pass

        assert registry == {"post_create": post_create, "custom": other}

    def test_duplicate_name_rejected(self, registry):
        @runner.scenario(name="dup")
        async def first(connection):
            pass

        with pytest.raises(ValueError):
            @runner.scenario(name="dup")
            async def second(connection):
                pass

    def test_select_include_exclude(self, registry):
        for name in ("post_a", "post_b", "vote_a"):
            registry[name] = None
        assert runner.select() == ["post_a", "post_b", "vote_a"]
        assert runner.select(include=["post_*"]) == ["post_a", "post_b"]
        assert runner.select(include=["post_*"], exclude=["*_b"]) == ["post_a"]

    def test_get_unknown(self, registry):
        with pytest.raises(ScenarioNotFoundError):
            runner.get("missing")


@pytest.mark.unit
class TestRun:
    @pytest.mark.asyncio
    async def test_failures_are_recorded_and_run_continues(self, registry):
        seen = []

        @runner.scenario
        async def a_fails(connection):
            seen.append(("a", connection.authorization))
            raise ExpectationError("boom")

        @runner.scenario
        async def b_passes(connection):
            seen.append(("b", connection.authorization))

        base = Connection(host="http://test")
        base.authorize("leaked")
        report = await runner.run(base)
        await base.aclose()

        assert [o.name for o in report.outcomes] == ["a_fails", "b_passes"]
        assert [o.passed for o in report.outcomes] == [False, True]
        assert isinstance(report.failed[0].error, ExpectationError)
        assert not report.ok
        assert seen == [("a", None), ("b", None)]

    @pytest.mark.asyncio
    async def test_include_matching_nothing(self, registry):
        with pytest.raises(ScenarioNotFoundError):
            await runner.run(Connection(host="http://test"), include=["nothing_*"])

    def test_discover_registers_suite(self):
        runner.discover()
        assert "post_erase_by_non_owner_is_forbidden" in runner.REGISTRY

    @pytest.mark.asyncio
    async def test_each_scenario_is_timed_in_the_log(self, registry, monkeypatch):
        lines = []
        monkeypatch.setattr(runner.logger, "info", lambda msg, *args, **kw: lines.append(msg % args))
        monkeypatch.setattr(runner.logger, "warning", lambda msg, *args, **kw: lines.append(msg % args))
        monkeypatch.setattr(runner.logger, "error", lambda *args, **kw: None)

        @runner.scenario
        async def a_fails(connection):
            raise ExpectationError("boom")

        @runner.scenario
        async def b_passes(connection):
            pass

        report = await runner.run(Connection(host="http://test"))
        assert any(line.startswith("scenario a_fails failed duration_ms=") for line in lines)
        assert any(line.startswith("scenario b_passes ok duration_ms=") for line in lines)
        assert [o.duration_ms >= 0 for o in report.outcomes] == [True, True]
