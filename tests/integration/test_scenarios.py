"""
Runs every registered scenario against the app in-process (ASGITransport),
one fresh in-memory database per scenario.
"""
import pytest

from harness import runner

runner.discover()


@pytest.mark.integration
class TestScenarios:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", sorted(runner.REGISTRY))
    async def test_scenario(self, harness_connection, name):
        await runner.get(name)(harness_connection.fork())

    @pytest.mark.asyncio
    async def test_run_reports_selected_scenarios(self, harness_connection):
        report = await runner.run(harness_connection, include=["auth_*"], exclude=["auth_guest_*"])
        names = [o.name for o in report.outcomes]
        assert names == sorted(names)
        assert names and all(n.startswith("auth_") for n in names)
        assert "auth_guest_join" not in names
        assert report.ok, [(o.name, o.error) for o in report.failed]
