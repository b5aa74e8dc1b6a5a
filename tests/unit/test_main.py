"""Unit tests for the command-line entry point."""
import sys

import pytest

import harness.__main__ as cli
from harness import random


@pytest.fixture
def argv(monkeypatch):
    def _set(*args):
        monkeypatch.setattr(sys, "argv", ["harness", *args])

    return _set


@pytest.mark.unit
class TestMain:
    @pytest.mark.asyncio
    async def test_list_prints_matching_scenarios(self, argv, capsys):
        argv("--list", "--include", "auth_*")
        assert await cli.main() == 0
        names = capsys.readouterr().out.split()
        assert "auth_guest_join" in names
        assert all(n.startswith("auth_") for n in names)

    @pytest.mark.asyncio
    async def test_seed_makes_payloads_reproducible(self, argv):
        argv("--list", "--seed", "7")
        await cli.main()
        first = random.alpha_numeric(16)
        random.seed(7)
        assert random.alpha_numeric(16) == first

    @pytest.mark.asyncio
    async def test_console_flag(self, argv, monkeypatch):
        calls = []
        monkeypatch.setattr(cli, "enable_console", lambda: calls.append(True))
        argv("--list", "--console")
        await cli.main()
        assert calls == [True]

        calls.clear()
        argv("--list")
        await cli.main()
        assert calls == []
