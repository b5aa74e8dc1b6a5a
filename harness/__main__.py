"""
Run the scenario suite against a live service.

Run: python -m harness --host http://127.0.0.1:8000
     python -m harness --include "post_*" --exclude "*_pagination"
     python -m harness --list
     python -m harness --console --seed 7
"""
from __future__ import annotations

import argparse
import asyncio
import sys

from harness import random, runner
from harness.config import settings
from harness.connection import Connection
from harness.errors import ScenarioNotFoundError
from harness.log import enable_console, set_level


async def main() -> int:
    parser = argparse.ArgumentParser(description="Run discussion-board end-to-end scenarios.")
    parser.add_argument("--host", default=settings.host, help=f"Service base URL (default {settings.host})")
    parser.add_argument("--include", "-i", action="append", default=None, help="Glob of scenario names to run (repeatable)")
    parser.add_argument("--exclude", "-x", action="append", default=None, help="Glob of scenario names to skip (repeatable)")
    parser.add_argument("--timeout", type=float, default=settings.timeout, help="Per-request timeout in seconds")
    parser.add_argument("--log-level", default=settings.log_level, help="Harness log level (file log)")
    parser.add_argument("--console", action="store_true", default=settings.console, help="Also write harness log lines to stdout")
    parser.add_argument("--seed", type=int, default=settings.seed, help="Seed the payload generator for a reproducible run")
    parser.add_argument("--list", action="store_true", help="List matching scenarios and exit")
    args = parser.parse_args()

    if args.console:
        enable_console()
    set_level(args.log_level)
    if args.seed is not None:
        random.seed(args.seed)
    runner.discover()

    if args.list:
        for name in runner.select(args.include, args.exclude):
            print(name)
        return 0

    connection = Connection(host=args.host, headers=dict(settings.headers), timeout=args.timeout)
    try:
        async with connection:
            report = await runner.run(connection, args.include, args.exclude)
    except ScenarioNotFoundError as e:
        print(str(e), file=sys.stderr)
        return 2

    for outcome in report.outcomes:
        mark = "PASS" if outcome.passed else "FAIL"
        print(f"{mark} {outcome.name} ({outcome.duration_ms} ms)")
        if outcome.error is not None:
            print(f"     {type(outcome.error).__name__}: {outcome.error}")
    print(f"\n{len(report.passed)} passed, {len(report.failed)} failed")
    return 0 if report.ok else 1


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
