"""
Scenario registry and sequential runner.

Scenarios are async functions taking a ``Connection``; ``@scenario`` registers
them by name. ``run`` executes the selected ones one after another, each on
its own fork of the connection, and records how each ended. A failing
scenario stops at its first failure but does not stop the run.
"""

from __future__ import annotations

import importlib
import pkgutil
from dataclasses import dataclass, field
from fnmatch import fnmatch
from typing import Awaitable, Callable, Iterable, Optional

from api.utils.logger import log_request
from harness.connection import Connection
from harness.errors import ScenarioNotFoundError
from harness.log import get_logger, reset_scenario, set_scenario

logger = get_logger()

ScenarioFn = Callable[[Connection], Awaitable[None]]

REGISTRY: dict[str, ScenarioFn] = {}


def scenario(fn: Optional[ScenarioFn] = None, *, name: Optional[str] = None):
    """Register ``fn`` under ``name`` (default: the function name)."""

    def _register(f: ScenarioFn) -> ScenarioFn:
        key = name or f.__name__
        if key in REGISTRY and REGISTRY[key] is not f:
            raise ValueError(f"scenario {key!r} is already registered")
        REGISTRY[key] = f
        return f

    if fn is not None:
        return _register(fn)
    return _register


def discover(package: str = "harness.scenarios") -> dict[str, ScenarioFn]:
    """Import every module of ``package`` so their scenarios register."""
    pkg = importlib.import_module(package)
    for info in pkgutil.iter_modules(pkg.__path__, prefix=f"{package}."):
        importlib.import_module(info.name)
    return REGISTRY


def get(name: str) -> ScenarioFn:
    try:
        return REGISTRY[name]
    except KeyError:
        raise ScenarioNotFoundError(f"no scenario named {name!r}") from None


def select(include: Optional[Iterable[str]] = None, exclude: Optional[Iterable[str]] = None) -> list[str]:
    """Registered names matching any ``include`` glob and no ``exclude`` glob, sorted."""
    include = list(include or [])
    exclude = list(exclude or [])
    names = sorted(REGISTRY)
    if include:
        names = [n for n in names if any(fnmatch(n, p) for p in include)]
    return [n for n in names if not any(fnmatch(n, p) for p in exclude)]


@dataclass
class ScenarioOutcome:
    name: str
    passed: bool
    duration_ms: int
    error: Optional[BaseException] = None


@dataclass
class RunReport:
    outcomes: list[ScenarioOutcome] = field(default_factory=list)

    @property
    def passed(self) -> list[ScenarioOutcome]:
        return [o for o in self.outcomes if o.passed]

    @property
    def failed(self) -> list[ScenarioOutcome]:
        return [o for o in self.outcomes if not o.passed]

    @property
    def ok(self) -> bool:
        return not self.failed


async def run_one(name: str, connection: Connection) -> ScenarioOutcome:
    fn = get(name)
    token = set_scenario(name)
    timer = log_request(logger, f"scenario {name}")
    try:
        with timer:
            await fn(connection.fork())
    except Exception as e:
        logger.error("scenario traceback name=%s", name, exc_info=e)
        return ScenarioOutcome(name, False, timer.duration_ms, e)
    finally:
        reset_scenario(token)
    return ScenarioOutcome(name, True, timer.duration_ms)


async def run(
    connection: Connection,
    include: Optional[Iterable[str]] = None,
    exclude: Optional[Iterable[str]] = None,
) -> RunReport:
    names = select(include, exclude)
    if include and not names:
        raise ScenarioNotFoundError(f"no scenario matches {', '.join(include)}")
    report = RunReport()
    logger.info("run start scenarios=%s", len(names))
    for name in names:
        report.outcomes.append(await run_one(name, connection))
    logger.info("run end passed=%s failed=%s", len(report.passed), len(report.failed))
    return report
