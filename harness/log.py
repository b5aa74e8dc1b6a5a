"""
Harness logging: the service's logger setup plus the running scenario's name
on every line.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Optional

from api.utils.logger import configure_logging, console_handler, line_format

SCENARIO: ContextVar[str] = ContextVar("scenario", default="-")

_EXTRA_FORMAT = "scenario=%(scenario)s "


class ScenarioFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003 (shadow built-in name)
        record.scenario = SCENARIO.get("-")
        return True


def get_logger() -> logging.Logger:
    return configure_logging(
        name="harness",
        log_file="harness.log",
        extra_format=_EXTRA_FORMAT,
        filters=(ScenarioFilter(),),
    )


def enable_console() -> None:
    """Mirror harness lines to stdout. Calling it again is a no-op."""
    logger = get_logger()
    if getattr(logger, "_console", False):
        return
    logger.addHandler(console_handler(line_format(_EXTRA_FORMAT), logger.level, (ScenarioFilter(),)))
    logger._console = True  # type: ignore[attr-defined]


def set_level(level: str) -> None:
    logger = get_logger()
    numeric_level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
    logger.setLevel(numeric_level)
    for handler in logger.handlers:
        handler.setLevel(numeric_level)


def set_scenario(name: Optional[str]):
    """Returns the token to hand back to ``reset_scenario``."""
    return SCENARIO.set(name or "-")


def reset_scenario(token) -> None:
    SCENARIO.reset(token)
