from __future__ import annotations

import copy
import logging
import os
import sys
import time
import uuid
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Sequence

REQUEST_ID: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003 (shadow built-in name)
        record.request_id = REQUEST_ID.get("-")
        return True


class ColorFormatter(logging.Formatter):
    """
    Console-only color formatter (ANSI).
    - Timestamp: blue
    - Level: persistent per-level color
    - Auto-disables if NO_COLOR is set or output is not a TTY
    """

    _RESET = "\x1b[0m"
    _DIM = "\x1b[2m"
    _BLUE = "\x1b[34m"

    _LEVEL_COLORS: dict[int, str] = {
        logging.DEBUG: "\x1b[36m",  # cyan
        logging.INFO: "\x1b[32m",  # green
        logging.WARNING: "\x1b[33m",  # yellow
        logging.ERROR: "\x1b[31m",  # red
        logging.CRITICAL: "\x1b[35m",  # magenta
    }

    def __init__(self, *args, enable_color: bool = True, **kwargs):
        super().__init__(*args, **kwargs)
        self.enable_color = enable_color

    def format(self, record: logging.LogRecord) -> str:
        if not self.enable_color:
            return super().format(record)

        r = copy.copy(record)
        level_color = self._LEVEL_COLORS.get(getattr(r, "levelno", logging.INFO), "\x1b[37m")  # white fallback

        # These fields are used by the format string below.
        if getattr(r, "asctime", None):
            r.asctime = f"{self._BLUE}{r.asctime}{self._RESET}"
        r.levelname = f"{level_color}{r.levelname}{self._RESET}"
        r.name = f"{self._DIM}{r.name}{self._RESET}"
        r.request_id = f"{self._DIM}{getattr(r, 'request_id', '-')}{self._RESET}"
        return super().format(r)


def _should_enable_color(stream) -> bool:
    if os.getenv("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _parse_level(level: str) -> int:
    lvl = (level or "INFO").upper()
    return logging.getLevelNamesMapping().get(lvl, logging.INFO)


DATEFMT = "%Y-%m-%d %H:%M:%S"


def line_format(extra_format: str = "") -> str:
    return (
        "%(asctime)s %(levelname)-8s %(name)s "
        "pid=%(process)d request_id=%(request_id)s " + extra_format + "src=%(filename)s:%(lineno)d "
        "%(message)s"
    )


def console_handler(fmt: str, level: int, filters: Sequence[logging.Filter] = ()) -> logging.Handler:
    """Colored stdout handler; color follows ``_should_enable_color``."""
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level)
    ch.setFormatter(ColorFormatter(fmt=fmt, datefmt=DATEFMT, enable_color=_should_enable_color(sys.stdout)))
    ch.addFilter(RequestIdFilter())
    for extra in filters:
        ch.addFilter(extra)
    return ch


def configure_logging(
    *,
    name: str = "board",
    log_dir: str | Path | None = None,
    log_file: str = "backend.log",
    level: str = "INFO",
    console: bool = False,
    extra_format: str = "",
    filters: Sequence[logging.Filter] = (),
) -> logging.Logger:
    """
    Configure a rotating file logger under ``LOG_DIR`` (default ./logs) and,
    when ``console`` is set, a colored stdout logger. ``extra_format`` adds
    fields to each line; ``filters`` must populate them on the record.
    Idempotent per logger name: safe to call multiple times.
    """

    logger = logging.getLogger(name)
    if getattr(logger, "_configured", False):
        return logger

    level = os.getenv("LOG_LEVEL", level)
    numeric_level = _parse_level(level)

    logger.setLevel(numeric_level)
    logger.propagate = False

    log_dir = Path(log_dir or os.getenv("LOG_DIR", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    file_path = log_dir / log_file

    fmt = line_format(extra_format)
    file_formatter = logging.Formatter(fmt=fmt, datefmt=DATEFMT)

    # File handler (rotating)
    fh = RotatingFileHandler(
        filename=str(file_path),
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=10,
        encoding="utf-8",
    )
    fh.setLevel(numeric_level)
    fh.setFormatter(file_formatter)
    fh.addFilter(RequestIdFilter())
    for extra in filters:
        fh.addFilter(extra)
    logger.addHandler(fh)

    if console:
        logger.addHandler(console_handler(fmt, numeric_level, filters))

    logger._configured = True  # type: ignore[attr-defined]
    logger.debug("Logger configured (file=%s level=%s)", file_path, level)
    return logger


def set_request_id(request_id: Optional[str] = None) -> str:
    rid = request_id or str(uuid.uuid4())
    REQUEST_ID.set(rid)
    return rid


def clear_request_id() -> None:
    REQUEST_ID.set("-")


class log_request:
    """
    Small helper to time operations:
      with log_request(logger, "scenario post_erase_by_non_owner_is_forbidden") as timer:
          ...
      timer.duration_ms

    Logs ``ok`` or ``failed`` on exit and never suppresses the exception.
    """

    def __init__(self, logger: logging.Logger, name: str):
        self.logger = logger
        self.name = name
        self.start = 0.0
        self.duration_ms = 0

    def __enter__(self):
        self.start = time.time()
        self.logger.debug("start %s", self.name)
        return self

    def __exit__(self, exc_type, exc, tb):
        self.duration_ms = int((time.time() - self.start) * 1000)
        if exc is None:
            self.logger.info("%s ok duration_ms=%s", self.name, self.duration_ms)
        else:
            self.logger.warning("%s failed duration_ms=%s error=%r", self.name, self.duration_ms, exc)
        return False
