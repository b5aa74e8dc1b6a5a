"""Unit tests for the logger setup shared by the service and the harness."""
import logging
import sys

import pytest

from api.utils.logger import ColorFormatter, configure_logging, log_request
from harness.log import enable_console, get_logger


class _Collect(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def collected():
    logger = logging.getLogger("test-log-request")
    logger.setLevel(logging.DEBUG)
    handler = _Collect()
    logger.addHandler(handler)
    yield logger, handler.records
    logger.removeHandler(handler)


@pytest.mark.unit
class TestLogRequest:
    def test_ok_line_and_duration(self, collected):
        logger, records = collected
        with log_request(logger, "scenario post_create") as timer:
            pass
        assert timer.duration_ms >= 0
        assert records[-1].levelno == logging.INFO
        assert records[-1].getMessage().startswith("scenario post_create ok duration_ms=")

    def test_failure_is_logged_and_propagates(self, collected):
        logger, records = collected
        with pytest.raises(RuntimeError):
            with log_request(logger, "scenario post_create"):
                raise RuntimeError("boom")
        assert records[-1].levelno == logging.WARNING
        assert "failed" in records[-1].getMessage()
        assert "boom" in records[-1].getMessage()


@pytest.mark.unit
class TestConsole:
    def test_configure_with_console_adds_color_handler(self, tmp_path):
        logger = configure_logging(name="test-console-on", log_dir=tmp_path, log_file="c.log", console=True)
        streams = [h for h in logger.handlers if getattr(h, "stream", None) is sys.stdout]
        assert len(streams) == 1
        assert isinstance(streams[0].formatter, ColorFormatter)
        assert (tmp_path / "c.log").exists()

    def test_configure_without_console_is_file_only(self, tmp_path):
        logger = configure_logging(name="test-console-off", log_dir=tmp_path, log_file="f.log")
        assert all(getattr(h, "stream", None) is not sys.stdout for h in logger.handlers)

    def test_color_formatter(self):
        record = logging.LogRecord("board", logging.ERROR, __file__, 1, "bad thing", None, None)
        record.request_id = "rid"
        colored = ColorFormatter(fmt="%(levelname)s %(request_id)s %(message)s", enable_color=True)
        plain = ColorFormatter(fmt="%(levelname)s %(request_id)s %(message)s", enable_color=False)
        assert "\x1b[31mERROR\x1b[0m" in colored.format(record)
        assert plain.format(record) == "ERROR rid bad thing"

    def test_harness_console_is_added_once(self):
        logger = get_logger()
        before = list(logger.handlers)
        try:
            enable_console()
            enable_console()
            added = [h for h in logger.handlers if h not in before]
            assert len(added) == 1
            assert isinstance(added[0].formatter, ColorFormatter)
            assert "scenario=%(scenario)s" in added[0].formatter._fmt
        finally:
            for h in logger.handlers[:]:
                if h not in before:
                    logger.removeHandler(h)
            logger._console = False
