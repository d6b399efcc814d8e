"""Unit tests for CLI logging setup."""

import io
import json
import logging
from collections.abc import Iterator

import pytest

from pagestack.utils.logging import (
    JSONLinesFormatter,
    PageStackFormatter,
    configure_from_cli,
    get_logger,
)


@pytest.fixture(autouse=True)
def restore_pagestack_logger() -> Iterator[None]:
    """Put the pagestack logger back the way the test found it."""
    logger = logging.getLogger("pagestack")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


def _record(msg: str, level: int = logging.INFO, **attrs: object) -> logging.LogRecord:
    record = logging.LogRecord("pagestack.site", level, __file__, 1, msg, (), None)
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    """Tests for the plain and JSON formatters."""

    def test_plain_format(self) -> None:
        assert PageStackFormatter().format(_record("about.html -> www/about.html")) == (
            "[INFO] about.html -> www/about.html"
        )

    def test_timestamped_format(self) -> None:
        line = PageStackFormatter(timestamps=True).format(_record("hi", logging.WARNING))

        assert line.startswith("[WARNING][")
        assert line.endswith("] hi")

    def test_json_lines_merge_extra_data(self) -> None:
        record = _record("Wrote 3 file(s)", extra_data={"written": 3, "failed": []})

        entry = json.loads(JSONLinesFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "pagestack.site"
        assert entry["msg"] == "Wrote 3 file(s)"
        assert entry["written"] == 3
        assert entry["failed"] == []


class TestConfigureFromCli:
    """Tests for flag handling."""

    def test_default_is_plain_info(self) -> None:
        stream = io.StringIO()
        configure_from_cli(stream=stream)

        logger = logging.getLogger("pagestack")
        logger.debug("hidden")
        logger.info("shown")

        assert stream.getvalue() == "[INFO] shown\n"

    def test_quiet_wins_over_verbose(self) -> None:
        configure_from_cli(verbose=True, quiet=True, stream=io.StringIO())

        assert logging.getLogger("pagestack").level == logging.WARNING

    def test_verbose_enables_debug(self) -> None:
        stream = io.StringIO()
        configure_from_cli(verbose=True, stream=stream)

        logging.getLogger("pagestack.templates.loader").debug("Wrapping index.md")

        assert "] Wrapping index.md" in stream.getvalue()

    def test_ci_writes_structured_json(self) -> None:
        stream = io.StringIO()
        configure_from_cli(ci=True, stream=stream)

        get_logger().structured(logging.INFO, "Wrote 2 file(s)", written=2)

        entry = json.loads(stream.getvalue())
        assert entry["msg"] == "Wrote 2 file(s)"
        assert entry["written"] == 2

    def test_reconfigure_replaces_handler(self) -> None:
        configure_from_cli(stream=io.StringIO())
        configure_from_cli(stream=io.StringIO())

        assert len(logging.getLogger("pagestack").handlers) == 1
