"""Tests for loguru setup and timing."""

from __future__ import annotations

import json

import pytest
from loguru import logger

from logstats.observability.loguru_config import (
    LOG_FILE_NAME,
    configure_loguru,
    get_logger,
    timing_context,
)


@pytest.fixture
def captured():
    """Collect loguru records in memory."""
    records = []
    logger.remove()
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


def test_get_logger_binds_component(captured):
    get_logger("reader").info("hello")

    assert captured[-1]["extra"]["component"] == "reader"
    assert captured[-1]["message"] == "hello"


def test_timing_context_logs_start_and_end(captured):
    with timing_context("analyze_hourly", component="analyzer") as ctx:
        ctx["records"] = 12

    start, end = captured[-2], captured[-1]
    assert start["message"] == "START: analyze_hourly"
    assert end["message"] == "END: analyze_hourly"
    assert end["extra"]["timing"] is True
    assert end["extra"]["records"] == 12
    assert end["extra"]["duration_ms"] >= 0


def test_timing_context_logs_failure(captured):
    with pytest.raises(KeyError):
        with timing_context("broken"):
            raise KeyError("boom")

    failure = captured[-1]
    assert failure["level"].name == "ERROR"
    assert failure["message"] == "FAILED: broken"
    assert failure["extra"]["error_type"] == "KeyError"


def test_configure_loguru_writes_json_file(tmp_path):
    log_dir = tmp_path / "logs"
    configure_loguru(level="INFO", log_dir=log_dir, enable_console=False)

    get_logger("cli").info("written to file")
    logger.remove()

    lines = (log_dir / LOG_FILE_NAME).read_text(encoding="utf-8").splitlines()
    payloads = [json.loads(line) for line in lines]
    messages = [p["record"]["message"] for p in payloads]
    assert "written to file" in messages
    assert payloads[-1]["record"]["extra"]["component"] == "cli"


def test_configure_loguru_filters_level(tmp_path):
    log_dir = tmp_path / "logs"
    configure_loguru(level="WARNING", log_dir=log_dir, enable_console=False)

    get_logger().info("too quiet")
    get_logger().warning("loud enough")
    logger.remove()

    content = (log_dir / LOG_FILE_NAME).read_text(encoding="utf-8")
    assert "too quiet" not in content
    assert "loud enough" in content
