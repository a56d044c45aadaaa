"""Shared fixtures."""

from __future__ import annotations

import os

import pytest
from loguru import logger

import logstats.core.config as config_module
from logstats.core.records import InMemoryRecordSource, LogRecord


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    """Isolate tests from LOGSTATS_* variables, cwd config and cached config."""
    for var in [k for k in os.environ if k.startswith("LOGSTATS_")]:
        monkeypatch.delenv(var)
    monkeypatch.chdir(tmp_path)
    config_module.reset_config()

    yield

    config_module.reset_config()
    # CLI runs bind sinks to the captured stderr of the finished test
    logger.remove()


def make_records(hours=(), days=(), months=()):
    """Build records varying a single field; the others stay valid."""
    records = [LogRecord(2015, 6, 1, hour, 0) for hour in hours]
    records += [LogRecord(2015, 6, day, 12, 0) for day in days]
    records += [LogRecord(2015, month, 1, 12, 0) for month in months]
    return records


@pytest.fixture
def source_factory():
    def factory(hours=(), days=(), months=()):
        return InMemoryRecordSource(make_records(hours, days, months))

    return factory


@pytest.fixture
def sample_log(tmp_path):
    path = tmp_path / "sample.log"
    path.write_text(
        "# sample access log\n"
        "2015 01 03 00 10\n"
        "2015 01 03 00 40\n"
        "2015 02 15 05 01\n"
        "\n"
        "2015 02 15 05 30\n"
        "2015 03 30 05 59\n"
        "2016 12 28 23 00\n",
        encoding="utf-8",
    )
    return path
