"""Loguru configuration with timing for analysis passes.

This module provides centralized loguru configuration with:
- Coloured console output on stderr
- Optional structured JSON log file
- A context manager that times an operation and logs its duration
"""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = [
    "LOG_FILE_NAME",
    "configure_loguru",
    "get_logger",
    "timing_context",
]

LOG_FILE_NAME = "logstats.jsonl"


def configure_loguru(
    *,
    level: str = "WARNING",
    log_dir: str | Path | None = None,
    rotation: str = "10 MB",
    retention: str = "10 days",
    enable_console: bool = True,
) -> None:
    """Configure loguru sinks.

    Parameters
    ----------
    level
        Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_dir
        Directory for the JSON log file; no file sink when None
    rotation
        Log rotation policy (e.g., "10 MB", "1 day")
    retention
        Log retention policy (e.g., "10 days")
    enable_console
        Enable stderr output

    Example
    -------
    >>> configure_loguru(level="INFO", log_dir=Path("logs"))
    """
    level = level.upper()

    # Remove default handler
    logger.remove()

    if enable_console:
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[component]}</cyan> | "
            "<level>{message}</level>",
            level=level,
            colorize=True,
            backtrace=False,
            diagnose=False,
        )

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / LOG_FILE_NAME,
            format="{message}",
            level=level,
            rotation=rotation,
            retention=retention,
            serialize=True,  # JSON serialization
            backtrace=True,
            diagnose=False,
        )

    logger.configure(extra={"component": "logstats"})
    logger.debug("Loguru configured", level=level, log_dir=str(log_dir) if log_dir else None)


def get_logger(component: str = "logstats") -> Any:
    """Get logger bound to a component name (reader, analyzer, cli, ...)."""
    return logger.bind(component=component)


@contextmanager
def timing_context(
    operation: str,
    *,
    component: str = "logstats",
    **metadata: Any,
) -> Generator[dict[str, Any], None, None]:
    """Time an operation and log its duration.

    The yielded dict can be updated with results; its contents are logged
    with the END record.

    Example
    -------
    >>> with timing_context("analyze_hourly", component="analyzer") as ctx:
    ...     ctx["records"] = run_pass()
    """
    bound = logger.bind(component=component, timing=True, operation=operation)
    context: dict[str, Any] = dict(metadata)
    start_ns = time.perf_counter_ns()

    bound.debug(f"START: {operation}", phase="start", **metadata)

    try:
        yield context
    except Exception as exc:
        duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
        bound.error(
            f"FAILED: {operation}",
            phase="error",
            duration_ms=duration_ms,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        raise

    duration_ms = (time.perf_counter_ns() - start_ns) / 1_000_000
    bound.debug(f"END: {operation}", phase="end", duration_ms=duration_ms, **context)
