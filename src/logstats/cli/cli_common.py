"""Common CLI utilities: JSON output, stable exit codes, logging setup."""

from __future__ import annotations

import functools
import json
import traceback
from enum import IntEnum
from typing import Any

import click

from ..core.config import Config, ConfigError, get_config
from ..core.reader import LogParseError
from ..core.records import LogSourceError
from ..observability.loguru_config import configure_loguru, get_logger
from ..rollups.analyzer import AnalysisNotRunError
from ..rollups.frequency import BucketRangeError

__all__ = [
    "CLIContext",
    "ExitCode",
    "cli_command",
    "exit_code_for",
    "handle_cli_error",
    "handle_cli_success",
]

logger = get_logger("cli")


class ExitCode(IntEnum):
    """Stable exit codes for CLI commands."""

    SUCCESS = 0  # Successful execution
    VALIDATION_ERROR = 2  # Bad record or bad arguments
    IO_ERROR = 5  # Log file missing or unreadable
    CONFIG_ERROR = 6  # Configuration error
    UNKNOWN_ERROR = 7  # Unknown/unexpected error


class CLIContext:
    """Context for CLI execution with JSON output and loaded configuration."""

    def __init__(
        self,
        json_output: bool = False,
        verbose: bool = False,
        config: Config | None = None,
    ) -> None:
        self.json_output = json_output
        self.verbose = verbose
        self.config = config or Config()

    def output(
        self,
        data: Any,
        status: str = "success",
        error: str | None = None,
        meta: dict[str, Any] | None = None,
    ) -> None:
        """Output result in the selected format.

        Args:
            data: Result data
            status: Status ("success" or "error")
            error: Error message if status is error
            meta: Additional metadata
        """
        if self.json_output:
            # JSON mode: stdout carries only the JSON document
            result: dict[str, Any] = {"status": status}

            if error:
                result["error"] = error
            else:
                result["data"] = data

            if meta:
                result["meta"] = meta

            click.echo(json.dumps(result, ensure_ascii=False, indent=2))
            return

        if status == "error":
            click.echo(f"Error: {error}", err=True)
        elif isinstance(data, dict):
            for key, value in data.items():
                click.echo(f"{key}: {value}")
        elif isinstance(data, list):
            for item in data:
                click.echo(item)
        elif data is not None:
            click.echo(data)


def cli_command(func):
    """Decorator adding the common options to a command.

    Adds:
    - --json: JSON output mode
    - --verbose: Verbose output (DEBUG logging, tracebacks)
    - --config: Config file path
    - --log-level: Override configured log level

    Builds the ``CLIContext`` and configures logging before the command runs.
    """

    @click.option("--json", "json_output", is_flag=True, help="Output as JSON (machine-readable)")
    @click.option("--verbose", "-v", is_flag=True, help="Verbose output")
    @click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False),
        help="Config file (default: logstats.yaml)",
    )
    @click.option(
        "--log-level",
        type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
        help="Log level",
    )
    @functools.wraps(func)
    def wrapper(
        json_output: bool,
        verbose: bool,
        config_path: str | None,
        log_level: str | None,
        *args: Any,
        **kwargs: Any,
    ) -> int:
        ctx = CLIContext(json_output=json_output, verbose=verbose)

        try:
            config = Config.load(config_path) if config_path else get_config()
        except ConfigError as exc:
            configure_loguru(level="WARNING")
            return handle_cli_error(ctx, exc)

        ctx.config = config
        level = log_level or ("DEBUG" if verbose else config.get("logging.level", "WARNING"))
        try:
            configure_loguru(level=str(level), log_dir=config.get("logging.path"))
        except ValueError as exc:
            configure_loguru(level="WARNING")
            return handle_cli_error(ctx, ConfigError(f"Invalid logging configuration: {exc}"))

        return func(ctx, *args, **kwargs)

    return wrapper


def exit_code_for(exc: Exception) -> ExitCode:
    """Map an exception to a stable exit code."""
    if isinstance(exc, ConfigError):
        return ExitCode.CONFIG_ERROR
    if isinstance(exc, LogSourceError | OSError):
        return ExitCode.IO_ERROR
    if isinstance(exc, LogParseError | BucketRangeError | AnalysisNotRunError | ValueError):
        return ExitCode.VALIDATION_ERROR
    return ExitCode.UNKNOWN_ERROR


def handle_cli_error(ctx: CLIContext, exc: Exception) -> int:
    """Report an error and return its exit code."""
    exit_code = exit_code_for(exc)
    error_msg = str(exc)

    logger.bind(error_type=type(exc).__name__, exit_code=int(exit_code)).error(f"Command failed: {error_msg}")

    ctx.output(None, status="error", error=error_msg, meta={"exit_code": int(exit_code)})

    if ctx.verbose and not ctx.json_output:
        click.echo("\nTraceback:", err=True)
        click.echo(traceback.format_exc(), err=True)

    return int(exit_code)


def handle_cli_success(ctx: CLIContext, data: Any, meta: dict[str, Any] | None = None) -> int:
    """Output a result and return the success code."""
    ctx.output(data, status="success", meta=meta)
    return int(ExitCode.SUCCESS)
