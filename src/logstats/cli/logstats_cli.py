#!/usr/bin/env python3
"""CLI for web log access statistics."""

from __future__ import annotations

import sys

import click

from ..core.creator import LogfileCreator
from ..core.reader import LogfileReader
from ..rollups.analyzer import LogAnalyzer
from .cli_common import CLIContext, cli_command, handle_cli_error, handle_cli_success

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@click.group(
    context_settings=CONTEXT_SETTINGS,
    help="Hourly, daily and monthly access statistics for web server logs",
)
def cli() -> None:
    """Root command."""


def _logfile(ctx: CLIContext, logfile: str | None) -> str:
    return logfile or str(ctx.config.get("source.path"))


@cli.command("report")
@click.argument("logfile", required=False)
@cli_command
def report_command(ctx: CLIContext, logfile: str | None) -> int:
    """Analyze LOGFILE and print every statistic."""
    try:
        with LogfileReader(_logfile(ctx, logfile)) as reader:
            analyzer = LogAnalyzer(reader)
            passes = analyzer.analyze_all()
            summary = analyzer.summary()
    except Exception as exc:
        return handle_cli_error(ctx, exc)

    if ctx.json_output:
        return handle_cli_success(
            ctx,
            summary,
            meta={"logfile": str(reader.path), "passes": [p.to_dict() for p in passes]},
        )

    hourly = summary["hourly"]
    daily = summary["daily"]
    monthly = summary["monthly"]
    busiest_two = hourly["busiest_two_hour"]
    data = {
        "Log file": str(reader.path),
        "Number of accesses": hourly["number_of_accesses"],
        "Busiest hour": hourly["busiest_hour"],
        "Quietest hour": hourly["quietest_hour"],
        "Busiest two-hour period": f"{busiest_two}-{busiest_two + 2}",
        "Busiest day": daily["busiest_day"] + 1,
        "Quietest day": daily["quietest_day"] + 1,
        "Busiest month": MONTH_NAMES[monthly["busiest_month"]],
        "Quietest month": MONTH_NAMES[monthly["quietest_month"]],
        "Total accesses (monthly)": monthly["total_accesses"],
        "Average accesses per month": monthly["average_accesses"],
    }
    skipped = sum(p.skipped for p in passes)
    if skipped:
        data["Records outside day/month range"] = skipped
    return handle_cli_success(ctx, data)


@cli.command("hourly")
@click.argument("logfile", required=False)
@cli_command
def hourly_command(ctx: CLIContext, logfile: str | None) -> int:
    """Print the hourly access counts of LOGFILE."""
    try:
        with LogfileReader(_logfile(ctx, logfile)) as reader:
            analyzer = LogAnalyzer(reader)
            analyzer.analyze_hourly()
    except Exception as exc:
        return handle_cli_error(ctx, exc)

    counts = analyzer.hour_counts
    if ctx.json_output:
        return handle_cli_success(ctx, {str(hour): count for hour, count in enumerate(counts)})

    lines = ["Hr: Count"] + [f"{hour}: {count}" for hour, count in enumerate(counts)]
    return handle_cli_success(ctx, lines)


@cli.command("data")
@click.argument("logfile", required=False)
@cli_command
def data_command(ctx: CLIContext, logfile: str | None) -> int:
    """Print the raw data lines of LOGFILE."""
    try:
        with LogfileReader(_logfile(ctx, logfile)) as reader:
            lines = list(reader.lines())
    except Exception as exc:
        return handle_cli_error(ctx, exc)

    return handle_cli_success(ctx, lines, meta={"lines": len(lines)} if ctx.json_output else None)


@cli.command("generate")
@click.argument("output", type=click.Path(dir_okay=False))
@click.option("--count", "-n", type=click.IntRange(min=0), help="Number of records")
@click.option("--seed", type=int, help="Random seed for reproducible output")
@cli_command
def generate_command(ctx: CLIContext, output: str, count: int | None, seed: int | None) -> int:
    """Write a simulated log file to OUTPUT."""
    if count is None:
        count = int(ctx.config.get("generator.count", 100))
    if seed is None:
        seed = ctx.config.get("generator.seed")

    try:
        path = LogfileCreator(seed=seed).create_file(output, count)
    except Exception as exc:
        return handle_cli_error(ctx, exc)

    return handle_cli_success(ctx, {"output": str(path), "records": count})


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    if args is None:
        args = sys.argv[1:]

    try:
        return cli.main(args=list(args), standalone_mode=False) or 0
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.exceptions.Abort:
        return 1
    except SystemExit as exc:
        return int(exc.code) if exc.code is not None else 0


if __name__ == "__main__":
    sys.exit(main())
