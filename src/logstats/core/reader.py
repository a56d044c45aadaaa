"""File-backed record source.

Log lines hold five whitespace separated integers::

    YEAR MONTH DAY HOUR MINUTE

for example ``2015 06 01 14 05``. Any trailing fields are ignored.
"""

from __future__ import annotations

from pathlib import Path
from typing import IO, TYPE_CHECKING

from ..observability.loguru_config import get_logger
from .records import LogRecord, LogSourceError, NoMoreRecordsError

if TYPE_CHECKING:
    from collections.abc import Iterator

__all__ = [
    "LogParseError",
    "LogfileReader",
    "parse_log_line",
]

FIELD_COUNT = 5

logger = get_logger("reader")


class LogParseError(ValueError):
    """Raised when a log line cannot be turned into a record."""

    pass


def parse_log_line(line: str) -> LogRecord:
    """Parse a single log line.

    Parameters
    ----------
    line
        Raw log line

    Returns
    -------
    LogRecord
        Parsed record

    Raises
    ------
    LogParseError
        If the line has fewer than five fields, a field is not an integer,
        or hour/minute are out of range
    """
    fields = line.split()
    if len(fields) < FIELD_COUNT:
        raise LogParseError(f"Expected {FIELD_COUNT} fields, got {len(fields)}: {line!r}")

    try:
        year, month, day, hour, minute = (int(value) for value in fields[:FIELD_COUNT])
    except ValueError as exc:
        raise LogParseError(f"Non-numeric field in {line!r}") from exc

    if not 0 <= hour <= 23:
        raise LogParseError(f"Hour out of range: {hour}")
    if not 0 <= minute <= 59:
        raise LogParseError(f"Minute out of range: {minute}")

    # Day and month are range-checked by the analyzer, not here.
    return LogRecord(year=year, month=month, day=day, hour=hour, minute=minute)


class LogfileReader:
    """Lazy, restartable reader over a log file.

    The file is reopened on every ``reset()`` and parsed one record ahead,
    so ``has_next()`` is exact. Unparseable lines, including lines with
    undecodable bytes, are skipped with a warning and counted in
    ``skipped_lines`` for the current pass.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        if not self.path.is_file():
            raise LogSourceError(f"Log file not found: {self.path}")

        self._handle: IO[str] | None = None
        self._pending: LogRecord | None = None
        self._line_number = 0
        self.skipped_lines = 0
        self.reset()

    def __enter__(self) -> LogfileReader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def reset(self) -> None:
        self.close()
        try:
            self._handle = open(self.path, encoding="utf-8", errors="replace")
        except OSError as exc:
            raise LogSourceError(f"Cannot open log file {self.path}: {exc}") from exc

        self._line_number = 0
        self.skipped_lines = 0
        try:
            self._pending = self._read_ahead()
        except Exception:
            self.close()
            raise

    def has_next(self) -> bool:
        return self._pending is not None

    def next(self) -> LogRecord:
        if self._pending is None:
            raise NoMoreRecordsError(f"No more records in {self.path}")
        record = self._pending
        self._pending = self._read_ahead()
        return record

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
        self._pending = None

    def lines(self) -> Iterator[str]:
        """Yield the raw data lines, skipping blanks and comments."""
        with open(self.path, encoding="utf-8", errors="replace") as f:
            for raw in f:
                line = raw.strip()
                if line and not line.startswith("#"):
                    yield line

    def _read_ahead(self) -> LogRecord | None:
        if self._handle is None:
            return None

        for raw in self._handle:
            self._line_number += 1
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            try:
                return parse_log_line(line)
            except LogParseError as exc:
                self.skipped_lines += 1
                logger.warning(
                    "Skipping malformed log line",
                    path=str(self.path),
                    line_number=self._line_number,
                    error=str(exc),
                )

        # Exhausted
        self._handle.close()
        self._handle = None
        return None
