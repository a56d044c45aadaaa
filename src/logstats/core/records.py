"""Log records and the restartable record source contract.

The analyzer never iterates a file directly. It talks to a ``RecordSource``
which it rewinds before every pass, so the same source can feed the hourly,
daily and monthly tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = [
    "InMemoryRecordSource",
    "LogRecord",
    "LogSourceError",
    "NoMoreRecordsError",
    "RecordSource",
]


class LogSourceError(Exception):
    """Raised when a record source cannot be opened or read."""

    pass


class NoMoreRecordsError(LogSourceError):
    """Raised when ``next()`` is called on an exhausted source."""

    pass


@dataclass(frozen=True, order=True)
class LogRecord:
    """One access taken from the web server log.

    Field order matches the log line layout, so records sort chronologically.

    Attributes
    ----------
    year : int
        Four digit year
    month : int
        Month of year, 1-based
    day : int
        Day of month, 1-based
    hour : int
        Hour of day, 0-23
    minute : int
        Minute of hour, 0-59
    """

    year: int
    month: int
    day: int
    hour: int
    minute: int = 0

    def to_line(self) -> str:
        """Format record as a log line."""
        return (
            f"{self.year:04d} {self.month:02d} {self.day:02d} "
            f"{self.hour:02d} {self.minute:02d}"
        )


@runtime_checkable
class RecordSource(Protocol):
    """Restartable sequence of log records."""

    def reset(self) -> None:
        """Rewind to the first record."""
        ...

    def has_next(self) -> bool:
        """Return True if another record is available."""
        ...

    def next(self) -> LogRecord:
        """Return the next record and advance."""
        ...


class InMemoryRecordSource:
    """Record source backed by a list, mainly for tests and embedding."""

    def __init__(self, records: Iterable[LogRecord] = ()) -> None:
        self._records = list(records)
        self._position = 0

    def __len__(self) -> int:
        return len(self._records)

    def reset(self) -> None:
        self._position = 0

    def has_next(self) -> bool:
        return self._position < len(self._records)

    def next(self) -> LogRecord:
        if not self.has_next():
            raise NoMoreRecordsError("No more records in memory source")
        record = self._records[self._position]
        self._position += 1
        return record
