"""Simulated log data for demos and tests."""

from __future__ import annotations

import random
from pathlib import Path

from ..observability.loguru_config import get_logger, timing_context
from .records import LogRecord

__all__ = ["LogfileCreator"]

logger = get_logger("creator")


class LogfileCreator:
    """Generate random, chronologically sorted log records.

    Days are drawn from 1-28 so every generated record lands in a daily
    bucket. Pass ``seed`` for reproducible output.
    """

    def __init__(self, seed: int | None = None, years: tuple[int, int] = (2015, 2016)) -> None:
        self._random = random.Random(seed)
        self.years = years

    def create_entry(self) -> LogRecord:
        """Create a single random record."""
        return LogRecord(
            year=self._random.randint(*self.years),
            month=self._random.randint(1, 12),
            day=self._random.randint(1, 28),
            hour=self._random.randint(0, 23),
            minute=self._random.randint(0, 59),
        )

    def create_entries(self, count: int) -> list[LogRecord]:
        """Create ``count`` records sorted by time."""
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        return sorted(self.create_entry() for _ in range(count))

    def create_file(self, path: str | Path, count: int) -> Path:
        """Write ``count`` simulated records to ``path``.

        Returns
        -------
        Path
            Path of the written file
        """
        path = Path(path)
        with timing_context("create_logfile", component="creator", path=str(path), count=count):
            entries = self.create_entries(count)
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                for entry in entries:
                    f.write(entry.to_line() + "\n")

        logger.info("Simulated log written", path=str(path), count=count)
        return path
