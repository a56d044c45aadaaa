"""Hourly, daily and monthly access analysis.

Each ``analyze_*`` method rewinds the record source and makes one full pass
over it, filling one frequency table. Statistics are read-only queries over
the filled tables and refuse to answer before their pass has run.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from ..core.config import DEFAULT_LOG_FILE
from ..core.reader import LogfileReader
from ..observability.loguru_config import get_logger, timing_context
from .frequency import FrequencyTable

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..core.records import LogRecord, RecordSource

__all__ = [
    "AnalysisNotRunError",
    "Granularity",
    "LogAnalyzer",
    "PassStats",
]

Granularity = Literal["hourly", "daily", "monthly"]

HOURS_PER_DAY = 24
DAYS_PER_MONTH = 28
MONTHS_PER_YEAR = 12

logger = get_logger("analyzer")


class AnalysisNotRunError(RuntimeError):
    """Raised when a statistic is queried before its analysis pass."""

    def __init__(self, granularity: Granularity) -> None:
        self.granularity = granularity
        super().__init__(
            f"{granularity} data has not been analyzed; "
            f"call analyze_{granularity}() first"
        )


@dataclass(frozen=True)
class PassStats:
    """Outcome of one analysis pass.

    Attributes
    ----------
    granularity : str
        Table filled by the pass
    records : int
        Records read from the source
    counted : int
        Records that landed in a bucket
    skipped : int
        Records whose field had no bucket
    """

    granularity: Granularity
    records: int
    counted: int
    skipped: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class LogAnalyzer:
    """Analyze web accesses by hour, day of month and month of year.

    Parameters
    ----------
    source
        A record source, a log file name, or None for ``demo.log``

    Example
    -------
    >>> with LogAnalyzer("access.log") as analyzer:
    ...     analyzer.analyze_hourly()
    ...     analyzer.busiest_hour()
    """

    def __init__(self, source: RecordSource | str | Path | None = None) -> None:
        if source is None:
            source = DEFAULT_LOG_FILE
        if isinstance(source, (str, Path)):
            source = LogfileReader(source)

        self.source = source
        self._hourly = FrequencyTable("hour", HOURS_PER_DAY, first_value=0)
        self._daily = FrequencyTable("day", DAYS_PER_MONTH, first_value=1)
        self._monthly = FrequencyTable("month", MONTHS_PER_YEAR, first_value=1)
        self._analyzed: set[Granularity] = set()

    def __enter__(self) -> LogAnalyzer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the record source if it holds a resource."""
        close = getattr(self.source, "close", None)
        if close is not None:
            close()

    # ------------------------------------------------------------------
    # Passes
    # ------------------------------------------------------------------

    def analyze_hourly(self) -> PassStats:
        """Count accesses per hour of day.

        Raises
        ------
        BucketRangeError
            If a record carries an hour outside 0-23
        """
        return self._run_pass("hourly", self._hourly, lambda record: record.hour, skip_invalid=False)

    def analyze_daily(self) -> PassStats:
        """Count accesses per day of month. Days outside 1-28 are skipped."""
        return self._run_pass("daily", self._daily, lambda record: record.day)

    def analyze_monthly(self) -> PassStats:
        """Count accesses per month. Months outside 1-12 are skipped."""
        return self._run_pass("monthly", self._monthly, lambda record: record.month)

    def analyze_all(self) -> list[PassStats]:
        """Run the hourly, daily and monthly passes in turn."""
        return [self.analyze_hourly(), self.analyze_daily(), self.analyze_monthly()]

    def is_analyzed(self, granularity: Granularity) -> bool:
        return granularity in self._analyzed

    def _run_pass(
        self,
        granularity: Granularity,
        table: FrequencyTable,
        field: Callable[[LogRecord], int],
        *,
        skip_invalid: bool = True,
    ) -> PassStats:
        records = counted = 0
        # Counted apart so a failed pass leaves the table untouched
        scratch = table.blank()

        with timing_context(f"analyze_{granularity}", component="analyzer") as ctx:
            self.source.reset()
            while self.source.has_next():
                value = field(self.source.next())
                records += 1
                if skip_invalid and not scratch.covers(value):
                    continue
                scratch.increment(value)
                counted += 1
            ctx["records"] = records

        table.merge(scratch)
        self._analyzed.add(granularity)
        return PassStats(
            granularity=granularity,
            records=records,
            counted=counted,
            skipped=records - counted,
        )

    def _require(self, granularity: Granularity) -> None:
        if granularity not in self._analyzed:
            raise AnalysisNotRunError(granularity)

    # ------------------------------------------------------------------
    # Table views
    # ------------------------------------------------------------------

    @property
    def hour_counts(self) -> tuple[int, ...]:
        return self._hourly.counts

    @property
    def day_counts(self) -> tuple[int, ...]:
        return self._daily.counts

    @property
    def month_counts(self) -> tuple[int, ...]:
        return self._monthly.counts

    # ------------------------------------------------------------------
    # Hourly statistics
    # ------------------------------------------------------------------

    def number_of_accesses(self) -> int:
        """Total accesses, summed over the hourly table."""
        self._require("hourly")
        return self._hourly.total()

    def busiest_hour(self) -> int:
        self._require("hourly")
        return self._hourly.busiest()

    def quietest_hour(self) -> int:
        self._require("hourly")
        return self._hourly.quietest()

    def busiest_two_hour(self) -> int:
        """Start hour (0-22) of the busiest two-hour period."""
        self._require("hourly")
        return self._hourly.busiest_window(2)

    # ------------------------------------------------------------------
    # Daily statistics
    # ------------------------------------------------------------------

    def busiest_day(self) -> int:
        """Index (day - 1) of the busiest day of month."""
        self._require("daily")
        return self._daily.busiest()

    def quietest_day(self) -> int:
        """Index (day - 1) of the quietest day of month."""
        self._require("daily")
        return self._daily.quietest()

    # ------------------------------------------------------------------
    # Monthly statistics
    # ------------------------------------------------------------------

    def busiest_month(self) -> int:
        """Index (month - 1) of the busiest month."""
        self._require("monthly")
        return self._monthly.busiest()

    def quietest_month(self) -> int:
        """Index (month - 1) of the quietest month."""
        self._require("monthly")
        return self._monthly.quietest()

    def total_accesses_per_month(self) -> int:
        self._require("monthly")
        return self._monthly.total()

    def average_accesses_per_month(self) -> int:
        """Monthly total divided by 12, truncated."""
        return self.total_accesses_per_month() // MONTHS_PER_YEAR

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def summary(self) -> dict[str, Any]:
        """Collect every statistic whose pass has run.

        Returns
        -------
        dict
            Keys grouped by granularity ("hourly", "daily", "monthly")
        """
        result: dict[str, Any] = {}

        if self.is_analyzed("hourly"):
            result["hourly"] = {
                "number_of_accesses": self.number_of_accesses(),
                "busiest_hour": self.busiest_hour(),
                "quietest_hour": self.quietest_hour(),
                "busiest_two_hour": self.busiest_two_hour(),
                "counts": list(self.hour_counts),
            }
        if self.is_analyzed("daily"):
            result["daily"] = {
                "busiest_day": self.busiest_day(),
                "quietest_day": self.quietest_day(),
                "counts": list(self.day_counts),
            }
        if self.is_analyzed("monthly"):
            result["monthly"] = {
                "total_accesses": self.total_accesses_per_month(),
                "average_accesses": self.average_accesses_per_month(),
                "busiest_month": self.busiest_month(),
                "quietest_month": self.quietest_month(),
                "counts": list(self.month_counts),
            }

        logger.debug("Summary built", granularities=sorted(result))
        return result
