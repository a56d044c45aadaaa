"""Fixed-size frequency tables."""

from __future__ import annotations

import operator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

__all__ = ["BucketRangeError", "FrequencyTable"]


class BucketRangeError(IndexError):
    """Raised when a value has no bucket in the table."""

    pass


class FrequencyTable:
    """Counts per discrete time bucket.

    ``first_value`` maps the field value onto index 0: hours use 0, days and
    months are 1-based. Counts start at zero and only ever grow; the table
    is never resized.

    Extremal queries return the first index holding the extreme value.
    """

    def __init__(self, name: str, size: int, first_value: int = 0) -> None:
        if size < 1:
            raise ValueError(f"Table size must be positive, got {size}")
        self.name = name
        self.first_value = first_value
        self._counts = [0] * size

    def __len__(self) -> int:
        return len(self._counts)

    def __getitem__(self, index: int) -> int:
        return self._counts[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self._counts)

    def __repr__(self) -> str:
        return f"FrequencyTable({self.name!r}, {self._counts!r})"

    @property
    def counts(self) -> tuple[int, ...]:
        return tuple(self._counts)

    def index_of(self, value: int) -> int:
        return value - self.first_value

    def covers(self, value: int) -> bool:
        """Return True if ``value`` maps onto a bucket."""
        return 0 <= self.index_of(value) < len(self._counts)

    def increment(self, value: int) -> None:
        """Count one occurrence of ``value``.

        Raises
        ------
        BucketRangeError
            If ``value`` has no bucket
        """
        if not self.covers(value):
            raise BucketRangeError(
                f"{self.name} value {value} outside "
                f"{self.first_value}..{self.first_value + len(self._counts) - 1}"
            )
        self._counts[self.index_of(value)] += 1

    def blank(self) -> FrequencyTable:
        """Return an all-zero table with the same name, size and mapping."""
        return FrequencyTable(self.name, len(self._counts), self.first_value)

    def merge(self, other: FrequencyTable) -> None:
        """Add the counts of an equally shaped table."""
        if len(other) != len(self._counts) or other.first_value != self.first_value:
            raise ValueError(f"Cannot merge {other!r} into {self!r}")
        for index, count in enumerate(other):
            self._counts[index] += count

    def total(self) -> int:
        return sum(self._counts)

    def busiest(self) -> int:
        return _first_extreme(self._counts, operator.gt)

    def quietest(self) -> int:
        return _first_extreme(self._counts, operator.lt)

    def busiest_window(self, width: int = 2) -> int:
        """Return start index of the busiest run of ``width`` adjacent buckets."""
        if not 1 <= width <= len(self._counts):
            raise ValueError(f"Window width must be in 1..{len(self._counts)}, got {width}")
        sums = [
            sum(self._counts[start:start + width])
            for start in range(len(self._counts) - width + 1)
        ]
        return _first_extreme(sums, operator.gt)


def _first_extreme(values: list[int], better: Callable[[int, int], bool]) -> int:
    # Champion starts at 0 and moves only on strict improvement.
    champion = 0
    for index in range(1, len(values)):
        if better(values[index], values[champion]):
            champion = index
    return champion
