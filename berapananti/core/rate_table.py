"""Year (or year+month) indexed percentage rate tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple, Union


class RateTableError(ValueError):
    """Raised when a rate table cannot be built from the given rows."""


class DuplicatePeriodError(RateTableError):
    def __init__(self, period: "Period"):
        super().__init__(f"duplicate period {period}")
        self.period = period


@dataclass(frozen=True, order=True)
class Period:
    """One compounding step. month == 0 marks an annual period."""

    year: int
    month: int = 0

    def __str__(self) -> str:
        if self.month:
            return f"{self.year:04d}-{self.month:02d}"
        return f"{self.year:04d}"


@dataclass(frozen=True)
class RateEntry:
    period: Period
    rate: float


Bound = Union[int, Period]


def _as_period(value: Bound) -> Period:
    return value if isinstance(value, Period) else Period(int(value))


class RateTable:
    """
    Immutable, ascending-by-period sequence of rate entries.

    Rates are signed percentages (6.97 means +6.97%). Missing periods are not
    an error: rate_at() reports 0.0 for them and range queries simply skip them.
    """

    __slots__ = ("_entries", "_index")

    def __init__(self, entries: Iterable[RateEntry] = ()):
        ordered = sorted(entries, key=lambda entry: entry.period)
        index = {}
        for entry in ordered:
            if entry.period in index:
                raise DuplicatePeriodError(entry.period)
            index[entry.period] = entry.rate
        self._entries: Tuple[RateEntry, ...] = tuple(ordered)
        self._index: Mapping[Period, float] = index

    @classmethod
    def from_mapping(cls, rates: Mapping[int, float]) -> "RateTable":
        """Build an annual table from {year: rate}."""
        return cls(RateEntry(Period(int(year)), float(rate)) for year, rate in rates.items())

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "RateTable":
        """Build a table from {year, month?, rate} records (the sheet loader's output)."""
        entries: List[RateEntry] = []
        for record in records:
            month = record.get("month") or 0
            entries.append(
                RateEntry(Period(int(record["year"]), int(month)), float(record["rate"]))
            )
        return cls(entries)

    def __iter__(self) -> Iterator[RateEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"RateTable({len(self._entries)} entries)"

    @property
    def is_monthly(self) -> bool:
        return any(entry.period.month for entry in self._entries)

    def years(self) -> List[int]:
        return sorted({entry.period.year for entry in self._entries})

    def latest_period(self) -> Optional[Period]:
        return self._entries[-1].period if self._entries else None

    def rate_at(self, period: Bound) -> float:
        return self._index.get(_as_period(period), 0.0)

    def current_rate(self, year: int) -> float:
        """Rate for `year` when present, otherwise the most recent rate on file."""
        period = Period(year)
        if period in self._index:
            return self._index[period]
        latest = self.latest_period()
        return self._index[latest] if latest is not None else 0.0

    def rates_in_range(
        self,
        low: Bound,
        high: Bound,
        inclusive_low: bool = True,
        exclusive_high: bool = True,
    ) -> List[RateEntry]:
        """
        Entries between low and high, ascending.

        Integer bounds are compared with the entry's year, so a monthly table
        contributes every month of the years in range. Period bounds are
        compared with the full period.
        """

        def key(entry: RateEntry, bound: Bound):
            return entry.period if isinstance(bound, Period) else entry.period.year

        selected: List[RateEntry] = []
        for entry in self._entries:
            low_key = key(entry, low)
            if low_key < low or (not inclusive_low and low_key == low):
                continue
            high_key = key(entry, high)
            if high_key > high or (exclusive_high and high_key == high):
                continue
            selected.append(entry)
        return selected


__all__ = [
    "DuplicatePeriodError",
    "Period",
    "RateEntry",
    "RateTable",
    "RateTableError",
]
