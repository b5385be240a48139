"""Sequential multiplicative compounding shared by every calculator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple, Union

from berapananti.core.rate_table import Period, RateTable

PeriodBound = Union[int, Period]


@dataclass(frozen=True)
class CompoundingRequest:
    principal: float
    from_period: PeriodBound
    to_period: PeriodBound
    table: RateTable


@dataclass(frozen=True)
class CompoundingResult:
    final_value: float
    periods_applied: Tuple[Tuple[Period, float], ...]


def compound(principal: float, rates: Iterable[float]) -> float:
    """
    Apply each percentage rate in order: value *= (1 + rate / 100).

    Never raises on numeric input. Non-finite principals and rates below -100%
    are carried through as plain float arithmetic; an empty sequence returns
    the principal unchanged.
    """
    result = principal
    for rate in rates:
        result = result * (1 + rate / 100)
    return result


def compound_request(request: CompoundingRequest, include_end: bool = False) -> CompoundingResult:
    """
    Compound every table record between from_period and to_period.

    to_period is exclusive unless include_end is set. Monthly tables compound
    once per monthly record present, in chronological order.
    """
    entries = request.table.rates_in_range(
        request.from_period,
        request.to_period,
        exclusive_high=not include_end,
    )
    return CompoundingResult(
        final_value=compound(request.principal, (entry.rate for entry in entries)),
        periods_applied=tuple((entry.period, entry.rate) for entry in entries),
    )


__all__ = [
    "CompoundingRequest",
    "CompoundingResult",
    "compound",
    "compound_request",
]
