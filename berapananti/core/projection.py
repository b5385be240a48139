from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import repeat
from typing import Dict, Iterable, Mapping

from berapananti.core.compounding import (
    CompoundingRequest,
    CompoundingResult,
    compound,
    compound_request,
)
from berapananti.core.rate_book import AssetClass
from berapananti.core.rate_table import RateTable

# Bounds of the "personal inflation" estimate shown next to the living-cost comparison.
PERSONAL_INFLATION_FLOOR = 1.5
PERSONAL_INFLATION_CEILING = 15.0


# -----------------------------
# Flat-rate projections
# -----------------------------


def future_value(present_value: float, years: int, annual_rate_percent: float) -> float:
    """Project a price `years` ahead at one flat yearly rate."""
    return compound(present_value, repeat(annual_rate_percent, years))


def scenario_future_values(
    present_value: float,
    years: int,
    scenarios: Mapping[str, float],
) -> Dict[str, float]:
    """
    Future value under each named flat scenario, e.g. LOW / MEDIUM / HIGH.
    Used for both the future-price and the goal-cost calculators.
    """
    return {
        name: future_value(present_value, years, rate)
        for name, rate in scenarios.items()
    }


# -----------------------------
# Table-driven projections
# -----------------------------


@dataclass(frozen=True)
class HistoricalAdjustment:
    original_value: float
    result: CompoundingResult

    @property
    def adjusted_value(self) -> float:
        return self.result.final_value

    @property
    def percentage_change(self) -> float:
        return (self.adjusted_value / self.original_value - 1) * 100


def historical_adjustment(
    value: float,
    from_year: int,
    to_year: int,
    table: RateTable,
) -> HistoricalAdjustment:
    """Carry a past amount forward through every inflation record with from_year <= year < to_year."""
    result = compound_request(
        CompoundingRequest(principal=value, from_period=from_year, to_period=to_year, table=table)
    )
    return HistoricalAdjustment(original_value=value, result=result)


def historical_adjusted_value(value: float, from_year: int, to_year: int, table: RateTable) -> float:
    return historical_adjustment(value, from_year, to_year, table).adjusted_value


def investment_growth(
    initial_amount: float,
    asset_class: AssetClass,
    from_year: int,
    to_year: int,
    returns: Mapping[AssetClass, RateTable],
) -> CompoundingResult:
    """
    Grow an investment through the asset's yearly returns.

    Unlike the inflation adjustment, the end year's return is applied too
    (from_year <= year <= to_year).
    """
    return compound_request(
        CompoundingRequest(
            principal=initial_amount,
            from_period=from_year,
            to_period=to_year,
            table=returns[AssetClass(asset_class)],
        ),
        include_end=True,
    )


def investment_return(
    initial_amount: float,
    asset_class: AssetClass,
    from_year: int,
    to_year: int,
    returns: Mapping[AssetClass, RateTable],
) -> float:
    return investment_growth(initial_amount, asset_class, from_year, to_year, returns).final_value


@dataclass(frozen=True)
class InvestmentOutcome:
    asset_class: AssetClass
    final_value: float
    gain_percent: float


def compare_investments(
    amount: float,
    assets: Iterable[AssetClass],
    from_year: int,
    to_year: int,
    returns: Mapping[AssetClass, RateTable],
) -> Dict[AssetClass, InvestmentOutcome]:
    outcomes: Dict[AssetClass, InvestmentOutcome] = {}
    for asset in assets:
        final_value = investment_return(amount, asset, from_year, to_year, returns)
        outcomes[AssetClass(asset)] = InvestmentOutcome(
            asset_class=AssetClass(asset),
            final_value=final_value,
            gain_percent=(final_value / amount - 1) * 100,
        )
    return outcomes


# -----------------------------
# Comparisons
# -----------------------------


def percentage_difference(baseline: float, comparison: float) -> float:
    """
    (comparison - baseline) / baseline * 100.

    A zero baseline follows IEEE-754 division instead of raising:
    +/-inf for a non-zero difference, nan otherwise.
    """
    delta = comparison - baseline
    if baseline == 0:
        if delta == 0 or math.isnan(delta):
            return math.nan
        return math.copysign(math.inf, delta) * math.copysign(1.0, baseline)
    return delta / baseline * 100


@dataclass(frozen=True)
class LivingCostComparison:
    minimum_wage: float
    total_cost: float
    surplus: float
    percentage_difference: float
    personal_inflation: float

    @property
    def wage_covers_costs(self) -> bool:
        return self.surplus >= 0


def personal_inflation_estimate(total_cost: float, regional_wages: Mapping[str, float]) -> float:
    """Rough personal inflation: spending relative to the average regional wage, clamped."""
    if not regional_wages:
        return PERSONAL_INFLATION_FLOOR
    average_wage = sum(regional_wages.values()) / len(regional_wages)
    estimate = percentage_difference(average_wage, total_cost)
    return max(min(estimate, PERSONAL_INFLATION_CEILING), PERSONAL_INFLATION_FLOOR)


def living_cost_comparison(
    monthly_costs: Mapping[str, float],
    minimum_wage: float,
    regional_wages: Mapping[str, float],
) -> LivingCostComparison:
    total_cost = float(sum(monthly_costs.values()))
    return LivingCostComparison(
        minimum_wage=minimum_wage,
        total_cost=total_cost,
        surplus=minimum_wage - total_cost,
        percentage_difference=percentage_difference(minimum_wage, total_cost),
        personal_inflation=personal_inflation_estimate(total_cost, regional_wages),
    )


__all__ = [
    "HistoricalAdjustment",
    "InvestmentOutcome",
    "LivingCostComparison",
    "PERSONAL_INFLATION_CEILING",
    "PERSONAL_INFLATION_FLOOR",
    "compare_investments",
    "future_value",
    "historical_adjusted_value",
    "historical_adjustment",
    "investment_growth",
    "investment_return",
    "living_cost_comparison",
    "percentage_difference",
    "personal_inflation_estimate",
    "scenario_future_values",
]
