"""HTTP routes for the calculator API."""

import math
from datetime import datetime
from http import HTTPStatus
from typing import Any, Dict, List, Optional

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from berapananti.core.ping import get_health
from berapananti.core.projection import (
    compare_investments,
    future_value,
    historical_adjustment,
    living_cost_comparison,
    scenario_future_values,
)
from berapananti.core.rate_book import AssetClass, RateBook
from berapananti.core.rate_table import RateTable
from berapananti.logging_config import get_logger
from berapananti.schemas.calculators import (
    AppliedRate,
    FuturePriceRequest,
    FuturePriceResponse,
    GoalCostRequest,
    GoalCostResponse,
    HistoricalValueRequest,
    HistoricalValueResponse,
    InvestmentOutcomeOut,
    InvestmentRequest,
    InvestmentResponse,
    LivingCostRequest,
    LivingCostResponse,
)
from berapananti.schemas.rates import (
    GoalOut,
    GoalsResponse,
    MinimumWagesResponse,
    RatePoint,
    RateTableResponse,
    ScenariosResponse,
)

api_bp = Blueprint("api", __name__)
logger = get_logger(__name__)


class InputRangeError(ValueError):
    """A well-typed input outside the range the rate data supports."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class DataUnavailableError(RuntimeError):
    """The calculation needs rate data that was not loaded."""


def _rate_book() -> RateBook:
    return current_app.extensions["berapananti"]["rate_book"]


def _monthly_inflation() -> Optional[RateTable]:
    return current_app.extensions["berapananti"]["monthly_inflation"]


def _inflation_table(source: str) -> RateTable:
    if source == "monthly":
        table = _monthly_inflation()
        if table is None:
            raise DataUnavailableError("monthly inflation sheet is not loaded")
        return table
    return _rate_book().inflation


def _finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


def _rate_points(table: RateTable) -> List[RatePoint]:
    return [
        RatePoint(
            period=str(entry.period),
            year=entry.period.year,
            month=entry.period.month or None,
            rate=entry.rate,
        )
        for entry in table
    ]


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.errorhandler(InputRangeError)
def _handle_range_error(exc: InputRangeError):
    detail = [{"loc": [exc.field], "msg": exc.message, "type": "range_error"}]
    return jsonify({"detail": detail}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(DataUnavailableError)
def _handle_data_unavailable(exc: DataUnavailableError):
    return jsonify({"detail": str(exc)}), HTTPStatus.SERVICE_UNAVAILABLE


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = get_health(_rate_book(), _monthly_inflation())
    return jsonify(response.model_dump())


# -----------------------------
# Read-only rate data
# -----------------------------


@api_bp.get("/rates/inflation")
def inflation_rates() -> Any:
    source = request.args.get("source", "annual")
    if source not in ("annual", "monthly"):
        raise InputRangeError("source", "source must be 'annual' or 'monthly'")
    table = _inflation_table(source)
    latest = table.latest_period()
    response = RateTableResponse(
        category=f"inflation/{source}",
        current_rate=table.current_rate(datetime.now().year),
        latest_period=str(latest) if latest is not None else None,
        rates=_rate_points(table),
    )
    return jsonify(response.model_dump())


@api_bp.get("/rates/assets/<asset>")
def asset_rates(asset: str) -> Any:
    try:
        asset_class = AssetClass(asset)
    except ValueError:
        return jsonify({"detail": f"unknown asset class: {asset}"}), HTTPStatus.NOT_FOUND
    table = _rate_book().asset_returns[asset_class]
    latest = table.latest_period()
    response = RateTableResponse(
        category=f"assets/{asset_class.value}",
        current_rate=table.current_rate(datetime.now().year),
        latest_period=str(latest) if latest is not None else None,
        rates=_rate_points(table),
    )
    return jsonify(response.model_dump())


@api_bp.get("/rates/minimum-wages")
def minimum_wages() -> Any:
    wages = dict(_rate_book().minimum_wages)
    average = sum(wages.values()) / len(wages) if wages else None
    return jsonify(MinimumWagesResponse(minimum_wages=wages, average=average).model_dump())


@api_bp.get("/scenarios")
def scenarios() -> Any:
    response = ScenariosResponse(scenarios=dict(_rate_book().inflation_scenarios))
    return jsonify(response.model_dump())


@api_bp.get("/goals")
def goals() -> Any:
    response = GoalsResponse(
        goals=[GoalOut(**goal.model_dump()) for goal in _rate_book().life_goals]
    )
    return jsonify(response.model_dump())


# -----------------------------
# Calculators
# -----------------------------


@api_bp.post("/calc/future-price")
def future_price() -> Any:
    """Price of today's item after `years` of inflation, per scenario."""
    payload = FuturePriceRequest.model_validate(_payload())
    book = _rate_book()

    custom = None
    if payload.custom_rate is not None:
        custom = future_value(payload.price, payload.years, payload.custom_rate)

    response = FuturePriceResponse(
        scenarios=scenario_future_values(payload.price, payload.years, book.inflation_scenarios),
        rates=dict(book.inflation_scenarios),
        custom=custom,
    )
    logger.info("future_price_calculated", years=payload.years, custom_rate=payload.custom_rate)
    return jsonify(response.model_dump())


@api_bp.post("/calc/goal-cost")
def goal_cost() -> Any:
    """Cost of a life goal (wedding, house, ...) once the saving period is over."""
    payload = GoalCostRequest.model_validate(_payload())
    book = _rate_book()

    current_cost = payload.current_cost
    if payload.goal is not None:
        goal = book.goal(payload.goal)
        if goal is None:
            return jsonify({"detail": f"unknown goal: {payload.goal}"}), HTTPStatus.NOT_FOUND
        if current_cost is None:
            current_cost = goal.default_cost

    response = GoalCostResponse(
        goal=payload.goal,
        description=payload.description,
        current_cost=current_cost,
        years=payload.years,
        scenarios=scenario_future_values(current_cost, payload.years, book.inflation_scenarios),
    )
    logger.info("goal_cost_calculated", goal=payload.goal, years=payload.years)
    return jsonify(response.model_dump())


@api_bp.post("/calc/historical")
def historical_value() -> Any:
    """What an amount from an earlier year is worth today."""
    payload = HistoricalValueRequest.model_validate(_payload())
    table = _inflation_table(payload.source)
    to_year = payload.to_year if payload.to_year is not None else datetime.now().year

    years = table.years()
    if years and payload.from_year < years[0]:
        raise InputRangeError("from_year", f"from_year must be {years[0]} or later")
    if payload.from_year >= to_year:
        raise InputRangeError("from_year", f"from_year must be before {to_year}")

    adjustment = historical_adjustment(payload.value, payload.from_year, to_year, table)
    response = HistoricalValueResponse(
        original_value=adjustment.original_value,
        adjusted_value=adjustment.adjusted_value,
        percentage_change=adjustment.percentage_change,
        from_year=payload.from_year,
        to_year=to_year,
        year_difference=to_year - payload.from_year,
        source=payload.source,
        periods_applied=[
            AppliedRate(period=str(period), rate=rate)
            for period, rate in adjustment.result.periods_applied
        ],
    )
    logger.info(
        "historical_value_calculated",
        from_year=payload.from_year,
        to_year=to_year,
        source=payload.source,
        periods=len(adjustment.result.periods_applied),
    )
    return jsonify(response.model_dump())


@api_bp.post("/calc/investment")
def investment() -> Any:
    """Compare how an amount invested in start_year grew in each asset class."""
    payload = InvestmentRequest.model_validate(_payload())
    end_year = payload.end_year if payload.end_year is not None else datetime.now().year
    if payload.start_year > end_year:
        raise InputRangeError("start_year", f"start_year must not be after {end_year}")
    first_years = [
        years[0]
        for years in (_rate_book().asset_returns[asset].years() for asset in payload.assets)
        if years
    ]
    if first_years and payload.start_year < min(first_years):
        raise InputRangeError("start_year", f"start_year must be {min(first_years)} or later")

    outcomes = compare_investments(
        payload.amount,
        payload.assets,
        payload.start_year,
        end_year,
        _rate_book().asset_returns,
    )
    response = InvestmentResponse(
        amount=payload.amount,
        start_year=payload.start_year,
        end_year=end_year,
        year_difference=end_year - payload.start_year,
        results={
            asset: InvestmentOutcomeOut(
                final_value=outcome.final_value,
                gain_percent=outcome.gain_percent,
            )
            for asset, outcome in outcomes.items()
        },
    )
    logger.info(
        "investment_compared",
        assets=[asset.value for asset in outcomes],
        start_year=payload.start_year,
        end_year=end_year,
    )
    return jsonify(response.model_dump(mode="json"))


@api_bp.post("/calc/living-cost")
def living_cost() -> Any:
    """Monthly living costs against the regional minimum wage."""
    payload = LivingCostRequest.model_validate(_payload())
    book = _rate_book()

    if payload.custom_minimum_wage is not None:
        wage = payload.custom_minimum_wage
    elif payload.region in book.minimum_wages:
        wage = book.minimum_wages[payload.region]
    else:
        return jsonify({"detail": f"unknown region: {payload.region}"}), HTTPStatus.NOT_FOUND

    comparison = living_cost_comparison(payload.costs, wage, book.minimum_wages)
    response = LivingCostResponse(
        region=payload.region,
        minimum_wage=comparison.minimum_wage,
        total_cost=comparison.total_cost,
        surplus=comparison.surplus,
        percentage_difference=_finite_or_none(comparison.percentage_difference),
        personal_inflation=comparison.personal_inflation,
        wage_covers_costs=comparison.wage_covers_costs,
    )
    logger.info("living_cost_compared", region=payload.region, covered=comparison.wage_covers_costs)
    return jsonify(response.model_dump())
