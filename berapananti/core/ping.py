"""Health summary used by the API ping endpoint."""

from typing import Optional

from berapananti.core.rate_book import RateBook
from berapananti.core.rate_table import RateTable
from berapananti.schemas.rates import HealthResponse


def get_health(rate_book: RateBook, monthly_inflation: Optional[RateTable]) -> HealthResponse:
    """Report which inflation data the calculators are running on."""
    table = monthly_inflation if monthly_inflation is not None else rate_book.inflation
    latest = table.latest_period()
    return HealthResponse(
        inflation_source="sheet" if monthly_inflation is not None else "builtin",
        latest_inflation_period=str(latest) if latest is not None else None,
    )
