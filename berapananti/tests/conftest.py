from __future__ import annotations

from types import MappingProxyType

import pytest
from flask.testing import FlaskClient

from berapananti.app import create_app
from berapananti.config import Settings
from berapananti.core.rate_book import AssetClass, LifeGoal, RateBook, load_rate_book
from berapananti.core.rate_table import RateTable

SAMPLE_INFLATION = {2010: 5.13, 2011: 5.38, 2012: 4.28, 2013: 6.97, 2014: 6.42}


@pytest.fixture()
def settings() -> Settings:
    return Settings(LOG_LEVEL="WARNING", RATE_BOOK_PATH=None, INFLATION_SHEET_PATH=None)


@pytest.fixture()
def rate_book() -> RateBook:
    return load_rate_book()


@pytest.fixture()
def small_rate_book() -> RateBook:
    """Five years of data, with a hole at 2012 in the stocks table."""
    return RateBook(
        inflation=RateTable.from_mapping(SAMPLE_INFLATION),
        asset_returns=MappingProxyType(
            {
                AssetClass.CRYPTO: RateTable.from_mapping({2010: 100.0, 2011: -75.0}),
                AssetClass.STOCKS: RateTable.from_mapping({2010: 10.0, 2011: -5.0, 2013: 20.0}),
                AssetClass.COMMODITY: RateTable.from_mapping({2010: 2.0, 2011: 3.0, 2012: 4.0}),
            }
        ),
        inflation_scenarios=MappingProxyType({"LOW": 2.5, "MEDIUM": 4.0, "HIGH": 6.0}),
        minimum_wages=MappingProxyType({"Kota A": 4000000.0, "Kota B": 2000000.0}),
        life_goals=(LifeGoal(id="wedding", name="Nikah", default_cost=150000000),),
    )


@pytest.fixture()
def monthly_table() -> RateTable:
    return RateTable.from_records(
        [
            {"year": 2023, "month": 11, "rate": 1.0},
            {"year": 2023, "month": 12, "rate": 2.0},
            {"year": 2024, "month": 1, "rate": 0.5},
        ]
    )


@pytest.fixture()
def client(settings, rate_book) -> FlaskClient:
    app = create_app(settings=settings, rate_book=rate_book)
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def small_client(settings, small_rate_book, monthly_table) -> FlaskClient:
    app = create_app(settings=settings, rate_book=small_rate_book, monthly_inflation=monthly_table)
    with app.test_client() as test_client:
        yield test_client
