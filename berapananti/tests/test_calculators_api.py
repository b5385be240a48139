from __future__ import annotations

from datetime import datetime
from math import isclose

from flask.testing import FlaskClient


def test_future_price_scenarios_and_custom_rate(client: FlaskClient):
    resp = client.post("/api/calc/future-price", json={"price": 100000, "years": 5, "custom_rate": 4.0})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["rates"] == {"LOW": 2.5, "MEDIUM": 4.0, "HIGH": 6.0}
    assert isclose(body["scenarios"]["MEDIUM"], 121665.29, abs_tol=0.01)
    assert isclose(body["custom"], body["scenarios"]["MEDIUM"], rel_tol=1e-12)


def test_future_price_without_custom_rate(client: FlaskClient):
    resp = client.post("/api/calc/future-price", json={"price": 100000, "years": 1})

    assert resp.status_code == 200
    assert resp.get_json()["custom"] is None


def test_future_price_rejects_out_of_range_inputs(client: FlaskClient):
    for payload in (
        {"price": 0, "years": 5},
        {"price": 100, "years": 51},
        {"price": 100, "years": 5, "custom_rate": 30.5},
    ):
        resp = client.post("/api/calc/future-price", json=payload)
        assert resp.status_code == 422
        assert "detail" in resp.get_json()


def test_goal_cost_uses_goal_default(client: FlaskClient):
    resp = client.post("/api/calc/goal-cost", json={"goal": "wedding", "years": 5})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["current_cost"] == 150000000
    assert isclose(body["scenarios"]["LOW"], 150000000 * 1.025 ** 5, rel_tol=1e-9)


def test_goal_cost_custom_and_unknown(client: FlaskClient):
    custom = client.post(
        "/api/calc/goal-cost",
        json={"current_cost": 1000, "description": "Umroh", "years": 2},
    )
    unknown = client.post("/api/calc/goal-cost", json={"goal": "yacht", "years": 2})
    missing = client.post("/api/calc/goal-cost", json={"years": 2})

    assert custom.status_code == 200
    assert custom.get_json()["description"] == "Umroh"
    assert isclose(custom.get_json()["scenarios"]["HIGH"], 1000 * 1.06 ** 2, rel_tol=1e-9)
    assert unknown.status_code == 404
    assert missing.status_code == 422


def test_historical_value(small_client: FlaskClient):
    resp = small_client.post(
        "/api/calc/historical",
        json={"value": 1000000, "from_year": 2010, "to_year": 2015},
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert [applied["period"] for applied in body["periods_applied"]] == ["2010", "2011", "2012", "2013", "2014"]
    assert body["year_difference"] == 5
    expected = 1000000 * 1.0513 * 1.0538 * 1.0428 * 1.0697 * 1.0642
    assert isclose(body["adjusted_value"], expected, rel_tol=1e-9)
    assert isclose(body["percentage_change"], (expected / 1000000 - 1) * 100, rel_tol=1e-9)


def test_historical_value_defaults_to_current_year(client: FlaskClient):
    resp = client.post("/api/calc/historical", json={"value": 500, "from_year": 2015})

    assert resp.status_code == 200
    assert resp.get_json()["to_year"] == datetime.now().year


def test_historical_value_year_bounds(small_client: FlaskClient):
    too_early = small_client.post("/api/calc/historical", json={"value": 1, "from_year": 2005, "to_year": 2012})
    not_before = small_client.post("/api/calc/historical", json={"value": 1, "from_year": 2012, "to_year": 2012})

    assert too_early.status_code == 422
    assert too_early.get_json()["detail"][0]["loc"] == ["from_year"]
    assert not_before.status_code == 422


def test_historical_value_monthly_source(small_client: FlaskClient):
    resp = small_client.post(
        "/api/calc/historical",
        json={"value": 100, "from_year": 2023, "to_year": 2024, "source": "monthly"},
    )

    assert resp.status_code == 200
    assert isclose(resp.get_json()["adjusted_value"], 100 * 1.01 * 1.02, rel_tol=1e-9)


def test_historical_value_monthly_without_sheet(client: FlaskClient):
    resp = client.post("/api/calc/historical", json={"value": 100, "from_year": 2020, "source": "monthly"})

    assert resp.status_code == 503


def test_investment_comparison(small_client: FlaskClient):
    resp = small_client.post(
        "/api/calc/investment",
        json={"amount": 1000, "assets": ["crypto", "stocks"], "start_year": 2010, "end_year": 2011},
    )

    assert resp.status_code == 200
    results = resp.get_json()["results"]
    assert set(results) == {"crypto", "stocks"}
    assert isclose(results["crypto"]["final_value"], 500.0, rel_tol=1e-12)
    assert isclose(results["stocks"]["final_value"], 1000 * 1.10 * 0.95, rel_tol=1e-12)
    assert isclose(results["stocks"]["gain_percent"], 4.5, rel_tol=1e-9)


def test_investment_comparison_validation(client: FlaskClient):
    no_assets = client.post("/api/calc/investment", json={"amount": 1000, "assets": [], "start_year": 2015})
    bad_asset = client.post("/api/calc/investment", json={"amount": 1000, "assets": ["gold"], "start_year": 2015})
    reversed_years = client.post(
        "/api/calc/investment",
        json={"amount": 1000, "assets": ["stocks"], "start_year": 2020, "end_year": 2015},
    )

    assert no_assets.status_code == 422
    assert bad_asset.status_code == 422
    assert reversed_years.status_code == 422


def test_living_cost_for_region(client: FlaskClient):
    costs = {"food": 1200000, "rent": 1500000, "transport": 600000, "utilities": 500000}
    resp = client.post("/api/calc/living-cost", json={"region": "Jakarta", "costs": costs})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["minimum_wage"] == 5200000
    assert body["total_cost"] == 3800000
    assert body["surplus"] == 1400000
    assert body["wage_covers_costs"] is True
    assert 1.5 <= body["personal_inflation"] <= 15


def test_living_cost_custom_wage(client: FlaskClient):
    zero_wage = client.post(
        "/api/calc/living-cost",
        json={"custom_minimum_wage": 0, "costs": {"food": 100}},
    )
    unknown = client.post("/api/calc/living-cost", json={"region": "Atlantis", "costs": {"food": 100}})
    negative = client.post("/api/calc/living-cost", json={"region": "Jakarta", "costs": {"food": -1}})

    assert zero_wage.status_code == 200
    assert zero_wage.get_json()["percentage_difference"] is None
    assert zero_wage.get_json()["wage_covers_costs"] is False
    assert unknown.status_code == 404
    assert negative.status_code == 422


def test_rate_endpoints(client: FlaskClient):
    inflation = client.get("/api/rates/inflation").get_json()
    stocks = client.get("/api/rates/assets/stocks").get_json()

    assert inflation["latest_period"] == "2024"
    assert inflation["rates"][0] == {"period": "2010", "year": 2010, "month": None, "rate": 5.13}
    assert len(stocks["rates"]) == 15
    assert client.get("/api/rates/assets/gold").status_code == 404
    assert client.get("/api/rates/inflation?source=weekly").status_code == 422
    assert client.get("/api/rates/inflation?source=monthly").status_code == 503


def test_lookup_endpoints(client: FlaskClient):
    wages = client.get("/api/rates/minimum-wages").get_json()
    scenarios = client.get("/api/scenarios").get_json()
    goals = client.get("/api/goals").get_json()

    assert wages["minimum_wages"]["Bandung"] == 4300000
    assert isclose(wages["average"], sum(wages["minimum_wages"].values()) / 10, rel_tol=1e-12)
    assert scenarios["scenarios"]["HIGH"] == 6.0
    assert [goal["id"] for goal in goals["goals"]][:2] == ["wedding", "car"]


def test_non_finite_numbers_are_rejected(client: FlaskClient):
    cases = [
        ("/api/calc/future-price", '{"price": Infinity, "years": 5}'),
        ("/api/calc/goal-cost", '{"current_cost": Infinity, "years": 5}'),
        ("/api/calc/historical", '{"value": NaN, "from_year": 2015}'),
        ("/api/calc/investment", '{"amount": Infinity, "assets": ["stocks"], "start_year": 2015}'),
        ("/api/calc/living-cost", '{"region": "Jakarta", "costs": {"food": Infinity}}'),
        ("/api/calc/living-cost", '{"custom_minimum_wage": Infinity, "costs": {"food": 100}}'),
    ]
    for url, body in cases:
        resp = client.post(url, data=body, content_type="application/json")
        assert resp.status_code == 422, url
        assert "detail" in resp.get_json()


def test_investment_start_year_before_any_data(small_client: FlaskClient):
    resp = small_client.post(
        "/api/calc/investment",
        json={"amount": 1000, "assets": ["stocks", "crypto"], "start_year": 2005, "end_year": 2011},
    )

    assert resp.status_code == 422
    assert resp.get_json()["detail"][0]["loc"] == ["start_year"]
