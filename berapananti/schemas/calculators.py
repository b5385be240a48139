"""Data contracts for the calculator endpoints."""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from berapananti.core.rate_book import AssetClass

MAX_PROJECTION_YEARS = 50
MAX_CUSTOM_INFLATION = 30.0


class FuturePriceRequest(BaseModel):
    """Today's price projected under the named scenarios (and an optional custom rate)."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    price: float = Field(..., gt=0, description="Current price.")
    years: int = Field(..., ge=1, le=MAX_PROJECTION_YEARS)
    custom_rate: Optional[float] = Field(
        None,
        ge=0,
        le=MAX_CUSTOM_INFLATION,
        description="Custom yearly inflation in percent (e.g. 4.0 for 4%).",
    )


class FuturePriceResponse(BaseModel):
    scenarios: Dict[str, float]
    rates: Dict[str, float]
    custom: Optional[float] = None


class GoalCostRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    goal: Optional[str] = Field(None, description="Preset life goal id, e.g. 'wedding'.")
    current_cost: Optional[float] = Field(None, gt=0, description="Overrides the goal's default cost.")
    description: Optional[str] = None
    years: int = Field(..., ge=1, le=MAX_PROJECTION_YEARS)

    @model_validator(mode="after")
    def ensure_cost_source(self) -> "GoalCostRequest":
        if self.goal is None and self.current_cost is None:
            raise ValueError("either goal or current_cost is required")
        return self


class GoalCostResponse(BaseModel):
    goal: Optional[str]
    description: Optional[str]
    current_cost: float
    years: int
    scenarios: Dict[str, float]


class HistoricalValueRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    value: float = Field(..., gt=0, description="Amount in from_year money.")
    from_year: int
    to_year: Optional[int] = Field(None, description="Defaults to the current year.")
    source: Literal["annual", "monthly"] = "annual"


class AppliedRate(BaseModel):
    period: str
    rate: float


class HistoricalValueResponse(BaseModel):
    original_value: float
    adjusted_value: float
    percentage_change: float
    from_year: int
    to_year: int
    year_difference: int
    source: str
    periods_applied: List[AppliedRate]


class InvestmentRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    amount: float = Field(..., gt=0, description="Initial investment.")
    assets: List[AssetClass] = Field(..., min_length=1)
    start_year: int
    end_year: Optional[int] = Field(None, description="Defaults to the current year.")


class InvestmentOutcomeOut(BaseModel):
    final_value: float
    gain_percent: float


class InvestmentResponse(BaseModel):
    amount: float
    start_year: int
    end_year: int
    year_difference: int
    results: Dict[AssetClass, InvestmentOutcomeOut]


class LivingCostRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    region: Optional[str] = Field(None, description="Region with a known minimum wage.")
    custom_minimum_wage: Optional[float] = Field(None, ge=0)
    costs: Dict[str, float] = Field(..., min_length=1, description="Monthly cost per category.")

    @model_validator(mode="after")
    def ensure_wage_source(self) -> "LivingCostRequest":
        if self.region is None and self.custom_minimum_wage is None:
            raise ValueError("either region or custom_minimum_wage is required")
        negative = [name for name, amount in self.costs.items() if amount < 0]
        if negative:
            raise ValueError(f"costs must not be negative: {', '.join(sorted(negative))}")
        return self


class LivingCostResponse(BaseModel):
    region: Optional[str]
    minimum_wage: float
    total_cost: float
    surplus: float
    percentage_difference: Optional[float]
    personal_inflation: float
    wage_covers_costs: bool
