"""Pydantic schemas for the read-only rate endpoints and the health check."""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    inflation_source: Literal["builtin", "sheet"]
    latest_inflation_period: Optional[str]


class RatePoint(BaseModel):
    period: str
    year: int
    month: Optional[int] = None
    rate: float


class RateTableResponse(BaseModel):
    category: str
    current_rate: float
    latest_period: Optional[str]
    rates: List[RatePoint]


class ScenariosResponse(BaseModel):
    scenarios: Dict[str, float]


class MinimumWagesResponse(BaseModel):
    minimum_wages: Dict[str, float]
    average: Optional[float]


class GoalOut(BaseModel):
    id: str
    name: str
    default_cost: float


class GoalsResponse(BaseModel):
    goals: List[GoalOut]
