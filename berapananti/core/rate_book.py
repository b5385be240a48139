"""Bundled (or user supplied) rate data injected into the calculators."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from berapananti.core.rate_table import RateTable, RateTableError
from berapananti.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_RATE_BOOK_PATH = Path(__file__).resolve().parents[1] / "data" / "rate_book.json"


class RateBookError(ValueError):
    """Raised when a rate book file is missing or malformed."""


class AssetClass(str, Enum):
    CRYPTO = "crypto"
    STOCKS = "stocks"
    COMMODITY = "commodity"


class LifeGoal(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    default_cost: float = Field(gt=0)


class RateBookFile(BaseModel):
    """On-disk shape of a rate book. Year keys arrive as JSON strings."""

    model_config = ConfigDict(extra="forbid")

    inflation: Dict[int, float]
    inflation_scenarios: Dict[str, float]
    asset_returns: Dict[AssetClass, Dict[int, float]]
    minimum_wages: Dict[str, float] = Field(default_factory=dict)
    life_goals: List[LifeGoal] = Field(default_factory=list)


@dataclass(frozen=True)
class RateBook:
    inflation: RateTable
    asset_returns: Mapping[AssetClass, RateTable]
    inflation_scenarios: Mapping[str, float]
    minimum_wages: Mapping[str, float]
    life_goals: Tuple[LifeGoal, ...] = ()

    @classmethod
    def from_file_model(cls, data: RateBookFile) -> "RateBook":
        missing = [asset.value for asset in AssetClass if asset not in data.asset_returns]
        if missing:
            raise RateBookError(f"asset returns missing for: {', '.join(missing)}")
        return cls(
            inflation=RateTable.from_mapping(data.inflation),
            asset_returns=MappingProxyType(
                {asset: RateTable.from_mapping(rates) for asset, rates in data.asset_returns.items()}
            ),
            inflation_scenarios=MappingProxyType(dict(data.inflation_scenarios)),
            minimum_wages=MappingProxyType(dict(data.minimum_wages)),
            life_goals=tuple(data.life_goals),
        )

    def goal(self, goal_id: str) -> Optional[LifeGoal]:
        for goal in self.life_goals:
            if goal.id == goal_id:
                return goal
        return None


def load_rate_book(path: Optional[Union[str, Path]] = None) -> RateBook:
    """Read a rate book JSON file, defaulting to the one shipped with the package."""
    source = Path(path) if path is not None else DEFAULT_RATE_BOOK_PATH
    try:
        raw = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise RateBookError(f"cannot read rate book {source}: {exc}") from exc

    try:
        data = RateBookFile.model_validate_json(raw)
        book = RateBook.from_file_model(data)
    except (ValidationError, RateTableError) as exc:
        raise RateBookError(f"invalid rate book {source}: {exc}") from exc

    logger.info(
        "rate_book_loaded",
        path=str(source),
        inflation_years=len(book.inflation),
        latest_inflation_period=str(book.inflation.latest_period()),
        regions=len(book.minimum_wages),
    )
    return book


__all__ = [
    "AssetClass",
    "DEFAULT_RATE_BOOK_PATH",
    "LifeGoal",
    "RateBook",
    "RateBookError",
    "RateBookFile",
    "load_rate_book",
]
