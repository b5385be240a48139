"""
Monthly inflation sheet loader.

Expected layout (first sheet, one header row):

    Periode | Inflasi
    2025-01 | 0,76
    2025-02 | -0,09

Decimal commas are accepted. The result is a month-granular RateTable.
"""

from __future__ import annotations

import math
import re
import zipfile
from pathlib import Path
from typing import Dict, List, Optional, Union

import pandas as pd

from berapananti.core.rate_table import RateTable, RateTableError
from berapananti.logging_config import get_logger

logger = get_logger(__name__)

_PERIOD_PATTERN = re.compile(r"^\s*(\d{4})-(\d{1,2})")
SUPPORTED_SUFFIXES = (".csv", ".xlsx", ".xlsm")


class InflationSheetError(ValueError):
    """The sheet could not be read or produced no usable rows."""


def _read_frame(path: Path) -> pd.DataFrame:
    if path.suffix.lower() == ".csv":
        return pd.read_csv(path, header=0, dtype=str, keep_default_na=False)
    return pd.read_excel(path, sheet_name=0, header=0, dtype=str, engine="openpyxl", keep_default_na=False)


def parse_period(raw: object) -> Optional[tuple[int, int]]:
    match = _PERIOD_PATTERN.match(str(raw))
    if not match:
        return None
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        return None
    return year, month


def parse_rate(raw: object) -> Optional[float]:
    text = str(raw).strip().replace(",", ".")
    if not text:
        return None
    try:
        rate = float(text)
    except ValueError:
        return None
    return rate if math.isfinite(rate) else None


def sheet_records(frame: pd.DataFrame) -> List[Dict[str, float]]:
    """Turn the two leading columns into {year, month, rate} records, skipping bad rows."""
    if frame.shape[1] < 2:
        raise InflationSheetError("inflation sheet needs a period column and a rate column")

    records: List[Dict[str, float]] = []
    for row_number, (raw_period, raw_rate) in enumerate(
        frame.iloc[:, :2].itertuples(index=False, name=None), start=2
    ):
        period = parse_period(raw_period)
        rate = parse_rate(raw_rate)
        if period is None or rate is None:
            logger.warning("inflation_sheet_row_skipped", row=row_number, period=raw_period, rate=raw_rate)
            continue
        year, month = period
        records.append({"year": year, "month": month, "rate": rate})
    return records


def load_inflation_sheet(path: Union[str, Path]) -> RateTable:
    source = Path(path)
    if source.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise InflationSheetError(f"unsupported inflation sheet type: {source.suffix or source.name}")
    try:
        frame = _read_frame(source)
    except (OSError, ValueError, zipfile.BadZipFile) as exc:
        raise InflationSheetError(f"cannot read inflation sheet {source}: {exc}") from exc

    records = sheet_records(frame)
    if not records:
        raise InflationSheetError(f"inflation sheet {source} has no usable rows")

    try:
        table = RateTable.from_records(records)
    except RateTableError as exc:
        raise InflationSheetError(f"inflation sheet {source}: {exc}") from exc

    logger.info(
        "inflation_sheet_loaded",
        path=str(source),
        records=len(table),
        latest_period=str(table.latest_period()),
    )
    return table


__all__ = [
    "InflationSheetError",
    "load_inflation_sheet",
    "parse_period",
    "parse_rate",
    "sheet_records",
]
