"""Validation helpers for simulation runs."""
from __future__ import annotations

from typing import Dict, List

import pandas as pd

from pidloop.control import Mode
from pidloop.schemas import timeseries_columns


def validate_timeseries_schema(path: str) -> Dict[str, bool]:
    cols = [name for name, _dtype in timeseries_columns()]
    df = pd.read_parquet(path)
    results = {}
    for col in cols:
        results[col] = col in df.columns
    return results


def schema_missing(results: Dict[str, bool]) -> List[str]:
    return [k for k, v in results.items() if not v]


def validate_output_bounds(df: pd.DataFrame, minimum: float, maximum: float) -> bool:
    """True when every automatic-mode output lies within the limits."""
    auto = df[df["mode"] == Mode.AUTOMATIC.value]["output"].astype("float64").dropna()
    if auto.empty:
        return True
    # Inverted limits collapse every output onto one of the two bounds
    low, high = min(minimum, maximum), max(minimum, maximum)
    return float(auto.min()) >= low and float(auto.max()) <= high
