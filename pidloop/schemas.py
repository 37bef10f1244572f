"""Column schema of the simulation timeseries."""
from __future__ import annotations

from typing import List, Tuple


def timeseries_columns() -> List[Tuple[str, str]]:
    return [
        ("run_id", "string"),
        ("step", "int64"),
        ("t_ms", "int64"),
        ("mode", "string"),
        ("setpoint", "float64"),
        ("measurement", "float64"),
        ("error", "float64"),
        ("output", "float64"),
        ("integral", "float64"),
        ("held", "int8"),
        ("saturated", "int8"),
    ]
