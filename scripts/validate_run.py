"""Run a short simulation and validate outputs."""
from __future__ import annotations

import argparse
from pathlib import Path
import sys

import pandas as pd

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pidloop.config import load_config
from pidloop.sim.simulator import Simulator
from pidloop.utils.validation import schema_missing, validate_output_bounds, validate_timeseries_schema


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default=None, help="Path to config yaml/json")
    parser.add_argument("--output", default="runs/validate", help="Output directory")
    args = parser.parse_args()

    cfg = load_config(args.config)
    cfg.sim.steps = 20
    result = Simulator(cfg).run(output_root=args.output)
    parquet_path = Path(result.output_dir) / "timeseries.parquet"
    schema_ok = validate_timeseries_schema(str(parquet_path))
    missing = schema_missing(schema_ok)
    if missing:
        print(f"Missing columns: {missing}")
        return 1
    df = pd.read_parquet(parquet_path)
    if not validate_output_bounds(df, cfg.controller.output_min, cfg.controller.output_max):
        print("Output left the configured limits")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
