"""Run a single closed-loop simulation."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pidloop.config import load_config
from pidloop.sim.simulator import Simulator


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default=None, help="Path to config yaml/json")
    parser.add_argument("--output", default="runs", help="Output directory")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    cfg = load_config(args.config)
    result = Simulator(cfg).run(output_root=args.output)
    print(json.dumps(result.summary, indent=2))
    print(f"Output: {result.output_dir}")


if __name__ == "__main__":
    main()
