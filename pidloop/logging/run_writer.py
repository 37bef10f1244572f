"""Run directory writer."""
from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Dict

from pidloop.config import Config


def make_run_id(prefix: str = "run") -> str:
    ts = time.strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{ts}"


def prepare_run_dir(base: str, run_id: str) -> Path:
    p = Path(base) / run_id
    suffix = 1
    while p.exists():
        p = Path(base) / f"{run_id}_{suffix}"
        suffix += 1
    p.mkdir(parents=True)
    return p


def write_config(path: Path, cfg: Config) -> None:
    (path / "config.json").write_text(json.dumps(cfg.to_dict(), indent=2))


def write_summary(path: Path, summary: Dict) -> None:
    (path / "summary.json").write_text(json.dumps(summary, indent=2))
