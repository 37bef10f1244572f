"""Configuration models and load utilities."""
from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


@dataclass
class ControllerConfig:
    kp: float = 1.0
    ki: float = 0.0
    kd: float = 0.0
    sample_time_ms: int = 1
    output_min: float = float("-inf")
    output_max: float = float("inf")
    direction: str = "direct"  # direct | reverse
    setpoint: float = 0.0
    mode: str = "automatic"  # automatic | manual
    manual_output: float = 0.0


@dataclass
class PlantConfig:
    # First-order-plus-dead-time process: tau * dy/dt = -(y - ambient) + gain * u(t - dead_time)
    gain: float = 1.0
    time_constant_s: float = 5.0
    dead_time_s: float = 0.0
    initial_value: float = 0.0
    ambient: float = 0.0
    noise_std: float = 0.0
    seed: int = 1234


@dataclass
class SimConfig:
    steps: int = 200
    dt_ms: int = 100
    start_ms: int = 1000
    # [[step, setpoint], ...] applied before the controller runs on that step
    setpoint_schedule: List[List[float]] = field(default_factory=list)
    # [start, end) step range driven in manual mode; empty disables
    manual_window: List[int] = field(default_factory=list)
    manual_output: float = 0.0
    run_prefix: str = "pid"


@dataclass
class Config:
    controller: ControllerConfig = field(default_factory=ControllerConfig)
    plant: PlantConfig = field(default_factory=PlantConfig)
    sim: SimConfig = field(default_factory=SimConfig)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        # Unbounded limits are written as null so the output stays strict JSON
        for key in ("output_min", "output_max"):
            if math.isinf(data["controller"][key]):
                data["controller"][key] = None
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Config":
        def _merge(cls, payload):
            if payload is None:
                return cls()
            return cls(**payload)

        controller = dict(data.get("controller") or {})
        if controller.get("output_min", 0.0) is None:
            controller["output_min"] = float("-inf")
        if controller.get("output_max", 0.0) is None:
            controller["output_max"] = float("inf")

        return Config(
            controller=_merge(ControllerConfig, controller),
            plant=_merge(PlantConfig, data.get("plant")),
            sim=_merge(SimConfig, data.get("sim")),
        )


def load_config(path: Optional[str]) -> Config:
    if not path:
        return Config()
    data = _load_config_dict(path)
    data = _coerce_numbers(data)
    return Config.from_dict(data)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def save_config(cfg: Config, path: str) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(cfg.to_dict(), indent=2))


def _load_config_dict(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    if p.suffix in {".yml", ".yaml"}:
        data = yaml.safe_load(p.read_text())
    elif p.suffix == ".json":
        data = json.loads(p.read_text())
    else:
        raise ValueError("Config file must be .json or .yaml")
    if data is None:
        data = {}
    if isinstance(data, dict) and "include" in data:
        include_paths = data.get("include") or []
        if not isinstance(include_paths, list):
            raise ValueError("include must be a list of file paths")
        merged: Dict[str, Any] = {}
        for inc in include_paths:
            inc_path = Path(inc)
            if not inc_path.is_absolute():
                inc_path = p.parent / inc_path
            inc_data = _load_config_dict(str(inc_path))
            merged = _deep_merge(merged, inc_data)
        # Overlay current file (excluding include)
        data = {k: v for k, v in data.items() if k != "include"}
        merged = _deep_merge(merged, data)
        data = merged
    return data


_STRING_FIELDS = {"run_prefix", "direction", "mode"}


def _coerce_numbers(obj: Any) -> Any:
    # YAML leaves values like "1e-3" as strings
    if isinstance(obj, dict):
        return {k: v if k in _STRING_FIELDS else _coerce_numbers(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce_numbers(v) for v in obj]
    if isinstance(obj, str):
        try:
            val = float(obj)
            return val
        except ValueError:
            return obj
    return obj
