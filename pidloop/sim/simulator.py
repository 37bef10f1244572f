"""Host control loop: one BasicPID driving one stand-in plant on a manual clock."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from pidloop.clock import ManualClock
from pidloop.config import Config
from pidloop.control import BasicPID, Mode
from pidloop.logging.parquet_logger import ParquetLogger
from pidloop.logging.run_writer import make_run_id, prepare_run_dir, write_config, write_summary
from pidloop.seeding import make_rng
from pidloop.sim.plant import FirstOrderPlant

logger = logging.getLogger(__name__)


@dataclass
class SimulationOutput:
    run_id: str
    summary: Dict[str, Any]
    output_dir: str


def _schedule(cfg: Config) -> Dict[int, float]:
    out: Dict[int, float] = {}
    for entry in cfg.sim.setpoint_schedule:
        if len(entry) != 2:
            raise ValueError(f"setpoint_schedule entries must be [step, value], got {entry!r}")
        out[int(entry[0])] = float(entry[1])
    return out


def _manual_window(cfg: Config) -> Tuple[int, int] | None:
    window = cfg.sim.manual_window
    if not window:
        return None
    if len(window) != 2:
        raise ValueError(f"manual_window must be [start, end], got {window!r}")
    start, end = int(window[0]), int(window[1])
    if start > end:
        raise ValueError(f"manual_window start must not exceed end, got {window!r}")
    if start == end:
        # [start, end) is empty
        return None
    return start, end


class Simulator:
    def __init__(self, cfg: Config, clock: ManualClock | None = None) -> None:
        self.cfg = cfg
        self.clock = clock or ManualClock(int(cfg.sim.start_ms))
        self.pid = BasicPID.from_config(cfg.controller, clock=self.clock)
        self.plant = FirstOrderPlant(cfg.plant, make_rng(int(cfg.plant.seed)), dt_s=cfg.sim.dt_ms / 1000.0)
        self.schedule = _schedule(cfg)
        self.window = _manual_window(cfg)
        self.step_idx = 0

    def _apply_schedule(self) -> None:
        if self.step_idx in self.schedule:
            self.pid.set_target(self.schedule[self.step_idx])
        if self.window is None:
            return
        start, end = self.window
        if self.step_idx == start:
            logger.info("Step %d: switching to manual output %.3f", self.step_idx, self.cfg.sim.manual_output)
            self.pid.set_manual_mode(self.cfg.sim.manual_output)
        elif self.step_idx == end:
            logger.info("Step %d: resuming automatic control", self.step_idx)
            self.pid.set_automatic_mode()

    def step(self) -> Tuple[Dict[str, Any], bool]:
        self._apply_schedule()
        now = self.clock()
        measurement = self.plant.measure()
        output = self.pid.compute(measurement)
        automatic = self.pid.mode is Mode.AUTOMATIC
        held = automatic and self.pid.last_compute_ms != now
        low, high = self.pid.output_limits
        saturated = automatic and (output >= high or output <= low)
        row = {
            "step": self.step_idx,
            "t_ms": now,
            "mode": self.pid.mode.value,
            "setpoint": self.pid.setpoint,
            "measurement": measurement,
            "error": self.pid.setpoint - measurement,
            "output": output,
            "integral": self.pid.integral,
            "held": int(held),
            "saturated": int(saturated),
        }
        self.plant.step(output)
        self.clock.advance(int(self.cfg.sim.dt_ms))
        self.step_idx += 1
        done = self.step_idx >= int(self.cfg.sim.steps)
        return row, done

    def run(self, output_root: str) -> SimulationOutput:
        run_id = make_run_id(self.cfg.sim.run_prefix)
        run_dir = prepare_run_dir(output_root, run_id)
        run_id = run_dir.name
        write_config(run_dir, self.cfg)

        parquet = ParquetLogger(str(run_dir / "timeseries.parquet"))
        totals = {
            "abs_error": 0.0,
            "held": 0,
            "manual": 0,
            "saturated": 0,
        }
        row: Dict[str, Any] = {}
        done = int(self.cfg.sim.steps) <= 0
        while not done:
            row, done = self.step()
            row["run_id"] = run_id
            parquet.append(row)
            if not math.isnan(row["error"]):
                totals["abs_error"] += abs(row["error"])
            totals["held"] += row["held"]
            totals["manual"] += int(row["mode"] == Mode.MANUAL.value)
            totals["saturated"] += row["saturated"]

        parquet.flush()
        steps = self.step_idx
        summary = {
            "run_id": run_id,
            "steps": steps,
            "final_measurement": row.get("measurement"),
            "final_error": row.get("error"),
            "mean_abs_error": totals["abs_error"] / steps if steps else None,
            "held_steps": totals["held"],
            "manual_steps": totals["manual"],
            "saturated_steps": totals["saturated"],
            "gains": {"kp": self.pid.kp, "ki": self.pid.ki, "kd": self.pid.kd},
        }
        write_summary(run_dir, summary)
        logger.info("Run %s finished after %d steps", run_id, steps)
        return SimulationOutput(run_id=run_id, summary=summary, output_dir=str(run_dir))
