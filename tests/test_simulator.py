import json
import os
import sys
import tempfile
import unittest
from pathlib import Path

import pandas as pd

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from pidloop.config import Config, ControllerConfig, PlantConfig, SimConfig
from pidloop.schemas import timeseries_columns
from pidloop.sim.simulator import Simulator
from pidloop.utils.validation import schema_missing, validate_output_bounds, validate_timeseries_schema


def make_config(**sim_overrides) -> Config:
    sim = SimConfig(steps=40, dt_ms=100, start_ms=1000)
    for key, value in sim_overrides.items():
        setattr(sim, key, value)
    return Config(
        controller=ControllerConfig(
            kp=2.0,
            ki=0.0005,
            kd=0.0,
            sample_time_ms=100,
            output_min=0.0,
            output_max=100.0,
            setpoint=60.0,
        ),
        plant=PlantConfig(gain=0.8, time_constant_s=2.0, initial_value=20.0, ambient=20.0),
        sim=sim,
    )


class TestSimulator(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def test_run_writes_outputs(self):
        cfg = make_config()
        result = Simulator(cfg).run(output_root=self.tmp.name)
        out = Path(result.output_dir)
        self.assertTrue((out / "config.json").exists())
        self.assertTrue((out / "summary.json").exists())
        parquet = out / "timeseries.parquet"
        self.assertEqual(schema_missing(validate_timeseries_schema(str(parquet))), [])

        df = pd.read_parquet(parquet)
        self.assertEqual(len(df), 40)
        self.assertEqual(list(df.columns), [name for name, _dtype in timeseries_columns()])
        self.assertTrue(validate_output_bounds(df, 0.0, 100.0))
        self.assertEqual(int(df["held"].sum()), 0)

        summary = json.loads((out / "summary.json").read_text())
        self.assertEqual(summary["steps"], 40)
        self.assertEqual(summary["run_id"], result.run_id)
        self.assertEqual(summary["held_steps"], 0)
        # Closed loop moves the process toward the setpoint
        self.assertLess(abs(summary["final_error"]), 40.0)

    def test_first_step_matches_controller_math(self):
        sim = Simulator(make_config())
        row, done = sim.step()
        self.assertFalse(done)
        self.assertEqual(row["t_ms"], 1000)
        self.assertAlmostEqual(row["error"], 40.0)
        # kp*error + ki*sample_time*error = 80 + 2
        self.assertAlmostEqual(row["output"], 82.0)
        self.assertEqual(row["held"], 0)

    def test_sample_time_gate_holds_output(self):
        cfg = make_config(steps=30)
        cfg.controller.sample_time_ms = 300
        result = Simulator(cfg).run(output_root=self.tmp.name)
        self.assertEqual(result.summary["held_steps"], 20)
        df = pd.read_parquet(Path(result.output_dir) / "timeseries.parquet")
        self.assertEqual(df.loc[1, "output"], df.loc[0, "output"])
        self.assertEqual(df.loc[2, "output"], df.loc[0, "output"])

    def test_manual_window_and_setpoint_schedule(self):
        cfg = make_config(manual_window=[10, 20], manual_output=12.5, setpoint_schedule=[[25, 30.0]])
        result = Simulator(cfg).run(output_root=self.tmp.name)
        self.assertEqual(result.summary["manual_steps"], 10)
        df = pd.read_parquet(Path(result.output_dir) / "timeseries.parquet")
        manual = df[df["mode"] == "manual"]
        self.assertEqual(list(manual["step"]), list(range(10, 20)))
        self.assertTrue((manual["output"] == 12.5).all())
        self.assertEqual(df.loc[24, "setpoint"], 60.0)
        self.assertEqual(df.loc[25, "setpoint"], 30.0)

    def test_bad_schedule_entry(self):
        with self.assertRaises(ValueError):
            Simulator(make_config(setpoint_schedule=[[1, 2, 3]]))
        with self.assertRaises(ValueError):
            Simulator(make_config(manual_window=[5]))

    def test_empty_manual_window_stays_automatic(self):
        sim = Simulator(make_config(steps=30, manual_window=[10, 10]))
        self.assertIsNone(sim.window)
        manual = 0
        done = False
        while not done:
            row, done = sim.step()
            manual += int(row["mode"] == "manual")
        self.assertEqual(manual, 0)

    def test_reversed_manual_window_is_rejected(self):
        with self.assertRaises(ValueError):
            Simulator(make_config(manual_window=[20, 10]))

    def test_run_ids_do_not_collide(self):
        cfg = make_config(steps=3)
        first = Simulator(cfg).run(output_root=self.tmp.name)
        second = Simulator(cfg).run(output_root=self.tmp.name)
        self.assertNotEqual(first.output_dir, second.output_dir)


if __name__ == '__main__':
    unittest.main()
