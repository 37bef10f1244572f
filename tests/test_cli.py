import json
import os
import sys
import tempfile
import unittest
from pathlib import Path

from click.testing import CliRunner

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from pidloop.cli import main


class TestCli(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        self.config = self.root / "cfg.yaml"
        self.config.write_text(
            "controller:\n"
            "  kp: 1.0\n"
            "  ki: 0.5\n"
            "  kd: 0.1\n"
            "  sample_time_ms: 2\n"
            "  direction: reverse\n"
            "sim:\n"
            "  steps: 5\n"
        )
        self.runner = CliRunner()

    def tearDown(self):
        self.tmp.cleanup()

    def test_gains(self):
        result = self.runner.invoke(main, ["gains", "--config", str(self.config)])
        self.assertEqual(result.exit_code, 0, result.output)
        gains = json.loads(result.output)
        self.assertAlmostEqual(gains["kp"], -1.0)
        self.assertAlmostEqual(gains["ki"], -1.0)
        self.assertAlmostEqual(gains["kd"], -0.05)
        self.assertEqual(gains["direction"], "reverse")

    def test_simulate(self):
        out = self.root / "runs"
        result = self.runner.invoke(
            main, ["simulate", "--config", str(self.config), "--output", str(out), "--steps", "3"]
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('"steps": 3', result.output)
        self.assertEqual(len(list(out.iterdir())), 1)

    def test_dump_config(self):
        target = self.root / "merged.json"
        result = self.runner.invoke(
            main, ["dump-config", "--config", str(self.config), "--output", str(target)]
        )
        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(target.read_text())
        self.assertEqual(data["controller"]["direction"], "reverse")
        self.assertEqual(data["sim"]["steps"], 5)

    def test_missing_config_fails(self):
        result = self.runner.invoke(main, ["gains", "--config", str(self.root / "missing.yaml")])
        self.assertNotEqual(result.exit_code, 0)
        self.assertIsInstance(result.exception, FileNotFoundError)


if __name__ == '__main__':
    unittest.main()
