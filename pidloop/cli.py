"""CLI entrypoints for pidloop."""
from __future__ import annotations

import json
import logging

import click

from pidloop.config import load_config, save_config
from pidloop.control import BasicPID
from pidloop.sim.simulator import Simulator


@click.group()
@click.option("--log-level", default="WARNING", show_default=True, help="Python logging level")
def main(log_level: str) -> None:
    """Discrete PID controller tools."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command("simulate")
@click.option("--config", "config_path", default=None, help="Path to config yaml/json")
@click.option("--output", "output_root", default="runs", help="Output directory")
@click.option("--steps", type=int, default=None, help="Override sim.steps")
def simulate_cmd(config_path: str | None, output_root: str, steps: int | None) -> None:
    cfg = load_config(config_path)
    if steps is not None:
        cfg.sim.steps = steps
    result = Simulator(cfg).run(output_root=output_root)
    click.echo(json.dumps(result.summary, indent=2))
    click.echo(f"Output: {result.output_dir}")


@main.command("gains")
@click.option("--config", "config_path", default=None, help="Path to config yaml/json")
def gains_cmd(config_path: str | None) -> None:
    """Print the effective gains after sample-time scaling and direction."""
    cfg = load_config(config_path)
    pid = BasicPID.from_config(cfg.controller)
    click.echo(
        json.dumps(
            {
                "kp": pid.kp,
                "ki": pid.ki,
                "kd": pid.kd,
                "sample_time_ms": pid.sample_time_ms,
                "direction": pid.direction.value,
            },
            indent=2,
        )
    )


@main.command("dump-config")
@click.option("--config", "config_path", default=None, help="Path to config yaml/json")
@click.option("--output", "output_path", default="config.json", help="Output json")
def dump_config_cmd(config_path: str | None, output_path: str) -> None:
    cfg = load_config(config_path)
    save_config(cfg, output_path)
    click.echo(f"Config saved to {output_path}")


if __name__ == "__main__":
    main()
