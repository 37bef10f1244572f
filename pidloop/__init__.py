"""Discrete-time PID controller with a simulation host loop."""
from pidloop.clock import ManualClock, monotonic_millis
from pidloop.config import Config, load_config
from pidloop.control import BasicPID, Direction, Mode

__all__ = ["BasicPID", "Config", "Direction", "ManualClock", "Mode", "load_config", "monotonic_millis"]
