"""Control modules: the discrete PID controller and its mode/direction types."""
from pidloop.control.types import Direction, Mode, Pid, parse_direction, parse_mode
from pidloop.control.pid import BasicPID

__all__ = [
    "BasicPID",
    "Pid",
    "Mode",
    "Direction",
    "parse_mode",
    "parse_direction",
]
