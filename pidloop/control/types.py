"""Controller modes, output direction, and the PID interface."""
from __future__ import annotations

from enum import Enum


class Mode(Enum):
    """Operating mode of a controller.

    AUTOMATIC computes a new output from the measurement on every accepted
    sample. MANUAL returns a fixed, caller-supplied output.
    """

    AUTOMATIC = "automatic"
    MANUAL = "manual"


class Direction(Enum):
    """Relation between the controller output and the process value.

    DIRECT: more output raises the process value (a heater on a tank).
    REVERSE: more output lowers it (a chiller on the same tank).
    """

    DIRECT = "direct"
    REVERSE = "reverse"


def parse_mode(value: str | Mode) -> Mode:
    if isinstance(value, Mode):
        return value
    try:
        return Mode(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown mode: {value!r} (expected automatic | manual)") from None


def parse_direction(value: str | Direction) -> Direction:
    if isinstance(value, Direction):
        return value
    try:
        return Direction(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown direction: {value!r} (expected direct | reverse)") from None


class Pid:
    """Interface of a discrete PID controller."""

    def compute(self, value: float) -> float:
        """Return the output to apply for the latest measurement."""
        raise NotImplementedError

    def set_tunings(self, kp: float, ki: float, kd: float) -> None:
        raise NotImplementedError

    def set_sample_time(self, sample_time_ms: int) -> None:
        """Set the minimum number of milliseconds between recalculations."""
        raise NotImplementedError

    def set_output_limits(self, minimum: float, maximum: float) -> None:
        raise NotImplementedError

    def set_automatic_mode(self) -> None:
        raise NotImplementedError

    def set_manual_mode(self, value: float) -> None:
        """Stop computing and return `value` from every compute call."""
        raise NotImplementedError

    def set_direction(self, direction: Direction) -> None:
        raise NotImplementedError

    def set_target(self, target: float) -> None:
        raise NotImplementedError
