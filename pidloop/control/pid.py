"""Discrete-time PID controller with sample-time gating and bumpless transfer."""
from __future__ import annotations

import logging
from typing import Tuple

import numpy as np

from pidloop.clock import Clock, monotonic_millis
from pidloop.config import ControllerConfig
from pidloop.control.types import Direction, Mode, Pid, parse_direction, parse_mode

logger = logging.getLogger(__name__)


def _clamp(value: float, minimum: float, maximum: float) -> float:
    # Upper bound is checked first; NaN passes through untouched.
    if value > maximum:
        return maximum
    if value < minimum:
        return minimum
    return value


class BasicPID(Pid):
    """PID controller in the style of Brett Beauregard's "improved beginner's PID".

    Gains are stored pre-scaled by the sample interval and pre-signed by the
    direction, so `compute` is a handful of multiply-adds. The derivative acts
    on the measurement rather than the error, and the integral term is clamped
    to the output limits.

    One instance belongs to one control loop. Callers sharing an instance
    across threads must serialize every call themselves.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self.clock = clock or monotonic_millis
        self._setpoint = 0.0
        self._kp = 0.0
        self._ki = 0.0
        self._kd = 0.0
        self._integral = 0.0
        self._last_input = 0.0
        self._last_output = 0.0
        self._sample_time_ms = 1
        self._last_time_ms = 0
        self._mode = Mode.AUTOMATIC
        self._manual_output = 0.0
        self._output_min = float("-inf")
        self._output_max = float("inf")
        self._direction = Direction.DIRECT

    @classmethod
    def from_config(cls, cfg: ControllerConfig, clock: Clock | None = None) -> "BasicPID":
        pid = cls(clock=clock)
        # Sample time and direction go first so the tunings are scaled and signed once.
        pid.set_sample_time(cfg.sample_time_ms)
        pid.set_direction(parse_direction(cfg.direction))
        pid.set_tunings(cfg.kp, cfg.ki, cfg.kd)
        pid.set_output_limits(cfg.output_min, cfg.output_max)
        pid.set_target(cfg.setpoint)
        if parse_mode(cfg.mode) is Mode.MANUAL:
            pid.set_manual_mode(cfg.manual_output)
        return pid

    def compute(self, value: float) -> float:
        if self._mode is Mode.MANUAL:
            return self._manual_output

        now = self.clock()
        if now - self._last_time_ms < self._sample_time_ms:
            return self._last_output

        error = self._setpoint - value
        self._integral = _clamp(self._integral + self._ki * error, self._output_min, self._output_max)
        d_input = value - self._last_input

        output = self._kp * error + self._integral - self._kd * d_input
        output = _clamp(output, self._output_min, self._output_max)

        self._last_input = value
        self._last_time_ms = now
        self._last_output = output
        return output

    def set_tunings(self, kp: float, ki: float, kd: float) -> None:
        if kp < 0 or ki < 0 or kd < 0:
            logger.debug("Ignoring negative tunings kp=%s ki=%s kd=%s", kp, ki, kd)
            return
        sample_time = self._sample_time_ms if self._sample_time_ms != 0 else 1
        self._kp = float(kp)
        self._ki = float(ki) * sample_time
        self._kd = float(kd) / sample_time
        if self._direction is Direction.REVERSE:
            self._negate_gains()

    def set_sample_time(self, sample_time_ms: int) -> None:
        if self._sample_time_ms > 0:
            ratio = np.float64(sample_time_ms) / np.float64(self._sample_time_ms)
            # Zero interval: kd becomes +/-inf, or nan when kd is 0
            with np.errstate(divide="ignore", invalid="ignore"):
                self._ki = float(np.float64(self._ki) * ratio)
                self._kd = float(np.float64(self._kd) / ratio)
        self._sample_time_ms = int(sample_time_ms)

    def set_output_limits(self, minimum: float, maximum: float) -> None:
        if minimum > maximum:
            logger.warning("Output limits are inverted: min=%s > max=%s", minimum, maximum)
        self._output_min = float(minimum)
        self._output_max = float(maximum)

    def set_automatic_mode(self) -> None:
        if self._mode is Mode.MANUAL:
            self._integral = _clamp(self._last_output, self._output_min, self._output_max)
        self._mode = Mode.AUTOMATIC

    def set_manual_mode(self, value: float) -> None:
        self._mode = Mode.MANUAL
        self._manual_output = float(value)

    def set_direction(self, direction: Direction) -> None:
        if direction is not self._direction:
            self._negate_gains()
        self._direction = direction

    def set_target(self, target: float) -> None:
        self._setpoint = float(target)

    def _negate_gains(self) -> None:
        self._kp = 0.0 - self._kp
        self._ki = 0.0 - self._ki
        self._kd = 0.0 - self._kd

    @property
    def kp(self) -> float:
        """Effective proportional gain (signed by direction)."""
        return self._kp

    @property
    def ki(self) -> float:
        """Effective integral gain, per sample interval."""
        return self._ki

    @property
    def kd(self) -> float:
        """Effective derivative gain, per sample interval."""
        return self._kd

    @property
    def setpoint(self) -> float:
        return self._setpoint

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def sample_time_ms(self) -> int:
        return self._sample_time_ms

    @property
    def output_limits(self) -> Tuple[float, float]:
        return (self._output_min, self._output_max)

    @property
    def integral(self) -> float:
        return self._integral

    @property
    def last_output(self) -> float:
        return self._last_output

    @property
    def last_compute_ms(self) -> int:
        """Clock reading of the last sample that was actually computed."""
        return self._last_time_ms
