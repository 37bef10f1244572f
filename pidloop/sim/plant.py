"""First-order-plus-dead-time process used as a stand-in for real hardware."""
from __future__ import annotations

from collections import deque
from typing import Deque

import numpy as np

from pidloop.config import PlantConfig


class FirstOrderPlant:
    def __init__(self, cfg: PlantConfig, rng: np.random.Generator, dt_s: float) -> None:
        self.cfg = cfg
        self.rng = rng
        self.dt_s = dt_s
        self.reset()

    def reset(self) -> None:
        self.value = float(self.cfg.initial_value)
        delay_steps = int(round(max(0.0, self.cfg.dead_time_s) / self.dt_s)) if self.dt_s > 0 else 0
        self._pending: Deque[float] = deque([0.0] * delay_steps)

    def measure(self) -> float:
        if self.cfg.noise_std <= 0:
            return self.value
        return self.value + float(self.rng.normal(0.0, self.cfg.noise_std))

    def step(self, actuator: float) -> float:
        """Advance one dt with `actuator` applied; returns the noise-free value."""
        self._pending.append(float(actuator))
        applied = self._pending.popleft()
        tau = max(1e-6, self.cfg.time_constant_s)
        drift = -(self.value - self.cfg.ambient) + self.cfg.gain * applied
        # Exact discretization keeps large dt/tau stable
        alpha = 1.0 - float(np.exp(-self.dt_s / tau))
        self.value += alpha * drift
        return self.value
