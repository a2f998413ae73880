"""Lightweight runtime telemetry for the simulation stepper."""
from __future__ import annotations

from dataclasses import dataclass

from mission.engine.logger import ChannelLogger

LOG_INTERVAL = 5.0


@dataclass
class TickTelemetrySnapshot:
    ticks: int
    notifications: int
    simulated_hours: float
    max_delta: float

    @property
    def mean_hours_per_tick(self) -> float:
        if self.ticks <= 0:
            return 0.0
        return self.simulated_hours / self.ticks


@dataclass
class TickTelemetry:
    """Counts stepper ticks and notifications since the last reset."""

    ticks: int = 0
    notifications: int = 0
    simulated_hours: float = 0.0
    max_delta: float = 0.0
    _log_accumulator: float = 0.0

    def record_tick(self, delta_seconds: float, simulated_hours: float) -> None:
        self.ticks += 1
        self.simulated_hours += simulated_hours
        if delta_seconds > self.max_delta:
            self.max_delta = delta_seconds

    def record_notification(self) -> None:
        self.notifications += 1

    def reset(self) -> None:
        self.ticks = 0
        self.notifications = 0
        self.simulated_hours = 0.0
        self.max_delta = 0.0
        self._log_accumulator = 0.0

    def advance_time(self, dt: float, logger: ChannelLogger | None = None) -> None:
        self._log_accumulator += dt
        if self._log_accumulator >= LOG_INTERVAL:
            self._log_accumulator = 0.0
            if logger and logger.enabled:
                logger.info(
                    "Stepper: ticks=%d notifications=%d simulated=%.2fh max_dt=%.3fs",
                    self.ticks,
                    self.notifications,
                    self.simulated_hours,
                    self.max_delta,
                )

    def snapshot(self) -> TickTelemetrySnapshot:
        return TickTelemetrySnapshot(
            ticks=self.ticks,
            notifications=self.notifications,
            simulated_hours=self.simulated_hours,
            max_delta=self.max_delta,
        )


__all__ = ["TickTelemetry", "TickTelemetrySnapshot"]
