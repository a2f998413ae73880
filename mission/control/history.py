"""Rolling metric samples for live charts."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List

from mission.sim.metrics import LiveMetrics
from mission.sim.state import StateSnapshot

DEFAULT_MAX_POINTS = 50


@dataclass(frozen=True)
class DataPoint:
    time: float
    velocity: float
    fuel: float
    radiation: float
    distance_kkm: float


class MetricsHistory:
    """Subscriber that samples every notification while the mission runs."""

    def __init__(self, max_points: int = DEFAULT_MAX_POINTS) -> None:
        self._points: Deque[DataPoint] = deque(maxlen=max_points)

    def __len__(self) -> int:
        return len(self._points)

    @property
    def max_points(self) -> int:
        return self._points.maxlen or 0

    def __call__(self, state: StateSnapshot, metrics: LiveMetrics) -> None:
        if state.current_time == 0:
            self._points.clear()
            return
        if not state.is_running:
            return
        self._points.append(
            DataPoint(
                time=state.current_time,
                velocity=metrics.current_velocity,
                fuel=state.fuel_remaining,
                radiation=metrics.radiation_exposure,
                distance_kkm=metrics.distance_to_target / 1000.0,
            )
        )

    def points(self) -> List[DataPoint]:
        return list(self._points)

    def clear(self) -> None:
        self._points.clear()


__all__ = ["DataPoint", "MetricsHistory"]
