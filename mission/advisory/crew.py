"""Crew life-support estimates derived from mission progress."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from mission.sim.metrics import LiveMetrics
from mission.sim.state import StateSnapshot

BASELINE_MISSION_HOURS = 72.0
HAZARD_CONSUMPTION_STEP = 0.1
MIN_POWER = 10.0
NOMINAL_TEMPERATURE = 22.0
NOMINAL_PRESSURE = 101.3


@dataclass(frozen=True)
class CrewResources:
    oxygen: float = 100.0
    water: float = 100.0
    food: float = 100.0
    power: float = 100.0
    temperature: float = NOMINAL_TEMPERATURE
    pressure: float = NOMINAL_PRESSURE


def resource_status(value: float) -> str:
    if value > 50:
        return "good"
    if value > 20:
        return "warning"
    return "critical"


def estimate_crew_resources(
    state: StateSnapshot, rng: Optional[random.Random] = None
) -> CrewResources:
    """Consumables drawn down against a 72-hour baseline, faster under hazards."""

    rng = rng or random.Random()
    progress = state.current_time / BASELINE_MISSION_HOURS
    rate = 1.0 + len(state.active_hazards) * HAZARD_CONSUMPTION_STEP
    return CrewResources(
        oxygen=max(0.0, 100.0 - progress * 25.0 * rate),
        water=max(0.0, 100.0 - progress * 20.0 * rate),
        food=max(0.0, 100.0 - progress * 15.0 * rate),
        power=max(MIN_POWER, 100.0 - progress * 30.0 * rate),
        temperature=NOMINAL_TEMPERATURE + (rng.random() - 0.5) * 4.0,
        pressure=NOMINAL_PRESSURE + (rng.random() - 0.5) * 2.0,
    )


class CrewResourceMonitor:
    """Subscriber that tracks the latest crew estimate."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()
        self.resources = CrewResources()

    def __call__(self, state: StateSnapshot, metrics: LiveMetrics) -> None:
        if state.current_time == 0:
            self.resources = CrewResources()
            return
        if state.is_running:
            self.resources = estimate_crew_resources(state, self._rng)

    def statuses(self) -> dict:
        return {
            "oxygen": resource_status(self.resources.oxygen),
            "water": resource_status(self.resources.water),
            "food": resource_status(self.resources.food),
            "power": resource_status(self.resources.power),
        }


__all__ = [
    "CrewResourceMonitor",
    "CrewResources",
    "estimate_crew_resources",
    "resource_status",
]
