"""Derived mission metrics; a pure function of simulation state."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Union

from .state import SimulationState, StateSnapshot, progress_fraction
from .types import Hazard, Severity

EARTH_MOON_DISTANCE_KM = 384400.0
MAX_RADIATION = 100.0
FUEL_PER_DELTA_V_PENALTY = 0.8


class SystemsStatus(str, Enum):
    GREEN = "Green"
    YELLOW = "Yellow"
    RED = "Red"


class HazardLevel(str, Enum):
    NOMINAL = "Nominal"
    WARNING = "Warning"
    CRITICAL = "Critical"


_STATUS_ORDER = (SystemsStatus.GREEN, SystemsStatus.YELLOW, SystemsStatus.RED)
_LEVEL_ORDER = (HazardLevel.NOMINAL, HazardLevel.WARNING, HazardLevel.CRITICAL)


@dataclass(frozen=True)
class SeverityEffect:
    radiation_multiplier: float
    delta_v_penalty: float
    systems_floor: SystemsStatus
    hazard_floor: HazardLevel


SEVERITY_EFFECTS: Dict[Severity, SeverityEffect] = {
    Severity.CRITICAL: SeverityEffect(1.5, 200.0, SystemsStatus.RED, HazardLevel.CRITICAL),
    Severity.HIGH: SeverityEffect(1.3, 150.0, SystemsStatus.YELLOW, HazardLevel.WARNING),
    Severity.MEDIUM: SeverityEffect(1.2, 100.0, SystemsStatus.YELLOW, HazardLevel.WARNING),
    Severity.LOW: SeverityEffect(1.1, 50.0, SystemsStatus.GREEN, HazardLevel.NOMINAL),
}


@dataclass(frozen=True)
class HazardAdjustment:
    radiation_multiplier: float = 1.0
    delta_v_penalty: float = 0.0
    systems_status: SystemsStatus = SystemsStatus.GREEN
    hazard_level: HazardLevel = HazardLevel.NOMINAL


@dataclass(frozen=True)
class LiveMetrics:
    delta_v: float
    travel_time: float
    radiation_exposure: float
    fuel_consumption: float
    distance_to_target: float
    current_velocity: float
    systems_status: SystemsStatus
    hazard_level: HazardLevel


def _raise_status(current: SystemsStatus, floor: SystemsStatus) -> SystemsStatus:
    return max(current, floor, key=_STATUS_ORDER.index)


def _raise_level(current: HazardLevel, floor: HazardLevel) -> HazardLevel:
    return max(current, floor, key=_LEVEL_ORDER.index)


def hazard_adjustment(hazards: Iterable[Hazard]) -> HazardAdjustment:
    """Fold active hazards into a compounded radiation multiplier and penalty.

    Classifications only ever move upward, so the result does not depend on
    the order the hazards were added in.
    """

    multiplier = 1.0
    penalty = 0.0
    status = SystemsStatus.GREEN
    level = HazardLevel.NOMINAL
    for hazard in hazards:
        effect = SEVERITY_EFFECTS[Severity(hazard.severity)]
        multiplier *= effect.radiation_multiplier
        penalty += effect.delta_v_penalty
        status = _raise_status(status, effect.systems_floor)
        level = _raise_level(level, effect.hazard_floor)
    return HazardAdjustment(
        radiation_multiplier=multiplier,
        delta_v_penalty=penalty,
        systems_status=status,
        hazard_level=level,
    )


def derive_metrics(state: Union[SimulationState, StateSnapshot]) -> LiveMetrics:
    trajectory = state.trajectory
    adjustment = hazard_adjustment(state.active_hazards)
    progress = progress_fraction(state.current_time, trajectory)
    return LiveMetrics(
        delta_v=trajectory.delta_v + adjustment.delta_v_penalty,
        travel_time=trajectory.travel_time,
        radiation_exposure=min(
            trajectory.radiation_exposure * adjustment.radiation_multiplier,
            MAX_RADIATION,
        ),
        fuel_consumption=trajectory.fuel_consumption
        + adjustment.delta_v_penalty * FUEL_PER_DELTA_V_PENALTY,
        distance_to_target=EARTH_MOON_DISTANCE_KM * (1.0 - progress),
        current_velocity=state.current_velocity,
        systems_status=adjustment.systems_status,
        hazard_level=adjustment.hazard_level,
    )


__all__ = [
    "EARTH_MOON_DISTANCE_KM",
    "HazardAdjustment",
    "HazardLevel",
    "LiveMetrics",
    "SEVERITY_EFFECTS",
    "SystemsStatus",
    "derive_metrics",
    "hazard_adjustment",
]
