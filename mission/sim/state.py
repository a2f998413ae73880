"""Authoritative simulation state and the snapshots handed to readers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from pygame.math import Vector3

from .types import Hazard, Trajectory

PRE_LAUNCH = "Pre-Launch"
LAUNCH_PHASE = "Launch Phase"
EARTH_DEPARTURE = "Earth Departure"
TRANS_LUNAR_INJECTION = "Trans-Lunar Injection"
LUNAR_APPROACH = "Lunar Approach"
LUNAR_ORBIT_INSERTION = "Lunar Orbit Insertion"
MISSION_COMPLETE = "Mission Complete"

MISSION_PHASES: Tuple[str, ...] = (
    PRE_LAUNCH,
    LAUNCH_PHASE,
    EARTH_DEPARTURE,
    TRANS_LUNAR_INJECTION,
    LUNAR_APPROACH,
    LUNAR_ORBIT_INSERTION,
    MISSION_COMPLETE,
)

MIN_TIME_SCALE = 0.1
MAX_TIME_SCALE = 10.0
FULL_FUEL = 100.0


def clamp_time_scale(scale: float) -> float:
    return max(MIN_TIME_SCALE, min(MAX_TIME_SCALE, float(scale)))


@dataclass(frozen=True)
class StateSnapshot:
    """Read-only copy of :class:`SimulationState` at one instant."""

    is_running: bool
    is_paused: bool
    current_time: float
    time_scale: float
    current_position: Vector3
    current_velocity: float
    fuel_remaining: float
    active_hazards: Tuple[Hazard, ...]
    current_phase: str
    trajectory: Trajectory

    @property
    def progress(self) -> float:
        return progress_fraction(self.current_time, self.trajectory)


@dataclass
class SimulationState:
    """Mutable mission progress owned by a single engine."""

    trajectory: Trajectory
    is_running: bool = False
    is_paused: bool = False
    current_time: float = 0.0
    time_scale: float = 1.0
    current_position: Vector3 = field(default_factory=Vector3)
    current_velocity: float = 0.0
    fuel_remaining: float = FULL_FUEL
    active_hazards: List[Hazard] = field(default_factory=list)
    current_phase: str = PRE_LAUNCH

    @property
    def progress(self) -> float:
        return progress_fraction(self.current_time, self.trajectory)

    def restore_initial(self) -> None:
        """Return to pre-launch values, keeping the trajectory and time scale."""

        self.is_running = False
        self.is_paused = False
        self.current_time = 0.0
        self.current_position = Vector3()
        self.current_velocity = 0.0
        self.fuel_remaining = FULL_FUEL
        self.active_hazards = []
        self.current_phase = PRE_LAUNCH

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            is_running=self.is_running,
            is_paused=self.is_paused,
            current_time=self.current_time,
            time_scale=self.time_scale,
            current_position=Vector3(self.current_position),
            current_velocity=self.current_velocity,
            fuel_remaining=self.fuel_remaining,
            active_hazards=tuple(self.active_hazards),
            current_phase=self.current_phase,
            trajectory=self.trajectory,
        )


def progress_fraction(current_time: float, trajectory: Trajectory) -> float:
    """Mission progress in ``[0, 1]``."""

    if trajectory.travel_time <= 0:
        return 1.0
    return max(0.0, min(current_time / trajectory.travel_time, 1.0))


__all__ = [
    "EARTH_DEPARTURE",
    "FULL_FUEL",
    "LAUNCH_PHASE",
    "LUNAR_APPROACH",
    "LUNAR_ORBIT_INSERTION",
    "MAX_TIME_SCALE",
    "MIN_TIME_SCALE",
    "MISSION_COMPLETE",
    "MISSION_PHASES",
    "PRE_LAUNCH",
    "SimulationState",
    "StateSnapshot",
    "TRANS_LUNAR_INJECTION",
    "clamp_time_scale",
    "progress_fraction",
]
