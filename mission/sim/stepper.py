"""Per-tick advancement of the simulation state."""
from __future__ import annotations

import math
from typing import Sequence, Tuple

from pygame.math import Vector3

from .state import (
    EARTH_DEPARTURE,
    FULL_FUEL,
    LAUNCH_PHASE,
    LUNAR_APPROACH,
    LUNAR_ORBIT_INSERTION,
    MISSION_COMPLETE,
    TRANS_LUNAR_INJECTION,
    SimulationState,
    progress_fraction,
)
from .types import Trajectory, Waypoint

PHASE_BREAKPOINTS: Tuple[Tuple[float, str], ...] = (
    (0.10, LAUNCH_PHASE),
    (0.30, EARTH_DEPARTURE),
    (0.70, TRANS_LUNAR_INJECTION),
    (0.90, LUNAR_APPROACH),
)

BASE_FUEL_FRACTION = 0.3
HAZARD_FUEL_FRACTION = 0.05
VELOCITY_SCALE = 1000.0
# Hours; absorbs rounding left over from summing many small frame deltas.
ARRIVAL_TOLERANCE = 1e-9


def phase_for_progress(progress: float) -> str:
    for limit, phase in PHASE_BREAKPOINTS:
        if progress < limit:
            return phase
    return LUNAR_ORBIT_INSERTION


def interpolate(trajectory: Trajectory, current_time: float) -> Tuple[Vector3, float]:
    """Return the interpolated position and segment velocity at ``current_time``.

    Velocity is the segment length over a nominal segment duration of
    ``travel_time / len(points)``, scaled by 1000.
    """

    points: Sequence[Waypoint] = trajectory.points
    progress = progress_fraction(current_time, trajectory)
    span = progress * (len(points) - 1)
    index = min(int(math.floor(span)), len(points) - 1)
    next_index = min(index + 1, len(points) - 1)
    remainder = span - index

    start = points[index].position
    end = points[next_index].position
    position = start.lerp(end, max(0.0, min(1.0, remainder)))
    segment_duration = trajectory.travel_time / len(points)
    velocity = start.distance_to(end) / segment_duration * VELOCITY_SCALE
    return position, velocity


def fuel_for(progress: float, hazard_count: int) -> float:
    used = progress * BASE_FUEL_FRACTION + hazard_count * HAZARD_FUEL_FRACTION
    return max(0.0, FULL_FUEL - used * 100.0)


def update_kinematics(state: SimulationState) -> None:
    state.current_position, state.current_velocity = interpolate(
        state.trajectory, state.current_time
    )


def advance(state: SimulationState, delta_seconds: float) -> bool:
    """Step ``state`` by ``delta_seconds`` of wall time; return True on arrival."""

    state.current_time += max(0.0, delta_seconds) * state.time_scale
    trajectory = state.trajectory

    arrived = state.current_time >= trajectory.travel_time - ARRIVAL_TOLERANCE
    if arrived:
        state.current_time = trajectory.travel_time
        state.current_phase = MISSION_COMPLETE
    else:
        state.current_phase = phase_for_progress(state.current_time / trajectory.travel_time)
    update_kinematics(state)
    # Fuel is never replenished mid-mission, even when hazards clear.
    state.fuel_remaining = min(
        state.fuel_remaining,
        fuel_for(state.progress, len(state.active_hazards)),
    )
    return arrived


__all__ = [
    "PHASE_BREAKPOINTS",
    "advance",
    "fuel_for",
    "interpolate",
    "phase_for_progress",
    "update_kinematics",
]
