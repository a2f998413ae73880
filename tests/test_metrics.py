"""Unit tests for the metrics deriver."""
from __future__ import annotations

from itertools import permutations
from math import isclose

import pytest

from mission.engine.loop import ManualFrameScheduler
from mission.sim.engine import SimulationEngine
from mission.sim.metrics import (
    EARTH_MOON_DISTANCE_KM,
    HazardLevel,
    SystemsStatus,
    derive_metrics,
    hazard_adjustment,
)
from mission.sim.state import SimulationState
from mission.sim.types import Hazard, HazardType, RiskLevel, Severity, Trajectory, Waypoint


def _trajectory(radiation: float = 85.0) -> Trajectory:
    return Trajectory(
        id="baseline",
        name="Baseline Hohmann Transfer",
        delta_v=3100.0,
        travel_time=72.0,
        radiation_exposure=radiation,
        fuel_consumption=2450.0,
        risk=RiskLevel.MEDIUM,
        points=(Waypoint(0, 0, 0, 0), Waypoint(200, 60, 12, 72)),
    )


def _hazard(severity: Severity, hazard_id: str = "haz") -> Hazard:
    return Hazard(hazard_id, severity, HazardType.SOLAR_FLARE, "flare")


def test_nominal_metrics_without_hazards() -> None:
    state = SimulationState(trajectory=_trajectory())
    metrics = derive_metrics(state)
    assert metrics.delta_v == 3100.0
    assert metrics.travel_time == 72.0
    assert metrics.radiation_exposure == 85.0
    assert metrics.fuel_consumption == 2450.0
    assert metrics.distance_to_target == EARTH_MOON_DISTANCE_KM
    assert metrics.current_velocity == 0.0
    assert metrics.systems_status == SystemsStatus.GREEN
    assert metrics.hazard_level == HazardLevel.NOMINAL


def test_two_critical_hazards_compound_and_cap_radiation() -> None:
    scheduler = ManualFrameScheduler()
    engine = SimulationEngine(_trajectory(), scheduler)
    engine.add_hazard(_hazard(Severity.CRITICAL, "a"))
    engine.add_hazard(_hazard(Severity.CRITICAL, "b"))
    metrics = engine.get_metrics()

    adjustment = hazard_adjustment(engine.get_state().active_hazards)
    assert adjustment.radiation_multiplier == pytest.approx(2.25)
    assert metrics.radiation_exposure == 100.0
    assert metrics.systems_status == SystemsStatus.RED
    assert metrics.hazard_level == HazardLevel.CRITICAL
    assert metrics.delta_v == 3500.0
    assert metrics.fuel_consumption == pytest.approx(2450.0 + 400.0 * 0.8)


def test_compounded_radiation_below_cap() -> None:
    state = SimulationState(trajectory=_trajectory(radiation=25.0))
    state.active_hazards = [_hazard(Severity.CRITICAL), _hazard(Severity.CRITICAL)]
    assert derive_metrics(state).radiation_exposure == pytest.approx(56.25)


@pytest.mark.parametrize(
    "severity, multiplier, penalty, status, level",
    [
        (Severity.LOW, 1.1, 50.0, SystemsStatus.GREEN, HazardLevel.NOMINAL),
        (Severity.MEDIUM, 1.2, 100.0, SystemsStatus.YELLOW, HazardLevel.WARNING),
        (Severity.HIGH, 1.3, 150.0, SystemsStatus.YELLOW, HazardLevel.WARNING),
        (Severity.CRITICAL, 1.5, 200.0, SystemsStatus.RED, HazardLevel.CRITICAL),
    ],
)
def test_single_hazard_effects(severity, multiplier, penalty, status, level) -> None:
    adjustment = hazard_adjustment([_hazard(severity)])
    assert isclose(adjustment.radiation_multiplier, multiplier)
    assert adjustment.delta_v_penalty == penalty
    assert adjustment.systems_status == status
    assert adjustment.hazard_level == level


def test_classification_never_downgrades_regardless_of_order() -> None:
    severities = [Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW]
    for order in permutations(severities):
        adjustment = hazard_adjustment([_hazard(s) for s in order])
        assert adjustment.systems_status == SystemsStatus.RED
        assert adjustment.hazard_level == HazardLevel.CRITICAL
        assert adjustment.delta_v_penalty == 500.0
        assert isclose(adjustment.radiation_multiplier, 1.5 * 1.3 * 1.2 * 1.1)

    for order in permutations([Severity.HIGH, Severity.LOW, Severity.MEDIUM]):
        adjustment = hazard_adjustment([_hazard(s) for s in order])
        assert adjustment.systems_status == SystemsStatus.YELLOW
        assert adjustment.hazard_level == HazardLevel.WARNING


def test_distance_shrinks_with_progress_and_floors_at_zero() -> None:
    state = SimulationState(trajectory=_trajectory())
    state.current_time = 36.0
    assert derive_metrics(state).distance_to_target == pytest.approx(192200.0)
    state.current_time = 72.0
    assert derive_metrics(state).distance_to_target == 0.0
    state.current_time = 100.0
    assert derive_metrics(state).distance_to_target == 0.0


def test_metrics_are_idempotent() -> None:
    state = SimulationState(trajectory=_trajectory())
    state.current_time = 12.0
    state.current_velocity = 4132.0
    state.active_hazards = [_hazard(Severity.HIGH), _hazard(Severity.LOW)]
    first = derive_metrics(state)
    second = derive_metrics(state)
    assert first == second
    assert second.current_velocity == 4132.0
    assert len(state.active_hazards) == 2


def test_snapshot_and_store_derive_the_same_metrics() -> None:
    state = SimulationState(trajectory=_trajectory())
    state.current_time = 50.0
    state.active_hazards = [_hazard(Severity.MEDIUM)]
    assert derive_metrics(state) == derive_metrics(state.snapshot())
