"""Decision-support rules and crew resource estimates."""
from __future__ import annotations

import random

import pytest

from mission.advisory.crew import (
    CrewResourceMonitor,
    CrewResources,
    estimate_crew_resources,
    resource_status,
)
from mission.advisory.recommendations import (
    RecommendationBoard,
    RecommendationPriority,
    evaluate_rules,
)
from mission.sim.metrics import derive_metrics
from mission.sim.state import SimulationState
from mission.sim.types import Hazard, HazardType, RiskLevel, Severity, Trajectory, Waypoint


def _trajectory(
    traj_id: str = "baseline",
    radiation: float = 50.0,
    travel_time: float = 72.0,
    delta_v: float = 3100.0,
) -> Trajectory:
    return Trajectory(
        traj_id,
        traj_id,
        delta_v,
        travel_time,
        radiation,
        2400.0,
        RiskLevel.LOW,
        (Waypoint(0, 0, 0, 0), Waypoint(100, 0, 0, travel_time)),
    )


def _state(trajectory: Trajectory, **fields) -> SimulationState:
    state = SimulationState(trajectory=trajectory)
    state.is_running = True
    for key, value in fields.items():
        setattr(state, key, value)
    return state


def _rules(state: SimulationState, trajectory_id: str) -> list[str]:
    snapshot = state.snapshot()
    return [rec.rule for rec in evaluate_rules(snapshot, derive_metrics(snapshot), trajectory_id, 0.0)]


def test_quiet_mission_has_no_recommendations() -> None:
    assert _rules(_state(_trajectory()), "baseline") == []


def test_critical_hazard_recommends_safe_route() -> None:
    hazard = Hazard("h", Severity.CRITICAL, HazardType.SOLAR_FLARE, "flare")
    state = _state(_trajectory(radiation=10.0), active_hazards=[hazard])
    snapshot = state.snapshot()
    recs = evaluate_rules(snapshot, derive_metrics(snapshot), "lunar-polar", 12.5)
    assert [rec.rule for rec in recs] == ["hazard"]
    assert recs[0].priority == RecommendationPriority.CRITICAL
    assert recs[0].target_trajectory == "safe-route-alpha"
    assert recs[0].confidence == 95
    assert recs[0].id == "rec-hazard-12500"


def test_warning_level_only_flags_baseline() -> None:
    hazard = Hazard("h", Severity.MEDIUM, HazardType.CME, "cme")
    assert _rules(_state(_trajectory(), active_hazards=[hazard]), "baseline") == ["safety"]
    assert _rules(_state(_trajectory(), active_hazards=[hazard]), "lunar-polar") == []


def test_resource_timing_and_performance_rules() -> None:
    state = _state(
        _trajectory(radiation=90.0, travel_time=96.0, delta_v=3600.0),
        fuel_remaining=55.0,
        current_time=30.0,
    )
    assert _rules(state, "baseline") == ["fuel", "radiation", "time", "performance"]
    assert _rules(state, "fuel-efficient") == ["radiation", "time"]


def test_board_keeps_one_entry_per_rule_and_caps_count() -> None:
    clock = [0.0]
    board = RecommendationBoard(lambda: clock[0], lambda: "baseline", interval=1.0)
    state = _state(
        _trajectory(radiation=90.0, travel_time=96.0, delta_v=3600.0),
        fuel_remaining=55.0,
        current_time=30.0,
    ).snapshot()
    metrics = derive_metrics(state)

    board(state, metrics)
    assert len(board) == 3
    assert [rec.rule for rec in board.items()] == ["radiation", "time", "performance"]

    clock[0] = 0.5
    board(state, metrics)
    assert all(rec.created_at == 0.0 for rec in board.items())

    clock[0] = 2.0
    board(state, metrics)
    assert len(board) == 3
    assert all(rec.created_at == 2.0 for rec in board.items())


def test_board_expires_old_entries() -> None:
    board = RecommendationBoard(lambda: 0.0, lambda: "baseline")
    loud = _state(_trajectory(radiation=95.0)).snapshot()
    board.update(loud, derive_metrics(loud), "baseline", 0.0)
    assert len(board) == 1
    quiet = _state(_trajectory(radiation=10.0)).snapshot()
    board.update(quiet, derive_metrics(quiet), "baseline", 100.0)
    assert len(board) == 1
    board.update(quiet, derive_metrics(quiet), "baseline", 301.0)
    assert len(board) == 0


def test_board_ignores_stopped_missions() -> None:
    board = RecommendationBoard(lambda: 0.0, lambda: "baseline")
    state = _state(_trajectory(radiation=95.0))
    state.is_running = False
    snapshot = state.snapshot()
    board(snapshot, derive_metrics(snapshot))
    assert len(board) == 0
    with pytest.raises(KeyError):
        board.get("rec-radiation-0")
    assert board.dismiss("rec-radiation-0") is None


def test_crew_estimate_scales_with_hazards() -> None:
    hazards = [Hazard(f"h{i}", Severity.LOW, HazardType.CME, "cme") for i in range(5)]
    state = _state(_trajectory(), current_time=72.0, active_hazards=hazards).snapshot()
    resources = estimate_crew_resources(state, random.Random(3))
    assert resources.oxygen == pytest.approx(100.0 - 25.0 * 1.5)
    assert resources.water == pytest.approx(70.0)
    assert resources.food == pytest.approx(77.5)
    assert resources.power == pytest.approx(55.0)
    assert 20.0 <= resources.temperature <= 24.0
    assert 100.3 <= resources.pressure <= 102.3


def test_crew_power_never_drops_below_floor() -> None:
    state = _state(_trajectory(), current_time=1000.0).snapshot()
    resources = estimate_crew_resources(state, random.Random(1))
    assert resources.oxygen == 0.0
    assert resources.power == 10.0


@pytest.mark.parametrize("value, status", [(80.0, "good"), (50.0, "warning"), (21.0, "warning"), (20.0, "critical")])
def test_resource_status_thresholds(value: float, status: str) -> None:
    assert resource_status(value) == status


def test_crew_monitor_resets_at_mission_start() -> None:
    monitor = CrewResourceMonitor(random.Random(0))
    running = _state(_trajectory(), current_time=36.0).snapshot()
    monitor(running, derive_metrics(running))
    assert monitor.resources.oxygen == pytest.approx(87.5)
    fresh = SimulationState(trajectory=_trajectory()).snapshot()
    monitor(fresh, derive_metrics(fresh))
    assert monitor.resources == CrewResources()
