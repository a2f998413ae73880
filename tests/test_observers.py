"""Subscription registry delivery guarantees."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from mission.engine.loop import ManualFrameScheduler
from mission.sim.engine import SimulationEngine
from mission.sim.observers import SubscriptionRegistry
from mission.sim.types import Hazard, HazardType, RiskLevel, Severity, Trajectory, Waypoint


def _engine() -> SimulationEngine:
    trajectory = Trajectory(
        "baseline",
        "Baseline",
        3100.0,
        72.0,
        85.0,
        2450.0,
        RiskLevel.MEDIUM,
        (Waypoint(0, 0, 0, 0), Waypoint(200, 60, 12, 72)),
    )
    return SimulationEngine(trajectory, ManualFrameScheduler())


def _hazard(hazard_id: str) -> Hazard:
    return Hazard(hazard_id, Severity.MEDIUM, HazardType.DEBRIS_CONJUNCTION, "debris")


def test_self_unsubscribe_does_not_skip_other_subscribers() -> None:
    engine = _engine()
    first_calls = []
    second_calls = []
    handles = {}

    def first(state, metrics) -> None:
        first_calls.append(len(state.active_hazards))
        handles["first"]()

    def second(state, metrics) -> None:
        second_calls.append(len(state.active_hazards))

    handles["first"] = engine.subscribe(first)
    engine.subscribe(second)

    engine.add_hazard(_hazard("a"))
    assert first_calls == [1]
    assert second_calls == [1]

    engine.add_hazard(_hazard("b"))
    assert first_calls == [1]
    assert second_calls == [1, 2]


def test_unsubscribing_a_later_subscriber_still_delivers_current_notification() -> None:
    engine = _engine()
    calls = []
    handles = {}

    def first(state, metrics) -> None:
        calls.append("first")
        handles["second"]()

    def second(state, metrics) -> None:
        calls.append("second")

    engine.subscribe(first)
    handles["second"] = engine.subscribe(second)

    engine.set_time_scale(2.0)
    engine.set_time_scale(3.0)
    assert calls == ["first", "second", "first"]


def test_all_subscribers_receive_the_same_pair() -> None:
    engine = _engine()
    received = []
    engine.subscribe(lambda state, metrics: received.append((state, metrics)))
    engine.subscribe(lambda state, metrics: received.append((state, metrics)))
    engine.add_hazard(_hazard("a"))
    assert len(received) == 2
    assert received[0][0] is received[1][0]
    assert received[0][1] is received[1][1]
    assert received[0][1].delta_v == 3200.0


def test_unsubscribe_reports_whether_callback_was_registered() -> None:
    registry = SubscriptionRegistry()

    def callback(state, metrics) -> None:
        pass

    unsubscribe = registry.subscribe(callback)
    assert callback in registry
    assert unsubscribe() is True
    assert unsubscribe() is False
    assert len(registry) == 0


def test_duplicate_subscription_delivers_once() -> None:
    registry = SubscriptionRegistry()
    calls = []

    def callback(state, metrics) -> None:
        calls.append(state)

    registry.subscribe(callback)
    registry.subscribe(callback)
    assert registry.notify("state", "metrics") == 1
    assert calls == ["state"]


@dataclass
class _Recorder:
    calls: List[float] = field(default_factory=list)

    def __call__(self, state, metrics) -> None:
        self.calls.append(state.time_scale)


def test_unhashable_callables_can_subscribe() -> None:
    engine = _engine()
    first = _Recorder()
    second = _Recorder()
    assert first == second
    unsubscribe = engine.subscribe(first)
    engine.subscribe(second)
    engine.set_time_scale(2.0)
    assert first.calls == [2.0]
    assert second.calls == [2.0]

    assert unsubscribe() is True
    engine.set_time_scale(3.0)
    assert first.calls == [2.0]
    assert second.calls == [2.0, 3.0]


def test_same_bound_method_subscribes_once() -> None:
    registry = SubscriptionRegistry()
    recorder = _Recorder()
    registry.subscribe(recorder.__call__)
    unsubscribe = registry.subscribe(recorder.__call__)
    assert len(registry) == 1
    assert unsubscribe() is True
    assert len(registry) == 0
