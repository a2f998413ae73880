"""Mission simulation engine: lifecycle controls around the stepper."""
from __future__ import annotations

from typing import Optional

from mission.engine.logger import ChannelLogger, channel_logger
from mission.engine.loop import FrameScheduler
from mission.engine.telemetry import TickTelemetry

from . import stepper
from .metrics import LiveMetrics, derive_metrics
from .observers import Subscriber, SubscriptionRegistry, Unsubscribe
from .state import SimulationState, StateSnapshot, clamp_time_scale
from .types import Hazard, Trajectory


class SimulationEngine:
    """Single-writer owner of one mission's state.

    Every control operation mutates the state store and then delivers exactly
    one notification to subscribers. Ticks come from ``scheduler`` while the
    engine is armed; ``pause`` and ``reset`` cancel the pending tick.
    """

    def __init__(
        self,
        trajectory: Trajectory,
        scheduler: FrameScheduler,
        logger: Optional[ChannelLogger] = None,
        telemetry_logger: Optional[ChannelLogger] = None,
        hazard_logger: Optional[ChannelLogger] = None,
    ) -> None:
        trajectory.validate()
        self._state = SimulationState(trajectory=trajectory)
        self._scheduler = scheduler
        self._registry = SubscriptionRegistry()
        self._frame_handle: Optional[int] = None
        self._last_update_time = 0.0
        self.logger = logger or channel_logger("sim")
        self.telemetry_logger = telemetry_logger or channel_logger("telemetry", False)
        self.hazard_logger = hazard_logger or channel_logger("hazards")
        self.telemetry = TickTelemetry()

    # -- observers -------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Unsubscribe:
        return self._registry.subscribe(callback)

    def get_state(self) -> StateSnapshot:
        return self._state.snapshot()

    def get_metrics(self) -> LiveMetrics:
        return derive_metrics(self._state)

    @property
    def armed(self) -> bool:
        return self._frame_handle is not None

    def _notify(self) -> None:
        snapshot = self._state.snapshot()
        metrics = derive_metrics(snapshot)
        self.telemetry.record_notification()
        self._registry.notify(snapshot, metrics)

    # -- scheduling ------------------------------------------------------

    def _arm(self) -> None:
        self._disarm()
        self._frame_handle = self._scheduler.request_frame(self._on_frame)

    def _disarm(self) -> None:
        if self._frame_handle is not None:
            self._scheduler.cancel_frame(self._frame_handle)
            self._frame_handle = None

    def _on_frame(self, timestamp: float) -> None:
        self._frame_handle = None
        state = self._state
        if not state.is_running or state.is_paused:
            return

        delta = max(0.0, timestamp - self._last_update_time)
        self._last_update_time = timestamp
        previous_phase = state.current_phase
        previous_time = state.current_time

        arrived = stepper.advance(state, delta)
        self.telemetry.record_tick(delta, state.current_time - previous_time)
        self.telemetry.advance_time(delta, self.telemetry_logger)
        if state.current_phase != previous_phase:
            self.logger.info(
                "Phase %s -> %s at T+%.2fh", previous_phase, state.current_phase, state.current_time
            )

        if arrived:
            state.is_paused = True
            self.logger.info("Mission complete after %.2fh", state.current_time)
        else:
            self._arm()
        self._notify()

    # -- control operations ----------------------------------------------

    def start(self) -> None:
        if self._state.is_running:
            return
        self._state.is_running = True
        self._state.is_paused = False
        self._last_update_time = self._scheduler.now()
        self._arm()
        self.logger.info("Simulation started on %s", self._state.trajectory.name)
        self._notify()

    def pause(self) -> None:
        self._state.is_paused = True
        self._disarm()
        self.logger.info("Simulation paused at T+%.2fh", self._state.current_time)
        self._notify()

    def resume(self) -> None:
        if not self._state.is_running:
            return
        self._state.is_paused = False
        self._last_update_time = self._scheduler.now()
        self._arm()
        self.logger.info("Simulation resumed at T+%.2fh", self._state.current_time)
        self._notify()

    def reset(self) -> None:
        self._state.restore_initial()
        self._disarm()
        self.telemetry.reset()
        self.logger.info("Simulation reset")
        self._notify()

    def set_trajectory(self, trajectory: Trajectory) -> None:
        trajectory.validate()
        state = self._state
        state.trajectory = trajectory
        if state.current_time > trajectory.travel_time:
            state.current_time = trajectory.travel_time
        stepper.update_kinematics(state)
        self.logger.info("Trajectory set to %s", trajectory.name)
        self._notify()

    def add_hazard(self, hazard: Hazard) -> None:
        self._state.active_hazards.append(hazard)
        self.hazard_logger.info("Hazard %s added (%s)", hazard.id, hazard.severity.value)
        self._notify()

    def remove_hazard(self, hazard_id: str) -> None:
        self._state.active_hazards = [
            hazard for hazard in self._state.active_hazards if hazard.id != hazard_id
        ]
        self.hazard_logger.info("Hazard %s removed", hazard_id)
        self._notify()

    def set_time_scale(self, scale: float) -> None:
        self._state.time_scale = clamp_time_scale(scale)
        self.logger.debug("Time scale set to %.2f", self._state.time_scale)
        self._notify()


__all__ = ["SimulationEngine"]
