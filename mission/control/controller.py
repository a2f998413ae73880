"""Host-side mission controller wrapping one simulation engine."""
from __future__ import annotations

import random
from typing import Dict, Iterable, List, Optional

from mission.advisory.crew import CrewResourceMonitor
from mission.advisory.recommendations import Recommendation, RecommendationBoard, RecommendationPriority
from mission.engine.logger import ChannelLogger, channel_logger
from mission.engine.loop import FrameScheduler
from mission.sim.engine import SimulationEngine
from mission.sim.metrics import LiveMetrics
from mission.sim.state import StateSnapshot
from mission.sim.types import Hazard, Severity, Trajectory

from .history import DEFAULT_MAX_POINTS, MetricsHistory
from .logs import LogPriority, LogSource, MissionLog, MissionLogBook

PRESET_SPEEDS = (0.5, 1.0, 2.0, 5.0, 10.0)

HAZARD_RESPONSES = (
    "{type} detected. Analyzing impact on current trajectory.",
    "Hazard assessment complete. Severity: {severity}. Evaluating alternatives.",
    "Recommendation: Consider trajectory adjustment for optimal safety margins.",
    "Monitoring {type}. Crew safety protocols activated.",
)

_RECOMMENDATION_LOG_PRIORITY = {
    RecommendationPriority.CRITICAL: LogPriority.CRITICAL,
    RecommendationPriority.HIGH: LogPriority.WARNING,
}


class UnknownTrajectoryError(KeyError):
    """Raised when a trajectory id is not in the controller's catalog."""


def hazard_log_priority(severity: Severity) -> LogPriority:
    if severity == Severity.CRITICAL:
        return LogPriority.CRITICAL
    if severity == Severity.HIGH:
        return LogPriority.WARNING
    return LogPriority.INFO


class MissionController:
    """Routes operator actions to the engine and records mission logs."""

    def __init__(
        self,
        trajectories: Iterable[Trajectory],
        scheduler: FrameScheduler,
        initial_trajectory: Optional[str] = None,
        seed_logs: Optional[List[MissionLog]] = None,
        rng: Optional[random.Random] = None,
        history_points: int = DEFAULT_MAX_POINTS,
        logger: Optional[ChannelLogger] = None,
        engine_logger: Optional[ChannelLogger] = None,
    ) -> None:
        self._trajectories: Dict[str, Trajectory] = {t.id: t for t in trajectories}
        if not self._trajectories:
            raise ValueError("MissionController needs at least one trajectory")
        trajectory_id = initial_trajectory or next(iter(self._trajectories))
        self.trajectory_id = trajectory_id
        trajectory = self._lookup(trajectory_id)

        self._rng = rng or random.Random()
        self.logger = logger or channel_logger("control")
        self.scheduler = scheduler
        self.engine = SimulationEngine(trajectory, scheduler, logger=engine_logger)
        self.logs = MissionLogBook(seed=seed_logs, rng=self._rng)
        self.history = MetricsHistory(history_points)
        self.crew = CrewResourceMonitor(self._rng)
        self.advisor = RecommendationBoard(scheduler.now, lambda: self.trajectory_id)

        self.state: StateSnapshot = self.engine.get_state()
        self.metrics: LiveMetrics = self.engine.get_metrics()
        self._unsubscribers = [
            self.engine.subscribe(self._on_update),
            self.engine.subscribe(self.history),
            self.engine.subscribe(self.crew),
            self.engine.subscribe(self.advisor),
        ]

    def _lookup(self, trajectory_id: str) -> Trajectory:
        try:
            return self._trajectories[trajectory_id]
        except KeyError:
            raise UnknownTrajectoryError(trajectory_id) from None

    def _on_update(self, state: StateSnapshot, metrics: LiveMetrics) -> None:
        self.state = state
        self.metrics = metrics

    def _log(self, source: LogSource, message: str, priority: LogPriority = LogPriority.INFO) -> MissionLog:
        entry = self.logs.add(source, message, priority)
        self.logger.info("[%s] %s", entry.source.value, entry.message)
        return entry

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    @property
    def trajectories(self) -> List[Trajectory]:
        return list(self._trajectories.values())

    @property
    def is_running(self) -> bool:
        return self.state.is_running

    @property
    def is_paused(self) -> bool:
        return self.state.is_paused

    # -- time control ----------------------------------------------------

    def start(self) -> None:
        self.engine.start()
        self._log(LogSource.FLIGHT_CONTROLLER, "Mission simulation started. All systems nominal.")

    def pause(self) -> None:
        self.engine.pause()
        self._log(LogSource.FLIGHT_CONTROLLER, "Simulation paused. Maintaining current status.")

    def resume(self) -> None:
        self.engine.resume()
        self._log(LogSource.FLIGHT_CONTROLLER, "Simulation resumed. Continuing mission profile.")

    def reset(self) -> None:
        self.engine.reset()
        self.logs.clear()
        self.advisor.clear()
        self._log(LogSource.FLIGHT_CONTROLLER, "Simulation reset to baseline parameters.")

    def toggle_play(self) -> None:
        if not self.is_running:
            self.start()
        elif self.is_paused:
            self.resume()
        else:
            self.pause()

    def set_time_scale(self, scale: float) -> None:
        self.engine.set_time_scale(scale)
        self._log(
            LogSource.FLIGHT_CONTROLLER,
            f"Simulation time scale adjusted to {scale:g}x real-time.",
        )

    # -- mission profile -------------------------------------------------

    def select_trajectory(self, trajectory_id: str) -> Trajectory:
        trajectory = self._lookup(trajectory_id)
        self.engine.set_trajectory(trajectory)
        self.trajectory_id = trajectory_id
        self._log(
            LogSource.ODIN_AI,
            f"Trajectory switched to {trajectory.name}. Recalculating mission parameters...",
        )
        return trajectory

    def inject_hazard(self, hazard: Hazard) -> MissionLog:
        self.engine.add_hazard(hazard)
        template = self._rng.choice(HAZARD_RESPONSES)
        message = template.format(type=hazard.type.value, severity=hazard.severity.value)
        return self._log(LogSource.ODIN_AI, message, hazard_log_priority(hazard.severity))

    def clear_hazard(self, hazard_id: str) -> None:
        self.engine.remove_hazard(hazard_id)
        self._log(LogSource.HAZARD_DETECTION, f"Hazard {hazard_id} cleared. Threat level reduced.")

    # -- decision support ------------------------------------------------

    def recommendations(self) -> List[Recommendation]:
        return self.advisor.items()

    def accept_recommendation(self, rec_id: str) -> Recommendation:
        rec = self.advisor.get(rec_id)
        if rec.target_trajectory and rec.target_trajectory in self._trajectories:
            self.select_trajectory(rec.target_trajectory)
        self._log(
            LogSource.ODIN_AI,
            f"AI recommendation accepted: {rec.title}",
            _RECOMMENDATION_LOG_PRIORITY.get(rec.priority, LogPriority.INFO),
        )
        self.advisor.dismiss(rec_id)
        return rec

    def dismiss_recommendation(self, rec_id: str) -> None:
        self.advisor.dismiss(rec_id)


__all__ = [
    "HAZARD_RESPONSES",
    "MissionController",
    "PRESET_SPEEDS",
    "UnknownTrajectoryError",
    "hazard_log_priority",
]
