"""Rule-based decision support derived from live mission state."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from mission.engine.logger import ChannelLogger, channel_logger
from mission.sim.metrics import HazardLevel, LiveMetrics
from mission.sim.state import StateSnapshot

SAFE_ROUTE = "safe-route-alpha"
FUEL_EFFICIENT_ROUTE = "fuel-efficient"
BASELINE_ROUTE = "baseline"

MAX_RECOMMENDATIONS = 3
RECOMMENDATION_TTL = 300.0
EVALUATION_INTERVAL = 3.0


class RecommendationType(str, Enum):
    TRAJECTORY = "trajectory"
    HAZARD = "hazard"
    RESOURCE = "resource"
    TIMING = "timing"


class RecommendationPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class Recommendation:
    id: str
    rule: str
    type: RecommendationType
    priority: RecommendationPriority
    title: str
    description: str
    confidence: int
    created_at: float
    action: Optional[str] = None
    target_trajectory: Optional[str] = None


def evaluate_rules(
    state: StateSnapshot, metrics: LiveMetrics, trajectory_id: str, now: float
) -> List[Recommendation]:
    stamp = int(now * 1000)
    found: List[Recommendation] = []

    def add(rule: str, **kwargs) -> None:
        found.append(Recommendation(id=f"rec-{rule}-{stamp}", rule=rule, created_at=now, **kwargs))

    if metrics.hazard_level == HazardLevel.CRITICAL:
        add(
            "hazard",
            type=RecommendationType.HAZARD,
            priority=RecommendationPriority.CRITICAL,
            title="Critical Hazard Response",
            description="Multiple hazards detected. Immediate trajectory change recommended.",
            action="Switch to Safe Route Alpha",
            target_trajectory=SAFE_ROUTE,
            confidence=95,
        )
    elif metrics.hazard_level == HazardLevel.WARNING and trajectory_id == BASELINE_ROUTE:
        add(
            "safety",
            type=RecommendationType.TRAJECTORY,
            priority=RecommendationPriority.MEDIUM,
            title="Safety Optimization",
            description="Current trajectory has elevated risk. Consider safer alternative.",
            action="Switch to Safe Route Alpha",
            target_trajectory=SAFE_ROUTE,
            confidence=78,
        )

    if state.fuel_remaining < 60 and trajectory_id != FUEL_EFFICIENT_ROUTE:
        add(
            "fuel",
            type=RecommendationType.RESOURCE,
            priority=RecommendationPriority.HIGH,
            title="Fuel Conservation",
            description="Fuel consumption higher than optimal. Switch to fuel-efficient trajectory.",
            action="Switch to Fuel Efficient Route",
            target_trajectory=FUEL_EFFICIENT_ROUTE,
            confidence=85,
        )

    if metrics.radiation_exposure > 80:
        add(
            "radiation",
            type=RecommendationType.HAZARD,
            priority=RecommendationPriority.HIGH,
            title="Radiation Mitigation",
            description="Radiation exposure approaching dangerous levels. Route adjustment advised.",
            action="Implement radiation shielding protocol",
            confidence=90,
        )

    if state.current_time > 24 and metrics.travel_time > 85:
        add(
            "time",
            type=RecommendationType.TIMING,
            priority=RecommendationPriority.MEDIUM,
            title="Mission Duration Optimization",
            description="Extended mission duration may impact crew resources.",
            action="Consider faster trajectory option",
            confidence=72,
        )

    if metrics.delta_v > 3500 and trajectory_id != FUEL_EFFICIENT_ROUTE:
        add(
            "performance",
            type=RecommendationType.TRAJECTORY,
            priority=RecommendationPriority.LOW,
            title="Delta-V Optimization",
            description="Current trajectory requires high delta-V. More efficient options available.",
            action="Optimize for fuel efficiency",
            confidence=68,
        )
    return found


class RecommendationBoard:
    """Holds the freshest few recommendations, one per rule."""

    def __init__(
        self,
        clock: Callable[[], float],
        trajectory_id: Callable[[], str],
        interval: float = EVALUATION_INTERVAL,
        logger: Optional[ChannelLogger] = None,
    ) -> None:
        self._clock = clock
        self._trajectory_id = trajectory_id
        self.interval = interval
        self.logger = logger or channel_logger("advisory")
        self._items: List[Recommendation] = []
        self._last_evaluated: Optional[float] = None

    def __len__(self) -> int:
        return len(self._items)

    def __call__(self, state: StateSnapshot, metrics: LiveMetrics) -> None:
        if not state.is_running:
            return
        now = self._clock()
        if self._last_evaluated is not None and now - self._last_evaluated < self.interval:
            return
        self._last_evaluated = now
        self.update(state, metrics, self._trajectory_id(), now)

    def update(
        self, state: StateSnapshot, metrics: LiveMetrics, trajectory_id: str, now: float
    ) -> List[Recommendation]:
        fresh = evaluate_rules(state, metrics, trajectory_id, now)
        rules = {rec.rule for rec in fresh}
        kept = [
            rec
            for rec in self._items
            if now - rec.created_at < RECOMMENDATION_TTL and rec.rule not in rules
        ]
        self._items = (kept + fresh)[-MAX_RECOMMENDATIONS:]
        for rec in fresh:
            self.logger.debug("Recommendation %s (%s, %d%%)", rec.title, rec.priority.value, rec.confidence)
        return fresh

    def items(self) -> List[Recommendation]:
        return list(self._items)

    def get(self, rec_id: str) -> Recommendation:
        for rec in self._items:
            if rec.id == rec_id:
                return rec
        raise KeyError(rec_id)

    def dismiss(self, rec_id: str) -> Optional[Recommendation]:
        for rec in self._items:
            if rec.id == rec_id:
                self._items.remove(rec)
                return rec
        return None

    def clear(self) -> None:
        self._items.clear()
        self._last_evaluated = None


__all__ = [
    "Recommendation",
    "RecommendationBoard",
    "RecommendationPriority",
    "RecommendationType",
    "evaluate_rules",
]
