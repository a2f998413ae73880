"""Mission simulation core: state store, stepper, metrics and observers."""

from .engine import SimulationEngine
from .metrics import HazardLevel, LiveMetrics, SystemsStatus, derive_metrics, hazard_adjustment
from .observers import SubscriptionRegistry
from .state import SimulationState, StateSnapshot
from .types import GeoCoordinate, Hazard, HazardType, RiskLevel, Severity, Trajectory, Waypoint

__all__ = [
    "GeoCoordinate",
    "Hazard",
    "HazardLevel",
    "HazardType",
    "LiveMetrics",
    "RiskLevel",
    "Severity",
    "SimulationEngine",
    "SimulationState",
    "StateSnapshot",
    "SubscriptionRegistry",
    "SystemsStatus",
    "Trajectory",
    "Waypoint",
    "derive_metrics",
    "hazard_adjustment",
]
