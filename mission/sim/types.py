"""Immutable mission inputs: waypoints, trajectories and hazards."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from pygame.math import Vector3


class Severity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.LOW: 0,
    Severity.MEDIUM: 1,
    Severity.HIGH: 2,
    Severity.CRITICAL: 3,
}


class HazardType(str, Enum):
    CME = "CME"
    SOLAR_FLARE = "Solar Flare"
    DEBRIS_CONJUNCTION = "Debris Conjunction"
    RADIATION_STORM = "Radiation Storm"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class Waypoint:
    x: float
    y: float
    z: float
    time: float

    @property
    def position(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)

    @classmethod
    def from_dict(cls, data: Dict) -> "Waypoint":
        return cls(
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            z=float(data.get("z", 0.0)),
            time=float(data.get("time", 0.0)),
        )


@dataclass(frozen=True)
class Trajectory:
    """A fixed mission profile flown by linear interpolation between waypoints."""

    id: str
    name: str
    delta_v: float
    travel_time: float
    radiation_exposure: float
    fuel_consumption: float
    risk: RiskLevel
    points: Tuple[Waypoint, ...]

    def validate(self) -> None:
        """Raise ``ValueError`` if the profile cannot be stepped."""

        if len(self.points) < 2:
            raise ValueError(f"Trajectory '{self.id}' needs at least two waypoints")
        if self.travel_time <= 0:
            raise ValueError(f"Trajectory '{self.id}' has non-positive travel time")

    @classmethod
    def from_dict(cls, data: Dict) -> "Trajectory":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            delta_v=float(data.get("deltaV", 0.0)),
            travel_time=float(data.get("travelTime", 0.0)),
            radiation_exposure=float(data.get("radiationExposure", 0.0)),
            fuel_consumption=float(data.get("fuelConsumption", 0.0)),
            risk=RiskLevel(data.get("risk", "Medium")),
            points=tuple(Waypoint.from_dict(item) for item in data.get("points", [])),
        )


@dataclass(frozen=True)
class GeoCoordinate:
    lat: float
    lon: float


@dataclass(frozen=True)
class Hazard:
    id: str
    severity: Severity
    type: HazardType
    description: str
    timestamp: str = ""
    coordinates: Optional[GeoCoordinate] = None

    @classmethod
    def from_dict(cls, data: Dict) -> "Hazard":
        coords = data.get("coordinates")
        return cls(
            id=data["id"],
            severity=Severity(data["severity"]),
            type=HazardType(data["type"]),
            description=data.get("description", ""),
            timestamp=data.get("timestamp", ""),
            coordinates=(
                GeoCoordinate(float(coords["lat"]), float(coords["lon"]))
                if isinstance(coords, dict)
                else None
            ),
        )


__all__ = [
    "GeoCoordinate",
    "Hazard",
    "HazardType",
    "RiskLevel",
    "Severity",
    "Trajectory",
    "Waypoint",
]
