"""Mission catalog loading: trajectories, hazards and seed logs."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Dict, Generic, List, TypeVar

from mission.control.logs import MissionLog
from mission.sim.types import Hazard, Trajectory

T = TypeVar("T")


class ContentError(ValueError):
    """Raised when a catalog entry cannot be used by the simulator."""


class _CatalogDatabase(Generic[T]):
    """Entries keyed by id, kept in file/insertion order."""

    def __init__(self, factory: Callable[[Dict], T]) -> None:
        self._factory = factory
        self.entries: Dict[str, T] = {}

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, entry_id: str) -> bool:
        return entry_id in self.entries

    def _build(self, path: Path, data: Dict) -> T:
        try:
            return self._factory(data)
        except (KeyError, TypeError, ValueError) as exc:
            raise ContentError(f"{path.name}: invalid entry {data.get('id', '?')!r}: {exc}") from exc

    def load_directory(self, directory: Path) -> None:
        if not directory.exists():
            return
        for path in sorted(directory.glob("*.json")):
            try:
                data = json.loads(path.read_text())
            except json.JSONDecodeError:
                continue
            if isinstance(data, dict):
                data = [data]
            for entry in data:
                item = self._build(path, entry)
                self.entries[item.id] = item

    def add(self, item: T) -> None:
        self.entries[item.id] = item

    def get(self, entry_id: str) -> T:
        return self.entries[entry_id]

    def all(self) -> List[T]:
        return list(self.entries.values())


def _trajectory_from_dict(data: Dict) -> Trajectory:
    trajectory = Trajectory.from_dict(data)
    trajectory.validate()
    return trajectory


class TrajectoryDatabase(_CatalogDatabase[Trajectory]):
    def __init__(self) -> None:
        super().__init__(_trajectory_from_dict)


class HazardDatabase(_CatalogDatabase[Hazard]):
    def __init__(self) -> None:
        super().__init__(Hazard.from_dict)


class LogDatabase(_CatalogDatabase[MissionLog]):
    def __init__(self) -> None:
        super().__init__(MissionLog.from_dict)


class ContentManager:
    def __init__(self, root: Path) -> None:
        self.root = root
        self.trajectories = TrajectoryDatabase()
        self.hazards = HazardDatabase()
        self.logs = LogDatabase()

    def load(self) -> None:
        self.trajectories.load_directory(self.root / "data" / "trajectories")
        self.hazards.load_directory(self.root / "data" / "hazards")
        self.logs.load_directory(self.root / "data" / "logs")


def default_assets_root() -> Path:
    return Path(__file__).resolve().parent


__all__ = [
    "ContentError",
    "ContentManager",
    "HazardDatabase",
    "LogDatabase",
    "TrajectoryDatabase",
    "default_assets_root",
]
