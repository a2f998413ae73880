"""Runtime settings loaded from settings.json."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

DEFAULT_SETTINGS: Dict[str, Any] = {
    "maxFps": 60,
    "initialTrajectory": "baseline",
    "timeScale": 1.0,
    "assetsRoot": "mission/assets",
    "historyPoints": 50,
    "stopOnComplete": True,
}


@dataclass
class SimulationSettings:
    """Host-side knobs for running a mission."""

    max_fps: int = DEFAULT_SETTINGS["maxFps"]
    initial_trajectory: str = DEFAULT_SETTINGS["initialTrajectory"]
    time_scale: float = DEFAULT_SETTINGS["timeScale"]
    assets_root: Path = Path(DEFAULT_SETTINGS["assetsRoot"])
    history_points: int = DEFAULT_SETTINGS["historyPoints"]
    stop_on_complete: bool = DEFAULT_SETTINGS["stopOnComplete"]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationSettings":
        merged = DEFAULT_SETTINGS.copy()
        merged.update({k: v for k, v in data.items() if k in DEFAULT_SETTINGS})
        return cls(
            max_fps=max(1, int(merged["maxFps"])),
            initial_trajectory=str(merged["initialTrajectory"]),
            time_scale=float(merged["timeScale"]),
            assets_root=Path(merged["assetsRoot"]),
            history_points=max(1, int(merged["historyPoints"])),
            stop_on_complete=bool(merged["stopOnComplete"]),
        )

    @classmethod
    def load(cls, path: Path) -> "SimulationSettings":
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError:
            return cls()
        if not isinstance(data, dict):
            return cls()
        return cls.from_dict(data)


__all__ = ["DEFAULT_SETTINGS", "SimulationSettings"]
