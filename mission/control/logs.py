"""Mission log entries written by the host around control operations."""
from __future__ import annotations

import random
import string
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional

_ID_ALPHABET = string.digits + string.ascii_lowercase


class LogPriority(str, Enum):
    INFO = "Info"
    WARNING = "Warning"
    CRITICAL = "Critical"


class LogSource(str, Enum):
    ODIN_AI = "ODIN-AI"
    FLIGHT_CONTROLLER = "Flight Controller"
    NAVIGATION = "Navigation"
    HAZARD_DETECTION = "Hazard Detection"


@dataclass(frozen=True)
class MissionLog:
    id: str
    timestamp: str
    source: LogSource
    message: str
    priority: LogPriority

    @classmethod
    def from_dict(cls, data: Dict) -> "MissionLog":
        return cls(
            id=data["id"],
            timestamp=data.get("timestamp", ""),
            source=LogSource(data.get("source", LogSource.FLIGHT_CONTROLLER.value)),
            message=data.get("message", ""),
            priority=LogPriority(data.get("priority", LogPriority.INFO.value)),
        )


class MissionLogBook:
    """Append-only feed of mission log entries, oldest first."""

    def __init__(
        self,
        seed: Optional[List[MissionLog]] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._entries: List[MissionLog] = list(seed or [])
        self._rng = rng or random.Random()
        self._clock = clock

    def __len__(self) -> int:
        return len(self._entries)

    def _new_id(self, now: datetime) -> str:
        millis = int(now.timestamp() * 1000)
        suffix = "".join(self._rng.choice(_ID_ALPHABET) for _ in range(9))
        return f"log-{millis}-{suffix}"

    def add(self, source: LogSource, message: str, priority: LogPriority = LogPriority.INFO) -> MissionLog:
        now = self._clock()
        entry = MissionLog(
            id=self._new_id(now),
            timestamp=now.strftime("%H:%M:%S"),
            source=LogSource(source),
            message=message,
            priority=LogPriority(priority),
        )
        self._entries.append(entry)
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> List[MissionLog]:
        return list(self._entries)

    def latest(self) -> Optional[MissionLog]:
        return self._entries[-1] if self._entries else None

    def filter(
        self,
        priority: Optional[LogPriority] = None,
        source: Optional[LogSource] = None,
    ) -> List[MissionLog]:
        return [
            entry
            for entry in self._entries
            if (priority is None or entry.priority == priority)
            and (source is None or entry.source == source)
        ]


__all__ = ["LogPriority", "LogSource", "MissionLog", "MissionLogBook"]
