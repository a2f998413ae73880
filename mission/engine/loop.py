"""Frame scheduling primitives that drive the simulation stepper."""
from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

import pygame

FrameCallback = Callable[[float], None]


class FrameScheduler(ABC):
    """Base for schedulers delivering one-shot frame callbacks.

    Timestamps are monotonic seconds from ``now()``, which subclasses supply.

    Callbacks requested while a frame is being dispatched run on the next
    frame, never the current one.
    """

    def __init__(self) -> None:
        self._pending: Dict[int, FrameCallback] = {}
        self._next_handle = 1
        self._frame = 0

    @property
    def frame(self) -> int:
        return self._frame

    @property
    def pending(self) -> int:
        return len(self._pending)

    @abstractmethod
    def now(self) -> float:
        """Current scheduler time in seconds."""

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: Optional[int]) -> None:
        if handle is None:
            return
        self._pending.pop(handle, None)

    def dispatch(self, timestamp: float) -> int:
        """Run every callback pending at call time and return how many ran."""

        self._frame += 1
        batch = list(self._pending.items())
        self._pending.clear()
        ran = 0
        for _, callback in batch:
            callback(timestamp)
            ran += 1
        return ran


class ManualFrameScheduler(FrameScheduler):
    """Scheduler on virtual time, advanced explicitly by the caller."""

    def __init__(self, start: float = 0.0) -> None:
        super().__init__()
        self._clock = start

    def now(self) -> float:
        return self._clock

    def advance(self, seconds: float) -> int:
        if seconds < 0:
            raise ValueError("Virtual time cannot run backwards")
        self._clock += seconds
        return self.dispatch(self._clock)

    def run_for(self, seconds: float, frame_dt: float = 1.0 / 60.0) -> int:
        """Advance in ``frame_dt`` steps until ``seconds`` elapse or nothing is pending."""

        if frame_dt <= 0:
            raise ValueError("frame_dt must be positive")
        target = self._clock + seconds
        frames = 0
        while self._clock < target and self._pending:
            # The last frame lands exactly on the target time.
            self._clock = min(self._clock + frame_dt, target)
            self.dispatch(self._clock)
            frames += 1
        return frames


class RealtimeFrameLoop(FrameScheduler):
    """Wall-clock scheduler paced by a pygame clock."""

    def __init__(
        self,
        max_fps: int = 60,
        on_frame: Optional[Callable[[float], None]] = None,
        stop_when_idle: bool = True,
    ) -> None:
        super().__init__()
        self.max_fps = max_fps
        self.on_frame = on_frame
        self.stop_when_idle = stop_when_idle
        self._clock = pygame.time.Clock()
        self._running = False

    def now(self) -> float:
        return time.perf_counter()

    def stop(self) -> None:
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def run(self) -> None:
        self._running = True
        while self._running:
            if self.stop_when_idle and not self._pending:
                break
            self.dispatch(self.now())
            if self.on_frame:
                self.on_frame(self.now())
            self._clock.tick(self.max_fps)
        self._running = False


__all__ = [
    "FrameCallback",
    "FrameScheduler",
    "ManualFrameScheduler",
    "RealtimeFrameLoop",
]
