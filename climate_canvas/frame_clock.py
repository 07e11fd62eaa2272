from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Iterator, Protocol

LOGGER = logging.getLogger(__name__)


class Animation(Protocol):
    def tick(self, now_ms: float) -> bool:
        """Advance one frame; return ``False`` once the animation has finished."""


@dataclass
class FrameClock:
    """Frame cadence in milliseconds, as handed to per-frame callbacks."""

    fps: float = 60.0

    def __post_init__(self) -> None:
        if self.fps <= 0:
            raise ValueError("fps must be > 0")

    @property
    def frame_ms(self) -> float:
        return 1000.0 / float(self.fps)

    def frame_times(self, duration_ms: float, start_ms: float = 0.0) -> Iterator[float]:
        """Timestamps from ``start_ms`` through ``start_ms + duration_ms`` inclusive."""

        if duration_ms < 0:
            raise ValueError("duration_ms must be >= 0")
        frames = int(duration_ms // self.frame_ms)
        for i in range(frames + 1):
            yield start_ms + i * self.frame_ms
        if frames * self.frame_ms < duration_ms:
            yield start_ms + duration_ms


@dataclass
class AnimationLoop:
    """Single-threaded stand-in for the host's animation-frame queue.

    ``step`` ticks every scheduled animation in scheduling order, so when two
    animations write the same target the most recently scheduled one wins.
    """

    _active: list[Animation] = field(default_factory=list)
    frames: int = 0

    def schedule(self, animation: Animation) -> Animation:
        self._active.append(animation)
        return animation

    def step(self, now_ms: float) -> int:
        self.frames += 1
        current = list(self._active)
        finished = [a for a in current if not a.tick(now_ms)]
        if finished:
            self._active = [a for a in self._active if all(a is not f for f in finished)]
            LOGGER.debug("frame %d: %d animation(s) finished", self.frames, len(finished))
        return len(self._active)

    def run_until_idle(self, clock: FrameClock, start_ms: float = 0.0, max_frames: int = 10_000) -> float:
        """Step at ``clock`` cadence until nothing is scheduled; returns the last timestamp."""

        now = start_ms
        for _ in range(max_frames):
            if not self._active:
                return now
            self.step(now)
            now += clock.frame_ms
        raise RuntimeError(f"animations still active after {max_frames} frames")

    @property
    def idle(self) -> bool:
        return not self._active

    def __len__(self) -> int:
        return len(self._active)
