"""Count-up animation for numbers shown in page text elements."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Literal, Protocol

from climate_canvas.easing import Easing, clamp01, ease_in_out_cubic, lerp
from climate_canvas.formatting import has_fraction, parse_displayed, round_half_up, to_fixed
from climate_canvas.frame_clock import AnimationLoop

LOGGER = logging.getLogger(__name__)

DEFAULT_DURATION_MS = 1600.0

AnimationState = Literal["pending", "running", "done"]


class TextSink(Protocol):
    def read_text(self, element_id: str) -> str | None: ...

    def write_text(self, element_id: str, text: str) -> None: ...

    def set_visible(self, element_id: str, visible: bool) -> None: ...


@dataclass
class MemoryTextSink:
    """Text elements held in a dict; records every write in order."""

    texts: dict[str, str] = field(default_factory=dict)
    visible: dict[str, bool] = field(default_factory=dict)
    writes: list[tuple[str, str]] = field(default_factory=list)

    def read_text(self, element_id: str) -> str | None:
        return self.texts.get(element_id)

    def write_text(self, element_id: str, text: str) -> None:
        self.texts[element_id] = text
        self.writes.append((element_id, text))

    def set_visible(self, element_id: str, visible: bool) -> None:
        self.visible[element_id] = bool(visible)


def format_display(value: float, fractional: bool) -> str:
    return to_fixed(value, 1) if fractional else str(round_half_up(value))


@dataclass
class ValueAnimation:
    sink: TextSink
    element_id: str
    start: float
    end: float
    duration_ms: float
    fractional: bool
    easing: Easing = ease_in_out_cubic
    started_at: float | None = None
    state: AnimationState = "pending"

    def __post_init__(self) -> None:
        if self.duration_ms <= 0:
            raise ValueError("duration_ms must be > 0")

    def value_at(self, now_ms: float) -> float:
        if self.started_at is None:
            return self.start
        t = clamp01((now_ms - self.started_at) / self.duration_ms)
        return lerp(self.start, self.end, self.easing(t))

    def tick(self, now_ms: float) -> bool:
        if self.state == "done":
            return False
        if self.started_at is None:
            self.started_at = now_ms
        self.state = "running"
        t = clamp01((now_ms - self.started_at) / self.duration_ms)
        self.sink.write_text(self.element_id, format_display(self.value_at(now_ms), self.fractional))
        if t >= 1.0:
            self.state = "done"
            return False
        return True


@dataclass
class ValueAnimator:
    """Schedules :class:`ValueAnimation` runs on a shared :class:`AnimationLoop`.

    Animations on the same element are not coordinated; every one of them
    writes each frame and the most recently scheduled write lands last.
    """

    loop: AnimationLoop
    sink: TextSink
    easing: Easing = ease_in_out_cubic

    def animate(
        self,
        element_id: str,
        target: str | float,
        duration_ms: float = DEFAULT_DURATION_MS,
        *,
        current: float | None = None,
        now_ms: float | None = None,
    ) -> ValueAnimation:
        """Animate ``element_id`` from its displayed number (or ``current``) to ``target``.

        A target whose text has a decimal point renders with one decimal,
        anything else as a rounded integer. ``now_ms`` pins the start time;
        otherwise the first frame starts the clock.
        """

        start = parse_displayed(self.sink.read_text(element_id)) if current is None else float(current)
        end = parse_displayed(target) if isinstance(target, str) else float(target)
        animation = ValueAnimation(
            sink=self.sink,
            element_id=element_id,
            start=start,
            end=end,
            duration_ms=float(duration_ms),
            fractional=has_fraction(target),
            easing=self.easing,
            started_at=now_ms,
        )
        LOGGER.debug("animating `%s`: %s -> %s over %.0fms", element_id, start, end, duration_ms)
        self.loop.schedule(animation)
        return animation
