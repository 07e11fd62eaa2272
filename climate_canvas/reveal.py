"""Progressive left-to-right reveal of the line chart."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Callable, Literal

from climate_canvas.easing import Easing, clamp01, ease_out_cubic
from climate_canvas.theme import Theme

LOGGER = logging.getLogger(__name__)

DEFAULT_REVEAL_MS = 1800.0

RevealState = Literal["idle", "running", "done"]
DrawCallback = Callable[[str, Theme, float], None]


@dataclass(eq=False)
class RevealSession:
    """One reveal run for a dataset/theme pair; inert once superseded."""

    animator: "RevealAnimator" = field(repr=False)
    key: str
    theme: Theme
    generation: int
    started_at: float | None = None
    progress: float = 0.0
    finished: bool = False

    @property
    def current(self) -> bool:
        return self.animator.session is self

    def tick(self, now_ms: float) -> bool:
        self.animator.advance(self, now_ms)
        return self.current and not self.finished


@dataclass
class RevealAnimator:
    """State machine ``idle -> running -> done`` around a chart draw callback.

    ``draw(key, theme, progress)`` is called once per advanced frame with eased
    progress in [0, 1]. Starting a new session supersedes the previous one.
    """

    draw: DrawCallback
    duration_ms: float = DEFAULT_REVEAL_MS
    easing: Easing = ease_out_cubic
    _session: RevealSession | None = field(default=None, init=False, repr=False)
    _generation: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.duration_ms <= 0:
            raise ValueError("duration_ms must be > 0")

    @property
    def session(self) -> RevealSession | None:
        return self._session

    @property
    def state(self) -> RevealState:
        if self._session is None:
            return "idle"
        return "done" if self._session.finished else "running"

    @property
    def progress(self) -> float:
        return 0.0 if self._session is None else self._session.progress

    def start(self, key: str, theme: Theme) -> RevealSession:
        previous = self._session
        self._generation += 1
        self._session = RevealSession(animator=self, key=key, theme=theme, generation=self._generation)
        if previous is not None and not previous.finished:
            LOGGER.debug("reveal %d superseded by %d (%s/%s)", previous.generation, self._generation, key, theme)
        else:
            LOGGER.debug("reveal %d started (%s/%s)", self._generation, key, theme)
        return self._session

    def cancel(self) -> None:
        self._session = None

    def tick(self, now_ms: float) -> bool:
        if self._session is None:
            return False
        return self._session.tick(now_ms)

    def advance(self, session: RevealSession, now_ms: float) -> float | None:
        """Draw ``session`` at ``now_ms``; ``None`` when it is stale or already finished."""

        if session is not self._session or session.finished:
            return None
        if session.started_at is None:
            session.started_at = now_ms
        t = clamp01((now_ms - session.started_at) / self.duration_ms)
        session.progress = max(session.progress, self.easing(t))
        self.draw(session.key, session.theme, session.progress)
        if t >= 1.0:
            session.progress = 1.0
            session.finished = True
        return session.progress
