from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from pathlib import Path

import numpy as np
from PIL import Image

from climate_canvas.formatting import round_half_up
from climate_canvas.raster.canvas import new_canvas

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewportState:
    backing_width: int
    backing_height: int
    device_pixel_ratio: float
    logical_width: float
    logical_height: float


@dataclass
class DrawingSurface:
    """A canvas element: host-managed logical (CSS) size plus an RGBA backing store.

    ``device_pixel_ratio`` mirrors what the host reports (``None`` when it is
    unavailable); ``ratio_override`` pins the ratio regardless of the host.
    """

    client_width: float
    client_height: float
    device_pixel_ratio: float | None = None
    ratio_override: float | None = None
    name: str = "canvas"
    _buffer: np.ndarray = field(init=False, repr=False)
    _viewport: ViewportState | None = field(default=None, init=False, repr=False)
    _ratio_warned: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.client_width < 0 or self.client_height < 0:
            raise ValueError("client_width/client_height must be >= 0")
        self._buffer = new_canvas(0, 0)
        fit_to_display(self)

    @property
    def viewport(self) -> ViewportState:
        assert self._viewport is not None
        return self._viewport

    @property
    def scale(self) -> float:
        return self.viewport.device_pixel_ratio

    @property
    def buffer(self) -> np.ndarray:
        return self._buffer

    def set_client_size(self, width: float, height: float) -> None:
        """Record a new logical size; callers follow up with :func:`fit_to_display`."""

        if width < 0 or height < 0:
            raise ValueError("width/height must be >= 0")
        self.client_width = float(width)
        self.client_height = float(height)

    def to_rgba(self) -> np.ndarray:
        return self._buffer.copy()

    def to_image(self) -> Image.Image:
        if self._buffer.shape[0] == 0 or self._buffer.shape[1] == 0:
            raise ValueError(f"surface `{self.name}` has an empty backing store")
        return Image.fromarray(np.ascontiguousarray(self._buffer))

    def save_png(self, path: Path) -> None:
        self.to_image().save(path, format="PNG")


def resolve_device_pixel_ratio(reported: float | None, override: float | None = None) -> float:
    for candidate in (override, reported):
        if candidate is None:
            continue
        try:
            value = float(candidate)
        except (TypeError, ValueError):
            continue
        if math.isfinite(value) and value > 0:
            return value
    return 1.0


def fit_to_display(surface: DrawingSurface) -> ViewportState:
    """Size the backing store to ``round(logical * ratio)`` and install the ratio as draw scale.

    Calling it again with an unchanged logical size and ratio keeps the current
    backing store (and its pixels) untouched.
    """

    ratio = resolve_device_pixel_ratio(surface.device_pixel_ratio, surface.ratio_override)
    invalid = surface.device_pixel_ratio is not None and ratio != surface.device_pixel_ratio
    if invalid and surface.ratio_override is None and not surface._ratio_warned:
        surface._ratio_warned = True
        LOGGER.warning("surface `%s`: invalid device pixel ratio %r, using 1", surface.name, surface.device_pixel_ratio)
    state = ViewportState(
        backing_width=max(0, round_half_up(surface.client_width * ratio)),
        backing_height=max(0, round_half_up(surface.client_height * ratio)),
        device_pixel_ratio=ratio,
        logical_width=float(surface.client_width),
        logical_height=float(surface.client_height),
    )
    if state == surface._viewport:
        return state
    previous = surface._viewport
    surface._buffer = new_canvas(state.backing_width, state.backing_height)
    surface._viewport = state
    if previous is not None:
        LOGGER.debug(
            "surface `%s` resized: %dx%d -> %dx%d (ratio %.3g)",
            surface.name,
            previous.backing_width,
            previous.backing_height,
            state.backing_width,
            state.backing_height,
            ratio,
        )
    return state
