from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np

from climate_canvas.raster.canvas import RGBA, Clip, blend_rows, intersect_clip


@dataclass(frozen=True)
class VerticalGradient:
    """Linear gradient along y, in backing-store pixels."""

    y0: float
    y1: float
    stops: tuple[tuple[float, RGBA], ...]

    def __post_init__(self) -> None:
        if len(self.stops) < 2:
            raise ValueError("gradient needs at least two stops")

    def colors_for_rows(self, top: int, bottom: int) -> np.ndarray:
        rows = np.arange(top, bottom, dtype=np.float64) + 0.5
        span = self.y1 - self.y0
        if abs(span) < 1e-12:
            t = np.where(rows < self.y0, 0.0, 1.0)
        else:
            t = np.clip((rows - self.y0) / span, 0.0, 1.0)
        offsets = np.asarray([s[0] for s in self.stops], dtype=np.float64)
        colors = np.asarray([s[1] for s in self.stops], dtype=np.float64)
        out = np.empty((rows.size, 4), dtype=np.float64)
        for channel in range(4):
            out[:, channel] = np.interp(t, offsets, colors[:, channel])
        return out


def fill_rect_gradient(
    dst: np.ndarray,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    gradient: VerticalGradient,
    *,
    clip: Clip | None = None,
) -> None:
    cx0, cy0, cx1, cy1 = intersect_clip(dst, clip)
    left = max(cx0, min(x0, x1))
    right = min(cx1, max(x0, x1))
    top = max(cy0, min(y0, y1))
    bottom = min(cy1, max(y0, y1))
    if right <= left or bottom <= top:
        return
    blend_rows(dst, left, right, top, gradient.colors_for_rows(top, bottom))


def fill_polygon(
    dst: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    paint: RGBA | VerticalGradient,
    *,
    clip: Clip | None = None,
) -> None:
    """Even-odd scanline fill sampled at pixel centres."""

    if xs.size < 3:
        return
    cx0, cy0, cx1, cy1 = intersect_clip(dst, clip)
    top = max(cy0, int(math.floor(float(np.min(ys)))))
    bottom = min(cy1, int(math.ceil(float(np.max(ys)))) + 1)
    if cx1 <= cx0 or bottom <= top:
        return

    mask = np.zeros((bottom - top, cx1 - cx0), dtype=bool)
    ax = xs.astype(np.float64)
    ay = ys.astype(np.float64)
    bx = np.roll(ax, -1)
    by = np.roll(ay, -1)
    for row in range(top, bottom):
        yc = row + 0.5
        crossing = ((ay <= yc) & (by > yc)) | ((by <= yc) & (ay > yc))
        if not np.any(crossing):
            continue
        x_hits = ax[crossing] + (yc - ay[crossing]) * (bx[crossing] - ax[crossing]) / (by[crossing] - ay[crossing])
        x_hits.sort()
        for xa, xb in zip(x_hits[0::2], x_hits[1::2], strict=False):
            start = max(cx0, int(math.ceil(xa - 0.5)))
            stop = min(cx1, int(math.ceil(xb - 0.5)))
            if stop > start:
                mask[row - top, start - cx0 : stop - cx0] = True

    if not mask.any():
        return
    if isinstance(paint, VerticalGradient):
        colors = paint.colors_for_rows(top, bottom)
    else:
        colors = np.tile(np.asarray(paint, dtype=np.float64), (bottom - top, 1))
    blend_rows(dst, cx0, cx1, top, colors, mask=mask)
