from __future__ import annotations

import numpy as np

from climate_canvas.raster.canvas import RGBA, Clip, blend_region, intersect_clip


def fill_circle(dst: np.ndarray, cx: float, cy: float, radius: float, color: RGBA, *, clip: Clip | None = None) -> None:
    if radius <= 0:
        return
    region = _circle_region(dst, cx, cy, radius, clip)
    if region is None:
        return
    x0, y0, x1, y1, dist = region
    blend_region(dst, x0, y0, x1, y1, color, coverage=dist <= radius)


def stroke_circle(
    dst: np.ndarray,
    cx: float,
    cy: float,
    radius: float,
    color: RGBA,
    width: float = 1.0,
    *,
    clip: Clip | None = None,
) -> None:
    if radius <= 0 or width <= 0:
        return
    half = width / 2.0
    region = _circle_region(dst, cx, cy, radius + half, clip)
    if region is None:
        return
    x0, y0, x1, y1, dist = region
    ring = np.abs(dist - radius) <= half
    blend_region(dst, x0, y0, x1, y1, color, coverage=ring)


def _circle_region(
    dst: np.ndarray,
    cx: float,
    cy: float,
    radius: float,
    clip: Clip | None,
) -> tuple[int, int, int, int, np.ndarray] | None:
    cx0, cy0, cx1, cy1 = intersect_clip(dst, clip)
    x0 = max(cx0, int(np.floor(cx - radius)))
    x1 = min(cx1, int(np.ceil(cx + radius)) + 1)
    y0 = max(cy0, int(np.floor(cy - radius)))
    y1 = min(cy1, int(np.ceil(cy + radius)) + 1)
    if x1 <= x0 or y1 <= y0:
        return None
    # Sample at pixel centres.
    gx = np.arange(x0, x1, dtype=np.float64) + 0.5 - cx
    gy = np.arange(y0, y1, dtype=np.float64) + 0.5 - cy
    dist = np.sqrt(gx[None, :] ** 2 + gy[:, None] ** 2)
    return (x0, y0, x1, y1, dist)
