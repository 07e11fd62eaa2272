from __future__ import annotations

import numpy as np

from climate_canvas.raster.canvas import RGBA, Clip, blend_region, intersect_clip


def draw_polyline(
    dst: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    color: RGBA,
    width: int = 1,
    *,
    clip: Clip | None = None,
) -> None:
    if xs.size < 2:
        return
    cx0, cy0, cx1, cy1 = intersect_clip(dst, clip)
    if cx1 <= cx0 or cy1 <= cy0:
        return
    # Stamp into one coverage mask so overlapping brush squares do not double-blend.
    mask = np.zeros((cy1 - cy0, cx1 - cx0), dtype=bool)
    radius = max(0, int(width) // 2)
    pts = list(zip(xs.tolist(), ys.tolist(), strict=False))
    for (x0, y0), (x1, y1) in zip(pts, pts[1:]):
        _stamp_segment(mask, int(round(x0)) - cx0, int(round(y0)) - cy0, int(round(x1)) - cx0, int(round(y1)) - cy0, radius)
    if not mask.any():
        return
    blend_region(dst, cx0, cy0, cx1, cy1, color, coverage=mask)


def _stamp_segment(mask: np.ndarray, x0: int, y0: int, x1: int, y1: int, radius: int) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _stamp_square_brush(mask, x0, y0, radius)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _stamp_square_brush(mask: np.ndarray, x: int, y: int, radius: int) -> None:
    h, w = mask.shape
    ya = max(0, y - radius)
    yb = min(h, y + radius + 1)
    xa = max(0, x - radius)
    xb = min(w, x + radius + 1)
    if ya >= yb or xa >= xb:
        return
    mask[ya:yb, xa:xb] = True
