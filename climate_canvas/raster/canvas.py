from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]
# Pixel clip window (x0, y0, x1, y1), end-exclusive, in backing-store pixels.
Clip = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 0)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    fill_canvas(canvas, color)
    return canvas


def fill_canvas(dst: np.ndarray, color: RGBA) -> None:
    dst[:, :, 0] = color[0]
    dst[:, :, 1] = color[1]
    dst[:, :, 2] = color[2]
    dst[:, :, 3] = color[3]


def intersect_clip(dst: np.ndarray, clip: Clip | None) -> Clip:
    h, w = int(dst.shape[0]), int(dst.shape[1])
    if clip is None:
        return (0, 0, w, h)
    x0, y0, x1, y1 = clip
    return (max(0, x0), max(0, y0), min(w, x1), min(h, y1))


def blend_region(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, coverage: np.ndarray | None = None) -> None:
    """Source-over blend of a flat colour into ``dst[y0:y1, x0:x1]``.

    ``coverage`` is an optional float mask in [0, 1] shaped like the region.
    """

    if x1 <= x0 or y1 <= y0:
        return
    a = color[3] / 255.0
    if a <= 0.0:
        return
    patch = dst[y0:y1, x0:x1]
    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    if coverage is None:
        src_alpha = np.full(patch.shape[:2], a, dtype=np.float32)
    else:
        src_alpha = coverage.astype(np.float32) * a
    _composite(patch, src_rgb, src_alpha)


def blend_rows(dst: np.ndarray, x0: int, x1: int, y0: int, colors: np.ndarray, mask: np.ndarray | None = None) -> None:
    """Blend one colour per row (``colors`` is ``(rows, 4)`` float RGBA) into a column span."""

    rows = colors.shape[0]
    if rows == 0 or x1 <= x0:
        return
    patch = dst[y0 : y0 + rows, x0:x1]
    src_rgb = colors[:, None, :3].astype(np.float32)
    src_alpha = np.broadcast_to(colors[:, None, 3].astype(np.float32) / 255.0, patch.shape[:2]).copy()
    if mask is not None:
        src_alpha *= mask.astype(np.float32)
    _composite(patch, src_rgb, src_alpha)


def _composite(patch: np.ndarray, src_rgb: np.ndarray, src_alpha: np.ndarray) -> None:
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    out_rgb = out_rgb_num / safe_alpha[:, :, None]
    patch[:, :, :3] = np.clip(np.rint(out_rgb), 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(np.rint(out_alpha * 255.0), 0, 255).astype(np.uint8)


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, clip: Clip | None = None) -> None:
    cx0, cy0, cx1, cy1 = intersect_clip(dst, clip)
    left = max(cx0, min(x0, x1))
    right = min(cx1, max(x0, x1))
    top = max(cy0, min(y0, y1))
    bottom = min(cy1, max(y0, y1))
    blend_region(dst, left, top, right, bottom, color)


def stroke_rect(
    dst: np.ndarray,
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    color: RGBA,
    width: float = 1.0,
    clip: Clip | None = None,
) -> None:
    """Outline centred on the rectangle edges, blended once per pixel."""

    if width <= 0:
        return
    half = width / 2.0
    left, right = min(x0, x1), max(x0, x1)
    top, bottom = min(y0, y1), max(y0, y1)
    cx0, cy0, cx1, cy1 = intersect_clip(dst, clip)
    ox0 = max(cx0, int(round(left - half)))
    oy0 = max(cy0, int(round(top - half)))
    ox1 = min(cx1, int(round(right + half)))
    oy1 = min(cy1, int(round(bottom + half)))
    if ox1 <= ox0 or oy1 <= oy0:
        return
    cols = np.arange(ox0, ox1, dtype=np.float64) + 0.5
    rows = np.arange(oy0, oy1, dtype=np.float64) + 0.5
    inner_x = (cols > left + half) & (cols < right - half)
    inner_y = (rows > top + half) & (rows < bottom - half)
    ring = ~(inner_y[:, None] & inner_x[None, :])
    blend_region(dst, ox0, oy0, ox1, oy1, color, coverage=ring)
