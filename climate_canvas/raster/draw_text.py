from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from climate_canvas.raster.canvas import RGBA, Clip, blend_region, intersect_clip


TextAlign = Literal["left", "center", "right"]

DEFAULT_FONT_FAMILY = "Inter"
DEFAULT_FONT_SIZE_PX = 12.0
SANS_FONT_FALLBACK_PATTERNS = (
    "inter",
    "helvetica",
    "arial",
    "dejavusans",
    "dejavu sans",
    "liberationsans",
    "freesans",
)


def draw_text(
    dst: np.ndarray,
    x: float,
    y: float,
    text: str,
    color: RGBA,
    *,
    align: TextAlign = "left",
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    clip: Clip | None = None,
) -> None:
    """Draw ``text`` with its alphabetic baseline at ``y``, aligned horizontally on ``x``."""

    if not text:
        return
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    mask = _render_mask(text=text, font=font)
    left, top, _, _ = font.getbbox(text)
    origin_x = x - _align_offset(font, text, align)
    origin_y = y - _ascent(font)
    _blend_mask(dst, int(round(origin_x + left)), int(round(origin_y + top)), mask, color, clip=clip)


def _align_offset(font: ImageFont.FreeTypeFont | ImageFont.ImageFont, text: str, align: TextAlign) -> float:
    if align == "left":
        return 0.0
    getlength = getattr(font, "getlength", None)
    if getlength is not None:
        advance = float(getlength(text))
    else:
        advance = float(font.getbbox(text)[2])
    if align == "center":
        return advance / 2.0
    return advance


def _ascent(font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> float:
    getmetrics = getattr(font, "getmetrics", None)
    if getmetrics is not None:
        ascent, _ = getmetrics()
        return float(ascent)
    return float(font.getbbox("Ag")[3])


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA, *, clip: Clip | None = None) -> None:
    h, w = mask.shape
    if h <= 0 or w <= 0:
        return
    cx0, cy0, cx1, cy1 = intersect_clip(dst, clip)
    x0 = max(cx0, x)
    y0 = max(cy0, y)
    x1 = min(cx1, x + w)
    y1 = min(cy1, y + h)
    if x1 <= x0 or y1 <= y0:
        return
    cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) / 255.0
    if not np.any(cov > 0):
        return
    blend_region(dst, x0, y0, x1, y1, color, coverage=cov)


@lru_cache(maxsize=256)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is None:
        return _default_font(size)
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError:
        return _default_font(size)


def _default_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    try:
        return ImageFont.load_default(size=size)
    except (TypeError, ImportError, OSError):
        # Pillow < 10.1, or a build without FreeType, has no sized default font.
        return ImageFont.load_default()


@lru_cache(maxsize=16)
def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + SANS_FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            if p in stem and "mono" not in stem:
                return path
    return None
