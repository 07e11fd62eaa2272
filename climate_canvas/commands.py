"""Draw commands in logical (CSS) pixels, produced by scenes and executed by a raster context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from climate_canvas.path import Path, Point


RGBA = tuple[int, int, int, int]
TextAlign = Literal["left", "center", "right"]


@dataclass(frozen=True)
class LinearGradient:
    """Vertical gradient from ``y0`` to ``y1`` (logical pixels)."""

    y0: float
    y1: float
    stops: tuple[tuple[float, RGBA], ...]


Paint = Union[RGBA, LinearGradient]


@dataclass(frozen=True)
class Clear:
    color: RGBA


@dataclass(frozen=True)
class FillRect:
    x: float
    y: float
    w: float
    h: float
    paint: Paint


@dataclass(frozen=True)
class StrokeRect:
    x: float
    y: float
    w: float
    h: float
    color: RGBA
    line_width: float = 1.0


@dataclass(frozen=True)
class StrokeLine:
    points: tuple[Point, ...]
    color: RGBA
    line_width: float = 1.0


@dataclass(frozen=True)
class StrokePath:
    path: Path
    color: RGBA
    line_width: float = 1.0


@dataclass(frozen=True)
class FillPathArea:
    """Fill between ``path`` and the horizontal line ``y = baseline``."""

    path: Path
    baseline: float
    paint: Paint


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    radius: float
    fill: RGBA
    outline: RGBA | None = None
    outline_width: float = 1.0


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    color: RGBA
    font_size_px: float = 12.0
    align: TextAlign = "left"


@dataclass(frozen=True)
class PushClip:
    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True)
class PopClip:
    pass


DrawCommand = Union[Clear, FillRect, StrokeRect, StrokeLine, StrokePath, FillPathArea, Circle, Text, PushClip, PopClip]
