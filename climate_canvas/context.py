from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Iterable

import numpy as np

from climate_canvas.commands import (
    Circle,
    Clear,
    DrawCommand,
    FillPathArea,
    FillRect,
    LinearGradient,
    Paint,
    PopClip,
    PushClip,
    StrokeLine,
    StrokePath,
    StrokeRect,
    Text,
)
from climate_canvas.path import Point
from climate_canvas.raster import (
    VerticalGradient,
    draw_polyline,
    draw_text,
    fill_canvas,
    fill_circle,
    fill_polygon,
    fill_rect,
    fill_rect_gradient,
    stroke_circle,
    stroke_rect,
)
from climate_canvas.raster.canvas import Clip
from climate_canvas.raster.draw_text import DEFAULT_FONT_FAMILY
from climate_canvas.viewport import DrawingSurface

CURVE_STEPS_PER_SEGMENT = 12


@dataclass
class RasterContext:
    """Executes draw commands on a surface, scaling logical coordinates by its pixel ratio."""

    surface: DrawingSurface
    font_family: str = DEFAULT_FONT_FAMILY
    _clips: list[Clip] = field(default_factory=list)

    @property
    def clip(self) -> Clip | None:
        return self._clips[-1] if self._clips else None

    def execute(self, commands: Iterable[DrawCommand]) -> None:
        """Run one full draw pass; the clip stack never leaks out of a pass."""

        self._clips.clear()
        try:
            for command in commands:
                self._run(command)
        finally:
            self._clips.clear()

    def _run(self, command: DrawCommand) -> None:
        dst = self.surface.buffer
        s = self.surface.scale
        if isinstance(command, Clear):
            fill_canvas(dst, command.color)
        elif isinstance(command, FillRect):
            x0, y0 = _px(command.x * s), _px(command.y * s)
            x1, y1 = _px((command.x + command.w) * s), _px((command.y + command.h) * s)
            if isinstance(command.paint, LinearGradient):
                fill_rect_gradient(dst, x0, y0, x1, y1, self._gradient(command.paint), clip=self.clip)
            else:
                fill_rect(dst, x0, y0, x1, y1, command.paint, clip=self.clip)
        elif isinstance(command, StrokeRect):
            stroke_rect(
                dst,
                command.x * s,
                command.y * s,
                (command.x + command.w) * s,
                (command.y + command.h) * s,
                command.color,
                width=command.line_width * s,
                clip=self.clip,
            )
        elif isinstance(command, StrokeLine):
            self._stroke_points(command.points, command.color, command.line_width)
        elif isinstance(command, StrokePath):
            self._stroke_points(command.path.flatten(CURVE_STEPS_PER_SEGMENT), command.color, command.line_width)
        elif isinstance(command, FillPathArea):
            pts = command.path.flatten(CURVE_STEPS_PER_SEGMENT)
            pts = pts + [(pts[-1][0], command.baseline), (pts[0][0], command.baseline)]
            xs = np.asarray([p[0] for p in pts], dtype=np.float64) * s
            ys = np.asarray([p[1] for p in pts], dtype=np.float64) * s
            fill_polygon(dst, xs, ys, self._paint(command.paint), clip=self.clip)
        elif isinstance(command, Circle):
            fill_circle(dst, command.cx * s, command.cy * s, command.radius * s, command.fill, clip=self.clip)
            if command.outline is not None:
                stroke_circle(
                    dst,
                    command.cx * s,
                    command.cy * s,
                    command.radius * s,
                    command.outline,
                    width=command.outline_width * s,
                    clip=self.clip,
                )
        elif isinstance(command, Text):
            draw_text(
                dst,
                command.x * s,
                command.y * s,
                command.text,
                command.color,
                align=command.align,
                font_family=self.font_family,
                font_size_px=command.font_size_px * s,
                clip=self.clip,
            )
        elif isinstance(command, PushClip):
            rect = (
                _px(command.x * s),
                _px(command.y * s),
                _px((command.x + max(0.0, command.w)) * s),
                _px((command.y + max(0.0, command.h)) * s),
            )
            self._clips.append(_intersect(self.clip, rect))
        elif isinstance(command, PopClip):
            if not self._clips:
                raise RuntimeError("clip stack underflow")
            self._clips.pop()
        else:
            raise TypeError(f"unsupported draw command: {type(command).__name__}")

    def _stroke_points(self, points: Iterable[Point], color: tuple[int, int, int, int], line_width: float) -> None:
        pts = list(points)
        if len(pts) < 2:
            return
        s = self.surface.scale
        xs = np.asarray([p[0] for p in pts], dtype=np.float64) * s
        ys = np.asarray([p[1] for p in pts], dtype=np.float64) * s
        width = max(1, int(round(line_width * s)))
        draw_polyline(self.surface.buffer, xs, ys, color, width=width, clip=self.clip)

    def _gradient(self, gradient: LinearGradient) -> VerticalGradient:
        s = self.surface.scale
        return VerticalGradient(y0=gradient.y0 * s, y1=gradient.y1 * s, stops=gradient.stops)

    def _paint(self, paint: Paint) -> tuple[int, int, int, int] | VerticalGradient:
        if isinstance(paint, LinearGradient):
            return self._gradient(paint)
        return paint


def _px(value: float) -> int:
    return int(math.floor(value + 0.5))


def _intersect(outer: Clip | None, rect: Clip) -> Clip:
    if outer is None:
        return rect
    x0 = max(outer[0], rect[0])
    y0 = max(outer[1], rect[1])
    x1 = max(x0, min(outer[2], rect[2]))
    y1 = max(y0, min(outer[3], rect[3]))
    return (x0, y0, x1, y1)
