from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


Point = tuple[float, float]


@dataclass(frozen=True)
class QuadraticSegment:
    control: Point
    end: Point


@dataclass(frozen=True)
class Path:
    start: Point
    segments: tuple[QuadraticSegment, ...] = ()

    def flatten(self, steps_per_segment: int = 12) -> list[Point]:
        if steps_per_segment <= 0:
            raise ValueError("steps_per_segment must be > 0")
        out: list[Point] = [self.start]
        current = self.start
        for seg in self.segments:
            if seg.control == current and seg.end == current:
                continue
            for k in range(1, steps_per_segment + 1):
                out.append(_quad_point(current, seg.control, seg.end, k / steps_per_segment))
            current = seg.end
        return out

    @property
    def end(self) -> Point:
        if not self.segments:
            return self.start
        return self.segments[-1].end


def midpoint_quadratic_path(points: Sequence[Point]) -> Path | None:
    """Smooth a polyline with quadratic segments through consecutive midpoints.

    Each segment uses the preceding sample as its control point and ends halfway
    to the next sample; a final degenerate segment lands on the last sample.
    """

    n = len(points)
    if n == 0:
        return None
    segments: list[QuadraticSegment] = []
    for i in range(1, n):
        prev = points[i - 1]
        curr = points[i]
        mid = ((prev[0] + curr[0]) / 2.0, (prev[1] + curr[1]) / 2.0)
        segments.append(QuadraticSegment(control=prev, end=mid))
    last = points[-1]
    segments.append(QuadraticSegment(control=last, end=last))
    return Path(start=points[0], segments=tuple(segments))


def _quad_point(p0: Point, p1: Point, p2: Point, t: float) -> Point:
    u = 1.0 - t
    x = u * u * p0[0] + 2.0 * u * t * p1[0] + t * t * p2[0]
    y = u * u * p0[1] + 2.0 * u * t * p1[1] + t * t * p2[1]
    return (x, y)
