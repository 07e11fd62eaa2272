from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence

from climate_canvas.formatting import round_half_up
from climate_canvas.tables import Dataset


@dataclass(frozen=True)
class Margins:
    left: float
    right: float
    top: float
    bottom: float


CHART_MARGINS = Margins(left=40.0, right=10.0, top=20.0, bottom=30.0)
# The pointer inverse divides by ``width - 60`` rather than the plot width
# (``width - left - right``); kept so hover lookups land where they always have.
TOOLTIP_SPAN_INSET = 60.0


@dataclass(frozen=True)
class PlotRect:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass(frozen=True)
class DataLimits:
    vmin: float
    vmax: float

    @property
    def span(self) -> float:
        return self.vmax - self.vmin


@dataclass(frozen=True)
class LayoutPoint:
    x: float
    y: float
    value: float
    label: str


def plot_rect(width: float, height: float, margins: Margins = CHART_MARGINS) -> PlotRect:
    return PlotRect(
        left=margins.left,
        top=margins.top,
        width=width - margins.left - margins.right,
        height=height - margins.top - margins.bottom,
    )


def anchored_limits(values: Sequence[float]) -> DataLimits:
    """Range anchored to the first and last sample, not the global extrema."""

    if len(values) < 2:
        raise ValueError("at least two values are required")
    return DataLimits(vmin=float(values[0]), vmax=float(values[-1]))


def normalized(value: float, limits: DataLimits) -> float:
    span = limits.span
    if span == 0:
        return 0.5
    return (float(value) - limits.vmin) / span


def layout_points(dataset: Dataset, rect: PlotRect) -> tuple[LayoutPoint, ...]:
    limits = anchored_limits(dataset.values)
    n = len(dataset)
    points: list[LayoutPoint] = []
    for i, (label, value) in enumerate(zip(dataset.labels, dataset.values, strict=True)):
        t = i / (n - 1)
        x = rect.left + t * rect.width
        y = rect.top + (1.0 - normalized(value, limits)) * rect.height
        points.append(LayoutPoint(x=x, y=y, value=float(value), label=label))
    return tuple(points)


def gridline_ys(rect: PlotRect, divisions: int) -> list[float]:
    if divisions <= 0:
        raise ValueError("divisions must be > 0")
    return [rect.top + i * rect.height / divisions for i in range(divisions + 1)]


def tick_values(limits: DataLimits, divisions: int) -> list[float]:
    """Values for the gridlines from top to bottom, interpolated between the anchors."""

    if divisions <= 0:
        raise ValueError("divisions must be > 0")
    return [limits.vmin + (1.0 - i / divisions) * limits.span for i in range(divisions + 1)]


def label_stride(n: int, max_labels: int = 6) -> int:
    if max_labels <= 0:
        raise ValueError("max_labels must be > 0")
    return max(1, math.ceil(n / max_labels))


def tooltip_index(x: float, width: float, n: int, margins: Margins = CHART_MARGINS) -> int:
    """Nearest sample index for a pointer x-coordinate, clamped to ``[0, n - 1]``."""

    if n <= 0:
        raise ValueError("n must be > 0")
    span = width - TOOLTIP_SPAN_INSET
    if span <= 0:
        return 0
    idx = round_half_up(((x - margins.left) / span) * (n - 1))
    return max(0, min(n - 1, idx))
