"""Historical line chart with a progressive (clipped) reveal and a hover tooltip."""

from __future__ import annotations

from types import MappingProxyType

from climate_canvas.commands import (
    Circle,
    Clear,
    DrawCommand,
    FillPathArea,
    LinearGradient,
    PopClip,
    PushClip,
    StrokeLine,
    StrokePath,
    Text,
)
from climate_canvas.easing import clamp01
from climate_canvas.formatting import number_text, round_half_up, to_fixed
from climate_canvas.path import midpoint_quadratic_path
from climate_canvas.scales import (
    CHART_MARGINS,
    Margins,
    PlotRect,
    anchored_limits,
    gridline_ys,
    label_stride,
    layout_points,
    plot_rect,
    tick_values,
    tooltip_index,
)
from climate_canvas.scenes.base import SceneOutput
from climate_canvas.tables import Dataset
from climate_canvas.theme import Theme, ThemePalette, palette_for

ANNOTATION_ID = "chartAnnotation"
ANNOTATED_DATASETS = frozenset({"temp"})
Y_DIVISIONS = 5
MAX_X_LABELS = 6
FONT_SIZE_PX = 12.0
LINE_WIDTH = 3.0
MARKER_RADIUS = 3.6
X_LABEL_BASELINE_INSET = 8.0
Y_LABEL_GAP = 8.0
Y_LABEL_BASELINE_SHIFT = 4.0


def render_line_chart(
    dataset: Dataset,
    progress: float,
    theme: Theme,
    width: float,
    height: float,
    *,
    palette: ThemePalette | None = None,
    margins: Margins = CHART_MARGINS,
) -> SceneOutput:
    palette = palette or palette_for(theme)
    rect = plot_rect(width, height, margins)
    text_color = palette.rgba("chart_text")
    grid_color = palette.rgba("chart_grid")

    commands: list[DrawCommand] = [Clear(palette.rgba("background"))]
    grid_ys = gridline_ys(rect, Y_DIVISIONS)
    for y in grid_ys:
        commands.append(StrokeLine(points=((rect.left, y), (width - margins.right, y)), color=grid_color, line_width=1.0))

    points = layout_points(dataset, rect)

    stride = label_stride(len(points), MAX_X_LABELS)
    for i, p in enumerate(points):
        if i % stride == 0:
            commands.append(
                Text(x=p.x, y=height - X_LABEL_BASELINE_INSET, text=p.label, color=text_color, font_size_px=FONT_SIZE_PX, align="center")
            )

    limits = anchored_limits(dataset.values)
    for y, value in zip(grid_ys, tick_values(limits, Y_DIVISIONS), strict=True):
        commands.append(
            Text(
                x=rect.left - Y_LABEL_GAP,
                y=y + Y_LABEL_BASELINE_SHIFT,
                text=y_tick_label(value),
                color=text_color,
                font_size_px=FONT_SIZE_PX,
                align="right",
            )
        )

    path = midpoint_quadratic_path([(p.x, p.y) for p in points])
    x0, x1 = reveal_extent(progress, rect)
    commands.append(PushClip(x=x0, y=0.0, w=x1 - x0, h=height))
    if path is not None:
        fill = LinearGradient(
            y0=0.0,
            y1=height,
            stops=((0.0, palette.rgba("chart_fill_top")), (1.0, palette.rgba("chart_fill_bottom"))),
        )
        commands.append(FillPathArea(path=path, baseline=rect.bottom, paint=fill))
        commands.append(StrokePath(path=path, color=palette.rgba(stroke_token(dataset.key)), line_width=LINE_WIDTH))
    commands.append(PopClip())

    # Markers sit outside the reveal clip, so every sample shows from the first frame.
    for p in points:
        commands.append(
            Circle(
                cx=p.x,
                cy=p.y,
                radius=MARKER_RADIUS,
                fill=palette.rgba("marker_fill"),
                outline=palette.rgba("marker_outline"),
                outline_width=1.0,
            )
        )

    annotation = chart_annotation(dataset)
    texts = {ANNOTATION_ID: annotation} if annotation is not None else {}
    return SceneOutput(
        commands=tuple(commands),
        texts=MappingProxyType(texts),
        visibility=MappingProxyType({ANNOTATION_ID: annotation is not None}),
    )


def reveal_extent(progress: float, rect: PlotRect) -> tuple[float, float]:
    """Horizontal span ``[left, left + progress * plot width]`` left visible by the reveal."""

    return (rect.left, rect.left + max(0.0, clamp01(progress) * rect.width))


def stroke_token(dataset_key: str) -> str:
    return "co2_stroke" if dataset_key == "co2" else "temp_stroke"


def y_tick_label(value: float) -> str:
    return number_text(round_half_up(value * 100) / 100)


def chart_annotation(dataset: Dataset) -> str | None:
    if dataset.key not in ANNOTATED_DATASETS:
        return None
    delta = dataset.last - dataset.first
    return f"Rise {to_fixed(delta, 2)} {dataset.unit} from {dataset.labels[0]} → {dataset.labels[-1]}"


def tooltip_text(dataset: Dataset, index: int) -> str:
    return f"{dataset.labels[index]}: {number_text(dataset.values[index])} {dataset.unit}"


def lookup_tooltip(dataset: Dataset, x: float, width: float, margins: Margins = CHART_MARGINS) -> tuple[int, str]:
    idx = tooltip_index(x, width, len(dataset), margins)
    return idx, tooltip_text(dataset, idx)
