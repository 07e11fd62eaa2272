"""Sea-level rise illustration: a fixed skyline partly under water."""

from __future__ import annotations

import math
from types import MappingProxyType

from climate_canvas.commands import Clear, DrawCommand, FillRect, LinearGradient, StrokeLine
from climate_canvas.formatting import to_fixed
from climate_canvas.scenes.base import SceneOutput, ValueTarget
from climate_canvas.tables import BUILDINGS, Building, sea_level_tier
from climate_canvas.theme import Theme, ThemePalette, palette_for

RESULT_ID = "seaLevelResult"
TEMPERATURE_ID = "tempIncreaseValue"
IMPACT_IDS = ("seaLevelImpact1", "seaLevelImpact2", "seaLevelImpact3")
RESULT_DURATION_MS = 600.0

WINDOW_SIZE = 8.0
WINDOW_INSET = 3.0
WINDOW_ROW_STEP = 20
WINDOW_COLUMN_STEP = 15
WAVE_STEP = 10
WAVE_FREQUENCY = 0.1
WAVE_AMPLITUDE = 3.0
WAVE_WIDTH = 2.0


def sea_level_rise(temp: float) -> float:
    """Projected rise in metres for ``temp`` degrees of warming (linear, unclamped)."""

    return 0.3 + (temp - 1.5) * 0.4


def water_line(rise: float, height: float) -> float:
    return height - (rise / 2.0) * height


def render_sea_level(
    temp: float,
    theme: Theme,
    width: float,
    height: float,
    *,
    palette: ThemePalette | None = None,
    buildings: tuple[Building, ...] = BUILDINGS,
) -> SceneOutput:
    palette = palette or palette_for(theme)
    rise = sea_level_rise(temp)
    water = water_line(rise, height)

    commands: list[DrawCommand] = [Clear((0, 0, 0, 0))]
    building_color = palette.rgba("building")
    window_color = palette.rgba("building_window")
    for b in buildings:
        top = height - b.h
        commands.append(FillRect(x=b.x, y=top, w=b.w, h=b.h, paint=building_color))
        for i in range(0, math.ceil(b.h), WINDOW_ROW_STEP):
            for j in range(0, math.ceil(b.w), WINDOW_COLUMN_STEP):
                commands.append(
                    FillRect(
                        x=b.x + j + WINDOW_INSET,
                        y=top + i + WINDOW_INSET,
                        w=WINDOW_SIZE,
                        h=WINDOW_SIZE,
                        paint=window_color,
                    )
                )

    commands.append(
        FillRect(
            x=0.0,
            y=water,
            w=width,
            h=height - water,
            paint=LinearGradient(
                y0=water,
                y1=height,
                stops=((0.0, palette.rgba("water_top")), (1.0, palette.rgba("water_bottom"))),
            ),
        )
    )
    wave = tuple((float(x), water + math.sin(x * WAVE_FREQUENCY) * WAVE_AMPLITUDE) for x in range(0, math.ceil(width), WAVE_STEP))
    if len(wave) >= 2:
        commands.append(StrokeLine(points=wave, color=palette.rgba("wave"), line_width=WAVE_WIDTH))

    texts = dict(zip(IMPACT_IDS, sea_level_tier(temp).impacts, strict=True))
    texts[TEMPERATURE_ID] = f"{to_fixed(temp, 1)}°C"
    return SceneOutput(
        commands=tuple(commands),
        texts=MappingProxyType(texts),
        value_targets=(ValueTarget(RESULT_ID, to_fixed(rise, 1), RESULT_DURATION_MS),),
    )
