"""Regional warming heat map for one emissions scenario."""

from __future__ import annotations

from types import MappingProxyType

from climate_canvas.commands import Clear, DrawCommand, FillRect, StrokeRect, Text
from climate_canvas.formatting import round_half_up, to_fixed
from climate_canvas.scenes.base import SceneOutput, ValueTarget
from climate_canvas.tables import REGIONS, ZONE_IMPACTS, Region, Scenario, ZoneImpact, get_scenario
from climate_canvas.theme import Theme, ThemePalette, palette_for, rgba_from_css

RESULT_ID = "tempResult"
DESCRIPTION_ID = "scenarioDescription"
NAME_ID = "scenarioValue"
RESULT_DURATION_MS = 600.0

SATURATION_TEMP = 5.0
REGION_ALPHA = 0.7
BORDER_WIDTH = 2.0
LABEL_FONT_SIZE_PX = 11.0


def heat_color(adjusted: float) -> tuple[int, int, int]:
    """Blue (cool) to red (hot) ramp, saturating at ``SATURATION_TEMP`` degrees."""

    intensity = min(1.0, adjusted / SATURATION_TEMP)
    return (
        round_half_up(255 * intensity),
        round_half_up(100 * (1 - intensity)),
        round_half_up(255 * (1 - intensity)),
    )


def region_label(adjusted: float) -> str:
    return f"+{to_fixed(adjusted, 1)}°C"


def zone_impact_text(temp: float, zone: ZoneImpact) -> str:
    wording = zone.above if temp > zone.threshold else zone.below
    return f"+{to_fixed(temp * zone.multiplier, 1)}°C - {wording}"


def render_heat_map(
    scenario_id: int,
    theme: Theme,
    width: float,
    height: float,
    *,
    palette: ThemePalette | None = None,
    regions: tuple[Region, ...] = REGIONS,
) -> SceneOutput:
    """Draw every region tinted by ``scenario.temp * multiplier``.

    Raises :class:`~climate_canvas.errors.SceneDataError` for an unknown scenario.
    ``width``/``height`` only bound the clear; region geometry is absolute.
    """

    scenario = get_scenario(scenario_id)
    palette = palette or palette_for(theme)
    border = palette.rgba("region_border")
    label_color = palette.rgba("region_label")

    commands: list[DrawCommand] = [Clear((0, 0, 0, 0))]
    for region in regions:
        adjusted = scenario.temp * region.multiplier
        commands.append(FillRect(x=region.x, y=region.y, w=region.w, h=region.h, paint=rgba_from_css(*heat_color(adjusted), REGION_ALPHA)))
        commands.append(StrokeRect(x=region.x, y=region.y, w=region.w, h=region.h, color=border, line_width=BORDER_WIDTH))
        commands.append(
            Text(
                x=region.x + region.w / 2,
                y=region.y + region.h / 2,
                text=region_label(adjusted),
                color=label_color,
                font_size_px=LABEL_FONT_SIZE_PX,
                align="center",
            )
        )

    return SceneOutput(
        commands=tuple(commands),
        texts=MappingProxyType(scenario_texts(scenario)),
        value_targets=(ValueTarget(RESULT_ID, to_fixed(scenario.temp, 1), RESULT_DURATION_MS),),
    )


def scenario_texts(scenario: Scenario) -> dict[str, str]:
    texts = {DESCRIPTION_ID: scenario.description, NAME_ID: scenario.name}
    for zone in ZONE_IMPACTS:
        texts[zone.element_id] = zone_impact_text(scenario.temp, zone)
    return texts
