"""Routes page input to the three scenes and keeps their surfaces current."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
import math
from typing import Mapping, Protocol

from climate_canvas.config import RenderSettings
from climate_canvas.context import RasterContext
from climate_canvas.errors import SceneDataError
from climate_canvas.events import InputEvent
from climate_canvas.formatting import number_text
from climate_canvas.frame_clock import AnimationLoop
from climate_canvas.reveal import RevealAnimator, RevealSession
from climate_canvas.scenes.base import SceneOutput
from climate_canvas.scenes.heat_map import render_heat_map
from climate_canvas.scenes.line_chart import lookup_tooltip, render_line_chart
from climate_canvas.scenes.sea_level import render_sea_level
from climate_canvas.tables import DATASETS, get_dataset, get_scenario
from climate_canvas.theme import Theme, ThemePalette, normalize_theme, validate_palette
from climate_canvas.value_animator import TextSink, ValueAnimator
from climate_canvas.viewport import DrawingSurface, fit_to_display

LOGGER = logging.getLogger(__name__)

TOOLTIP_OFFSET_PX = 8.0


@dataclass(frozen=True)
class TooltipState:
    text: str = ""
    left: str = "0px"
    top: str = "0px"
    opacity: float = 0.0


class TooltipSink(Protocol):
    def show_tooltip(self, state: TooltipState) -> None: ...


@dataclass
class MemoryTooltipSink:
    state: TooltipState | None = None

    def show_tooltip(self, state: TooltipState) -> None:
        self.state = state


class _NullTextSink:
    def read_text(self, element_id: str) -> str | None:
        return None

    def write_text(self, element_id: str, text: str) -> None:
        return None

    def set_visible(self, element_id: str, visible: bool) -> None:
        return None


@dataclass
class InteractionRouter:
    """Owns the current page state (dataset, temperature, scenario, theme).

    Any surface or sink may be ``None``; the feature that needs it is skipped
    and a warning is logged once.
    """

    chart: DrawingSurface | None = None
    sea_level: DrawingSurface | None = None
    heat_map: DrawingSurface | None = None
    texts: TextSink | None = None
    tooltip: TooltipSink | None = None
    theme: Theme = "dark"
    dataset_key: str = "co2"
    temperature: float = 1.5
    scenario_id: int = 1
    settings: RenderSettings = field(default_factory=RenderSettings)
    palette_overrides: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    loop: AnimationLoop = field(default_factory=AnimationLoop)
    _reveal: RevealAnimator = field(init=False, repr=False)
    _values: ValueAnimator = field(init=False, repr=False)
    _tooltip_state: TooltipState = field(default_factory=TooltipState, init=False, repr=False)
    _warned: set[str] = field(default_factory=set, init=False, repr=False)

    def __post_init__(self) -> None:
        self.theme = normalize_theme(self.theme)
        self._reveal = RevealAnimator(self._draw_chart, duration_ms=self.settings.reveal_ms)
        self._values = ValueAnimator(self.loop, self.texts if self.texts is not None else _NullTextSink())
        for surface in self._surfaces():
            if self.settings.device_pixel_ratio is not None:
                surface.ratio_override = self.settings.device_pixel_ratio
            fit_to_display(surface)

    @property
    def reveal(self) -> RevealAnimator:
        return self._reveal

    @property
    def tooltip_state(self) -> TooltipState:
        return self._tooltip_state

    def start(self) -> None:
        """Initial paint: start the chart reveal and draw both simulators."""

        self._restart_reveal()
        self._paint_sea_level()
        self._paint_heat_map()

    def dispatch(self, event: InputEvent) -> None:
        kind = event.event_type
        if kind == "pointer_move":
            if event.x is None:
                LOGGER.warning("pointer_move without x ignored")
                return
            client_x = event.x if event.client_x is None else event.client_x
            self.pointer_move(event.x, client_x, event.rect_top or 0.0, event.scroll_y or 0.0)
        elif kind == "pointer_leave":
            self.pointer_leave()
        elif kind == "dataset_select":
            self.select_dataset(event.value)
        elif kind == "temperature_input":
            try:
                temp = float(event.value) if event.value is not None else None
            except ValueError:
                temp = None
            if temp is None:
                LOGGER.warning("temperature_input with unusable value %r ignored", event.value)
                return
            self.set_temperature(temp)
        elif kind == "scenario_select":
            self.set_scenario(event.value)
        elif kind == "theme_change":
            self.set_theme(event.value)
        elif kind == "resize":
            self.resize()
        else:
            raise ValueError(f"unsupported event type: {kind}")

    def select_dataset(self, key: str | None) -> bool:
        """Switch the chart to ``key`` and replay the reveal; unchanged or unknown keys are ignored."""

        if not key or key == self.dataset_key:
            return False
        if key not in DATASETS:
            LOGGER.warning("unknown dataset %r ignored", key)
            return False
        self.dataset_key = key
        self._restart_reveal()
        return True

    def pointer_move(self, x: float, client_x: float, rect_top: float = 0.0, scroll_y: float = 0.0) -> TooltipState | None:
        if self.chart is None:
            self._warn_once("chart", "chart surface missing; tooltip disabled")
            return None
        dataset = get_dataset(self.dataset_key)
        _, text = lookup_tooltip(dataset, x, self.chart.viewport.logical_width)
        self._tooltip_state = TooltipState(
            text=text,
            left=f"{number_text(client_x)}px",
            top=f"{number_text(rect_top + scroll_y + TOOLTIP_OFFSET_PX)}px",
            opacity=1.0,
        )
        self._show_tooltip()
        return self._tooltip_state

    def pointer_leave(self) -> TooltipState:
        self._tooltip_state = replace(self._tooltip_state, opacity=0.0)
        self._show_tooltip()
        return self._tooltip_state

    def set_temperature(self, temp: float) -> SceneOutput | None:
        if not math.isfinite(temp):
            LOGGER.warning("non-finite temperature %r ignored", temp)
            return None
        self.temperature = float(temp)
        return self._paint_sea_level()

    def set_scenario(self, scenario_id: int | str | None) -> SceneOutput | None:
        try:
            scenario = get_scenario(scenario_id)
        except SceneDataError as exc:
            LOGGER.warning("scenario ignored: %s", exc)
            return None
        self.scenario_id = scenario.id
        return self._paint_heat_map()

    def set_theme(self, theme: object) -> None:
        self.theme = normalize_theme(theme)
        self._restart_reveal()
        self._paint_sea_level()
        self._paint_heat_map()

    def resize(self) -> None:
        """Refit every surface, then repaint what each one currently shows."""

        for surface in self._surfaces():
            fit_to_display(surface)
        session = self._reveal.session
        if session is not None:
            self._draw_chart(session.key, session.theme, session.progress)
        self._paint_sea_level(animate=False)
        self._paint_heat_map(animate=False)

    def tick(self, now_ms: float) -> int:
        return self.loop.step(now_ms)

    def palette(self) -> ThemePalette:
        return validate_palette(self.theme, self.palette_overrides.get(self.theme))

    def _surfaces(self) -> list[DrawingSurface]:
        return [s for s in (self.chart, self.sea_level, self.heat_map) if s is not None]

    def _restart_reveal(self) -> RevealSession | None:
        if self.chart is None:
            self._warn_once("chart", "chart surface missing; chart disabled")
            return None
        session = self._reveal.start(self.dataset_key, self.theme)
        self.loop.schedule(session)
        return session

    def _draw_chart(self, key: str, theme: Theme, progress: float) -> None:
        if self.chart is None:
            return
        view = self.chart.viewport
        output = render_line_chart(get_dataset(key), progress, theme, view.logical_width, view.logical_height, palette=self.palette())
        self._apply(self.chart, output, animate=False)

    def _paint_sea_level(self, animate: bool = True) -> SceneOutput | None:
        if self.sea_level is None:
            self._warn_once("sea_level", "sea-level surface missing; simulator disabled")
            return None
        view = self.sea_level.viewport
        output = render_sea_level(self.temperature, self.theme, view.logical_width, view.logical_height, palette=self.palette())
        self._apply(self.sea_level, output, animate=animate)
        return output

    def _paint_heat_map(self, animate: bool = True) -> SceneOutput | None:
        if self.heat_map is None:
            self._warn_once("heat_map", "heat-map surface missing; simulator disabled")
            return None
        view = self.heat_map.viewport
        output = render_heat_map(self.scenario_id, self.theme, view.logical_width, view.logical_height, palette=self.palette())
        self._apply(self.heat_map, output, animate=animate)
        return output

    def _apply(self, surface: DrawingSurface, output: SceneOutput, *, animate: bool) -> None:
        RasterContext(surface, font_family=self.settings.font_family).execute(output.commands)
        if self.texts is None:
            if output.texts or output.value_targets or output.visibility:
                self._warn_once("texts", "text sink missing; page text updates disabled")
            return
        for element_id, text in output.texts.items():
            self.texts.write_text(element_id, text)
        for element_id, visible in output.visibility.items():
            self.texts.set_visible(element_id, visible)
        if not animate:
            return
        for target in output.value_targets:
            self._values.animate(target.element_id, target.target, target.duration_ms)

    def _show_tooltip(self) -> None:
        if self.tooltip is None:
            self._warn_once("tooltip", "tooltip sink missing; tooltip disabled")
            return
        self.tooltip.show_tooltip(self._tooltip_state)

    def _warn_once(self, feature: str, message: str) -> None:
        if feature in self._warned:
            return
        self._warned.add(feature)
        LOGGER.warning(message)
