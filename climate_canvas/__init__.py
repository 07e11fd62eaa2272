from climate_canvas.config import RenderSettings
from climate_canvas.context import RasterContext
from climate_canvas.errors import SceneDataError
from climate_canvas.events import InputEvent
from climate_canvas.frame_clock import AnimationLoop, FrameClock
from climate_canvas.interaction import InteractionRouter, MemoryTooltipSink, TooltipState
from climate_canvas.reveal import RevealAnimator, RevealSession
from climate_canvas.scenes import SceneOutput, render_heat_map, render_line_chart, render_sea_level
from climate_canvas.value_animator import MemoryTextSink, ValueAnimator
from climate_canvas.viewport import DrawingSurface, ViewportState, fit_to_display

__all__ = [
    "AnimationLoop",
    "DrawingSurface",
    "FrameClock",
    "InputEvent",
    "InteractionRouter",
    "MemoryTextSink",
    "MemoryTooltipSink",
    "RasterContext",
    "RenderSettings",
    "RevealAnimator",
    "RevealSession",
    "SceneDataError",
    "SceneOutput",
    "TooltipState",
    "ValueAnimator",
    "ViewportState",
    "fit_to_display",
    "render_heat_map",
    "render_line_chart",
    "render_sea_level",
]
