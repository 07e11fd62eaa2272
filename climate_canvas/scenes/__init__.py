from .base import SceneOutput, ValueTarget
from .heat_map import heat_color, render_heat_map
from .line_chart import lookup_tooltip, render_line_chart, tooltip_text
from .sea_level import render_sea_level, sea_level_rise

__all__ = [
    "SceneOutput",
    "ValueTarget",
    "heat_color",
    "lookup_tooltip",
    "render_heat_map",
    "render_line_chart",
    "render_sea_level",
    "sea_level_rise",
    "tooltip_text",
]
