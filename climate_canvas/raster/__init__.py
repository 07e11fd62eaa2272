from .canvas import fill_canvas, fill_rect, new_canvas, stroke_rect
from .draw_lines import draw_polyline
from .draw_markers import fill_circle, stroke_circle
from .draw_text import draw_text
from .fill import VerticalGradient, fill_polygon, fill_rect_gradient

__all__ = [
    "VerticalGradient",
    "draw_polyline",
    "draw_text",
    "fill_canvas",
    "fill_circle",
    "fill_polygon",
    "fill_rect",
    "fill_rect_gradient",
    "new_canvas",
    "stroke_circle",
    "stroke_rect",
]
