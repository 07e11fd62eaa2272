from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


EventType = Literal[
    "pointer_move",
    "pointer_leave",
    "dataset_select",
    "temperature_input",
    "scenario_select",
    "theme_change",
    "resize",
]


@dataclass(frozen=True)
class InputEvent:
    """A host event, already reduced to the fields the router reads.

    ``x`` is the pointer position relative to the chart surface; ``client_x``,
    ``rect_top`` and ``scroll_y`` place the tooltip in page coordinates.
    """

    event_type: EventType
    x: Optional[float] = None
    client_x: Optional[float] = None
    rect_top: Optional[float] = None
    scroll_y: Optional[float] = None
    value: Optional[str] = None

    @classmethod
    def pointer_move(cls, x: float, client_x: float, rect_top: float = 0.0, scroll_y: float = 0.0) -> "InputEvent":
        return cls("pointer_move", x=x, client_x=client_x, rect_top=rect_top, scroll_y=scroll_y)

    @classmethod
    def select(cls, event_type: EventType, value: object) -> "InputEvent":
        return cls(event_type, value=None if value is None else str(value))
