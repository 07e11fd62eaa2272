from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from climate_canvas.commands import DrawCommand


@dataclass(frozen=True)
class ValueTarget:
    """Request to animate the number shown in ``element_id`` towards ``target``."""

    element_id: str
    target: str
    duration_ms: float


@dataclass(frozen=True)
class SceneOutput:
    """Everything one render pass produces: draw commands plus text for the page."""

    commands: tuple[DrawCommand, ...]
    texts: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    value_targets: tuple[ValueTarget, ...] = ()
    visibility: Mapping[str, bool] = field(default_factory=lambda: MappingProxyType({}))

    def commands_of(self, kind: type) -> list[DrawCommand]:
        return [c for c in self.commands if isinstance(c, kind)]
