from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import os

from climate_canvas.raster.draw_text import DEFAULT_FONT_FAMILY
from climate_canvas.reveal import DEFAULT_REVEAL_MS

LOGGER = logging.getLogger(__name__)

RATIO_ENV_VAR = "CLIMATE_CANVAS_DEVICE_PIXEL_RATIO"
REVEAL_ENV_VAR = "CLIMATE_CANVAS_REVEAL_MS"
FONT_ENV_VAR = "CLIMATE_CANVAS_FONT_FAMILY"


@dataclass(frozen=True)
class RenderSettings:
    device_pixel_ratio: float | None = None
    reveal_ms: float = DEFAULT_REVEAL_MS
    font_family: str = DEFAULT_FONT_FAMILY

    def __post_init__(self) -> None:
        if self.device_pixel_ratio is not None and not self.device_pixel_ratio > 0:
            raise ValueError("device_pixel_ratio must be > 0 when provided")
        if self.reveal_ms <= 0:
            raise ValueError("reveal_ms must be > 0")
        if not self.font_family.strip():
            raise ValueError("font_family must be non-empty")

    @classmethod
    def from_env(
        cls,
        *,
        ratio_env_var: str = RATIO_ENV_VAR,
        reveal_env_var: str = REVEAL_ENV_VAR,
        font_env_var: str = FONT_ENV_VAR,
    ) -> "RenderSettings":
        """Read overrides from the environment; unusable values fall back to defaults."""

        font = os.getenv(font_env_var, "").strip() or DEFAULT_FONT_FAMILY
        return cls(
            device_pixel_ratio=_parse_positive(ratio_env_var),
            reveal_ms=_parse_positive(reveal_env_var) or DEFAULT_REVEAL_MS,
            font_family=font,
        )


def _parse_positive(env_var: str) -> float | None:
    raw = os.getenv(env_var, "").strip()
    if raw == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        LOGGER.warning("ignoring %s=%r: not a number", env_var, raw)
        return None
    if not math.isfinite(value) or value <= 0:
        LOGGER.warning("ignoring %s=%r: must be a positive number", env_var, raw)
        return None
    return value
