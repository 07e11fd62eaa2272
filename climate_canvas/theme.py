from __future__ import annotations

from dataclasses import asdict, dataclass, fields
import re
from typing import Any, Literal, Mapping

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

Theme = Literal["light", "dark"]
RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class ThemePalette:
    """Colour tokens for one theme; every token is ``#RRGGBB`` or ``#RRGGBBAA``."""

    background: str
    chart_grid: str
    chart_text: str
    chart_fill_top: str = "#4FACFE26"
    chart_fill_bottom: str = "#4FACFE00"
    co2_stroke: str = "#4FACFEFA"
    temp_stroke: str = "#FFA05AFA"
    marker_fill: str = "#FFFFFFF2"
    marker_outline: str = "#0000000F"
    building: str = "#323C50CC"
    building_window: str = "#FFE696B3"
    water_top: str = "#4FACFE99"
    water_bottom: str = "#4FACFEE6"
    wave: str = "#FFFFFF66"
    region_border: str = "#0000004D"
    region_label: str = "#000000FF"

    def rgba(self, token: str) -> RGBA:
        return parse_hex_color(getattr(self, token))


DARK_PALETTE = ThemePalette(
    background="#0B1622FF",
    chart_grid="#FFFFFF14",
    chart_text="#FFFFFFB3",
    building="#C8D2E6CC",
    building_window="#FFDC6499",
    region_border="#FFFFFF4D",
    region_label="#FFFFFFFF",
)

LIGHT_PALETTE = ThemePalette(
    background="#F4F8FBFF",
    chart_grid="#05324A0F",
    chart_text="#05324A99",
)


def normalize_theme(value: Any) -> Theme:
    """Anything other than ``"dark"`` (or ``True``) reads as the light theme."""

    if value is True:
        return "dark"
    if isinstance(value, str) and value.strip().lower() == "dark":
        return "dark"
    return "light"


def palette_for(theme: Theme) -> ThemePalette:
    return DARK_PALETTE if normalize_theme(theme) == "dark" else LIGHT_PALETTE


def validate_palette(theme: Theme, overrides: Mapping[str, Any] | None = None) -> ThemePalette:
    """Validate and merge token overrides against the theme's default palette."""

    raw: dict[str, Any] = asdict(palette_for(theme))
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown palette token: {key}")
            raw[key] = value

    for f in fields(ThemePalette):
        value = raw[f.name]
        if not isinstance(value, str) or not _HEX_COLOR.match(value):
            raise ValueError(f"Token `{f.name}` must be a hex color (#RRGGBB or #RRGGBBAA)")

    return ThemePalette(**{k: str(v).upper() for k, v in raw.items()})


def parse_hex_color(value: str) -> RGBA:
    if not _HEX_COLOR.match(value):
        raise ValueError(f"not a hex color: {value!r}")
    digits = value[1:]
    r = int(digits[0:2], 16)
    g = int(digits[2:4], 16)
    b = int(digits[4:6], 16)
    a = int(digits[6:8], 16) if len(digits) == 8 else 255
    return (r, g, b, a)


def rgba_from_css(r: int, g: int, b: int, alpha: float) -> RGBA:
    a = int(round(max(0.0, min(1.0, alpha)) * 255))
    return (int(r), int(g), int(b), a)
