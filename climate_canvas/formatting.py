"""Number formatting that matches what the page shows for the same values."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
import math
import re

_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def to_fixed(value: float, digits: int) -> str:
    """Fixed-point text of the exact binary value, ties rounded away from zero."""

    if digits < 0:
        raise ValueError("digits must be >= 0")
    if not math.isfinite(value):
        return number_text(value)
    quant = Decimal("1").scaleb(-digits)
    out = format(Decimal(abs(value)).quantize(quant, rounding=ROUND_HALF_UP), "f")
    # Negative values keep their sign even when they round to zero; -0.0 does not.
    return "-" + out if value < 0 else out


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""

    return int(math.floor(value + 0.5))


def number_text(value: float) -> str:
    """Shortest round-trip text for a number, without a trailing ``.0`` on integers."""

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def parse_displayed(text: str | None) -> float:
    """Leading numeric prefix of ``text``, or 0 when there is none or it is NaN."""

    if not text:
        return 0.0
    match = _LEADING_FLOAT.match(text)
    if match is None:
        return 0.0
    value = float(match.group(1))
    if math.isnan(value):
        return 0.0
    return value


def has_fraction(target: float | int | str) -> bool:
    if isinstance(target, str):
        return "." in target
    if isinstance(target, bool):
        return False
    if isinstance(target, int):
        return False
    return "." in number_text(float(target))
