"""Rendering of evaluation results into display strings."""

from __future__ import annotations

import math

from ..ast import RadixFormat

RADIX_PREFIXES = {
    RadixFormat.BINARY: ("0b", "b"),
    RadixFormat.OCTAL: ("0o", "o"),
    RadixFormat.HEXADECIMAL: ("0x", "x"),
}


def render_non_finite(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return "Infinity" if value > 0 else "-Infinity"


def render_decimal(value: float, decimal_places: int = 2) -> str:
    """Round to ``decimal_places`` and print the shortest decimal form."""
    if not math.isfinite(value):
        return render_non_finite(value)
    rounded = round(value, decimal_places)
    if rounded == int(rounded):
        return str(int(rounded))
    return repr(rounded)


def render_radix(value: float, radix: RadixFormat) -> str:
    """Render the integer part of ``value`` with a 0b/0o/0x prefix."""
    if not math.isfinite(value):
        return render_non_finite(value)
    prefix, spec = RADIX_PREFIXES[radix]
    integer = int(value)
    sign = "-" if integer < 0 else ""
    return f"{sign}{prefix}{format(abs(integer), spec)}"


def render_number(value: float, radix: RadixFormat, decimal_places: int = 2) -> str:
    if radix in RADIX_PREFIXES:
        return render_radix(value, radix)
    return render_decimal(value, decimal_places)
