"""Numeric coercion for measurements typed in on the shop floor."""
from __future__ import annotations

import math
import re
from typing import Any

# Currency, thousands separators and inch marks carry no numeric meaning.
_STRIP_CHARS = str.maketrans({"$": None, ",": None, "\u2033": None, '"': None, "\u00a0": " "})
_UNIT_SUFFIX = re.compile(r"(?i)\s*\b(?:inches|inch|in|ipm|minutes|minute|min|hours|hour|hrs|hr)\b\.?\s*$")


def _finite(number: float) -> float | None:
    return number if math.isfinite(number) else None


def _parse_text(text: str) -> float | None:
    cleaned = _UNIT_SUFFIX.sub("", text.translate(_STRIP_CHARS).strip()).strip()
    if not cleaned:
        return None
    try:
        return _finite(float(cleaned))
    except ValueError:
        return None


def coerce_float_or_none(value: Any) -> float | None:
    """Return ``value`` as a finite float, or ``None`` when it is unusable.

    Blank text, unparsable text, NaN and infinities all give ``None`` so a
    bad entry is handled exactly like a measurement that was never entered.
    Text such as ``"$1,250.00"``, ``'36"'`` or ``"120 in"`` parses.
    """

    if value is None:
        return None
    if isinstance(value, str):
        return _parse_text(value)
    if isinstance(value, (bool, int, float)):
        return _finite(float(value))
    try:
        return _finite(float(value))
    except (TypeError, ValueError):
        return None


def safe_float(value: Any, default: float = 0.0) -> float:
    """Like :func:`coerce_float_or_none` but falls back to ``default``."""

    coerced = coerce_float_or_none(value)
    return default if coerced is None else coerced


__all__ = ["coerce_float_or_none", "safe_float"]
