"""Utility helpers shared by the line calculators."""

from __future__ import annotations

import math
from typing import Any

from fab_quoter.domain_models.values import coerce_float_or_none, safe_float


def round_half_up(value: float) -> float:
    """Round to the nearest integer, ties toward positive infinity.

    Matches the rounding used by the shop screens, so stored prices agree
    to the cent with what the operator saw. Python's ``round`` rounds ties
    to even and would drift on exact half cents.
    """

    floor = math.floor(value)
    if value - floor >= 0.5:
        return float(floor + 1)
    return float(floor)


def round_currency(value: float) -> float:
    """Return *value* rounded to whole cents."""

    return round_half_up(value * 100) / 100


def line_quantity(value: Any) -> float:
    """Return the entered quantity, or ``0`` when it is missing or not finite."""

    return safe_float(value, 0.0)


def scaling_quantity(quantity: float) -> float:
    """Return the multiplier for per-unit run time and consumables.

    A zero quantity still prices one unit's worth of work.
    """

    return max(quantity, 1)


def measurement(value: Any) -> float | None:
    """Return a finite measurement or ``None`` when it was not supplied."""

    return coerce_float_or_none(value)


def sell_prices(
    raw_total: float,
    quantity: float,
    markup_percent: float,
) -> tuple[float, float]:
    """Return ``(sell_price_each, sell_price_total)`` for a line.

    ``raw_total`` is the whole line's cost. With a zero quantity the
    "each" price is the full line cost and the total is zero.
    """

    base_each = raw_total / quantity if quantity > 0 else raw_total
    each = round_currency(base_each * (1 + markup_percent / 100))
    total = round_currency(each * quantity)
    return each, total


__all__ = [
    "line_quantity",
    "measurement",
    "round_currency",
    "round_half_up",
    "scaling_quantity",
    "sell_prices",
]
