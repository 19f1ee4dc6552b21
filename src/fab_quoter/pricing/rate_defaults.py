"""Compiled-in shop rate defaults for every pricing family.

Each table is a read-only mapping. :mod:`fab_quoter.pricing.settings` turns
them into frozen settings objects once at import time; caller overrides are
merged onto those objects and never onto these tables.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

__all__ = [
    "CALC_VERSION",
    "PLASMA_CUT_SPEEDS",
    "PLASMA_PIERCE_SECONDS",
    "PLASMA_RATES",
    "PRESS_BRAKE_RATES",
    "WELD_CONSUMABLES_PER_INCH",
    "WELD_PROCESS_INCHES_PER_MINUTE",
    "WELDING_RATES",
]

CALC_VERSION = 1
"""Pricing-rule revision stamped onto every computed line."""

PRESS_BRAKE_RATES: Mapping[str, float] = MappingProxyType(
    {
        "seconds_per_bend": 8.0,
        "inches_per_minute": 240.0,
        "setup_minutes": 10.0,
        "labor_rate_per_hour": 95.0,
        "overhead_rate_per_hour": 45.0,
        "consumables_per_bend": 0.45,
        "tonnage_cost_per_job": 6.0,
        "tooling_cost_per_job": 12.0,
        "markup_percent": 22.0,
    }
)

WELDING_RATES: Mapping[str, float] = MappingProxyType(
    {
        "setup_minutes": 8.0,
        "labor_rate_per_hour": 90.0,
        "overhead_rate_per_hour": 40.0,
        "markup_percent": 25.0,
    }
)

# Travel speed of the torch per weld process.
WELD_PROCESS_INCHES_PER_MINUTE: Mapping[str, float] = MappingProxyType(
    {
        "MIG": 14.0,
        "TIG": 8.0,
        "STICK": 10.0,
        "FLUX": 12.0,
    }
)

# Wire, rod and gas per inch of weld.
WELD_CONSUMABLES_PER_INCH: Mapping[str, float] = MappingProxyType(
    {
        "MIG": 0.40,
        "TIG": 0.55,
        "STICK": 0.35,
        "FLUX": 0.32,
    }
)

PLASMA_RATES: Mapping[str, float] = MappingProxyType(
    {
        "material_cost_per_inch": 0.9,
        "consumable_cost_per_pierce": 0.3,
        "setup_rate_per_minute": 1.75,
        "machine_rate_per_minute": 2.25,
        "overhead_percent": 12.0,
        "markup_percent": 25.0,
        "consumables_cost_per_minute": 1.2,
        "default_setup_minutes": 5.0,
    }
)

# Inches per minute keyed by material, then plate thickness in inches.
PLASMA_CUT_SPEEDS: Mapping[str, Mapping[float, float]] = MappingProxyType(
    {
        "STEEL": MappingProxyType({0.25: 140.0, 0.5: 90.0, 0.75: 60.0}),
        "ALUMINUM": MappingProxyType({0.25: 200.0, 0.5: 140.0, 0.75: 100.0}),
        "STAINLESS": MappingProxyType({0.25: 120.0, 0.5: 80.0, 0.75: 55.0}),
    }
)

PLASMA_PIERCE_SECONDS: Mapping[str, Mapping[float, float]] = MappingProxyType(
    {
        "STEEL": MappingProxyType({0.25: 2.5, 0.5: 3.5, 0.75: 4.5}),
        "ALUMINUM": MappingProxyType({0.25: 2.0, 0.5: 3.0, 0.75: 4.0}),
        "STAINLESS": MappingProxyType({0.25: 3.0, 0.5: 4.0, 0.75: 5.0}),
    }
)
