"""Plasma-cut line pricing.

Cut time comes from a speed table keyed by material and plate thickness,
plus pierce time from a matching table. Unlike the press-brake and weld
families, labor here is setup time plus machine time at per-minute rates
and overhead is a percentage of the direct costs.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Iterable, Literal, Mapping

from fab_quoter.domain_models.jobs import Job, PlasmaLine
from fab_quoter.domain_models.values import safe_float

from .math_helpers import line_quantity, measurement, round_currency
from .settings import PlasmaPricingSettings, merge_plasma_settings, rate_key

logger = logging.getLogger(__name__)

__all__ = [
    "PlasmaJobResult",
    "PlasmaJobTotals",
    "PlasmaPricingWarning",
    "calculate_plasma_job",
    "calculate_plasma_line",
]

WarningCode = Literal["MISSING_MATERIAL", "MISSING_THICKNESS", "SPEED_LOOKUP_MISSING"]


@dataclass(frozen=True, slots=True)
class PlasmaPricingWarning:
    code: WarningCode
    message: str


@dataclass(frozen=True, slots=True)
class PlasmaJobTotals:
    material_cost: float = 0.0
    consumables_cost: float = 0.0
    labor_cost: float = 0.0
    overhead_cost: float = 0.0
    sell_price_total: float = 0.0


@dataclass(frozen=True)
class PlasmaJobResult:
    lines: list[PlasmaLine]
    totals: PlasmaJobTotals
    warnings: list[PlasmaPricingWarning]

    @property
    def messages(self) -> list[str]:
        return [warning.message for warning in self.warnings]


def _thickness_lookup(table: Mapping[str, Mapping[float, float]], material: str, thickness: float) -> float | None:
    by_thickness = table.get(material)
    if not by_thickness:
        return None
    return by_thickness.get(thickness)


def _format_thickness(thickness: float) -> str:
    return f"{thickness:g}"


def calculate_plasma_line(
    line: PlasmaLine,
    settings: PlasmaPricingSettings,
) -> tuple[PlasmaLine, list[PlasmaPricingWarning]]:
    """Price one plasma *line*; warnings are labelled with the line id."""

    warnings: list[PlasmaPricingWarning] = []
    quantity = line_quantity(line.quantity)
    cut_length = measurement(line.cut_length) or 0.0
    pierces = measurement(line.pierce_count) or 0.0
    if line.setup_minutes is None:
        setup_minutes = settings.default_setup_minutes
    else:
        setup_minutes = safe_float(line.setup_minutes, settings.default_setup_minutes)

    material = rate_key(line.material_type)
    thickness = measurement(line.thickness)
    if material is None:
        warnings.append(PlasmaPricingWarning("MISSING_MATERIAL", f"Line {line.id}: material type missing"))
    if thickness is None:
        warnings.append(PlasmaPricingWarning("MISSING_THICKNESS", f"Line {line.id}: thickness missing"))

    derived_machine_minutes: float | None = None
    pierce_minutes = 0.0
    if material is not None and thickness is not None:
        ipm = _thickness_lookup(settings.cut_speeds, material, thickness)
        if not line.override_machine_minutes:
            if ipm is not None and ipm > 0:
                derived_machine_minutes = cut_length / ipm if cut_length > 0 else 0.0
            else:
                warnings.append(
                    PlasmaPricingWarning(
                        "SPEED_LOOKUP_MISSING",
                        f"Line {line.id}: no cut speed for {material} @ {_format_thickness(thickness)}",
                    )
                )
        pierce_seconds = _thickness_lookup(settings.pierce_seconds, material, thickness) or 0.0
        if pierces > 0:
            pierce_minutes = (pierce_seconds * pierces) / 60

    if line.override_machine_minutes:
        machine_minutes = safe_float(line.machine_minutes)
    else:
        machine_minutes = (derived_machine_minutes or 0.0) + pierce_minutes

    material_cost = round_currency(cut_length * settings.material_cost_per_inch * quantity)
    pierce_consumables = round_currency(pierces * settings.consumable_cost_per_pierce * quantity)
    if line.override_consumables_cost:
        runtime_consumables = safe_float(line.consumables_cost)
    else:
        runtime_consumables = machine_minutes * settings.consumables_cost_per_minute
    consumables_cost = pierce_consumables + runtime_consumables

    labor_setup = setup_minutes * settings.setup_rate_per_minute
    labor_machine = machine_minutes * settings.machine_rate_per_minute
    labor_cost = round_currency(labor_setup + labor_machine)
    overhead_cost = round_currency(
        (material_cost + consumables_cost + labor_cost) * (settings.overhead_percent / 100)
    )
    raw_each = material_cost + consumables_cost + labor_cost + overhead_cost

    if line.sell_price_each_override is not None:
        sell_price_each = safe_float(line.sell_price_each_override)
    else:
        sell_price_each = round_currency(raw_each * (1 + settings.markup_percent / 100))
    if line.sell_price_total_override is not None:
        sell_price_total = safe_float(line.sell_price_total_override)
    else:
        sell_price_total = round_currency(sell_price_each * quantity)

    priced = replace(
        line,
        machine_minutes=machine_minutes,
        derived_machine_minutes=derived_machine_minutes,
        material_cost=material_cost,
        consumables_cost=consumables_cost,
        derived_consumables_cost=runtime_consumables,
        labor_cost=labor_cost,
        overhead_cost=overhead_cost,
        sell_price_each=sell_price_each,
        sell_price_total=sell_price_total,
        calc_version=settings.calc_version,
    )
    return priced, warnings


def calculate_plasma_job(
    job: Job,
    lines: Iterable[PlasmaLine],
    overrides: Mapping[str, Any] | PlasmaPricingSettings | None = None,
) -> PlasmaJobResult:
    """Price every plasma line of *job* and total the job."""

    settings = merge_plasma_settings(overrides)
    priced: list[PlasmaLine] = []
    warnings: list[PlasmaPricingWarning] = []
    for line in lines:
        updated, line_warnings = calculate_plasma_line(line, settings)
        priced.append(updated)
        warnings.extend(line_warnings)

    totals = PlasmaJobTotals(
        material_cost=round_currency(sum(line.material_cost for line in priced)),
        consumables_cost=round_currency(sum(line.consumables_cost for line in priced)),
        labor_cost=round_currency(sum(line.labor_cost for line in priced)),
        overhead_cost=round_currency(sum(line.overhead_cost for line in priced)),
        sell_price_total=round_currency(sum(line.sell_price_total for line in priced)),
    )
    logger.debug(
        "Priced plasma job %s: %d line(s), %d warning(s), sell %.2f",
        job.id,
        len(priced),
        len(warnings),
        totals.sell_price_total,
    )
    return PlasmaJobResult(lines=priced, totals=totals, warnings=warnings)
