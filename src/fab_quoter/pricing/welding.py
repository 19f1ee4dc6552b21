"""Weld line pricing.

Machine time is setup plus, per unit, the weld length at the process's
travel speed. Consumables (wire, rod, gas) are charged per inch of weld at
the process's rate. An unknown or missing process prices at zero travel
time and zero consumables and is reported as a missing "weld process".
"""
from __future__ import annotations

import logging
from dataclasses import replace

from fab_quoter.domain_models.jobs import LineIssue, OperationType, WeldLine

from ._line_common import CalculatedLine, compose_line_costs, resolve_setup_minutes
from .math_helpers import line_quantity, measurement, scaling_quantity
from .settings import FabricationPricingSettings, rate_key

logger = logging.getLogger(__name__)

__all__ = ["calculate_weld_line"]

_PROCESS_FIELD = "weld process"


def calculate_weld_line(
    line: WeldLine,
    settings: FabricationPricingSettings,
    index: int,
) -> CalculatedLine[WeldLine]:
    """Price one weld *line*; *index* labels the line in warnings."""

    rates = settings.welding
    quantity = line_quantity(line.quantity)
    setup_minutes = resolve_setup_minutes(line.setup_minutes, rates.setup_minutes)

    weld_length = measurement(line.weld_length)
    process = rate_key(line.weld_process)
    missing: list[str] = []
    if weld_length is None:
        missing.append("weld length (in)")
    if process is None:
        missing.append(_PROCESS_FIELD)
    length = weld_length or 0.0

    process_rate = rates.process_rates.get(process) if process is not None else None
    if process_rate is None and _PROCESS_FIELD not in missing:
        logger.debug("Weld line %d: no rates for process %r", index + 1, line.weld_process)
        missing.append(_PROCESS_FIELD)

    units = scaling_quantity(quantity)
    if process_rate is not None and process_rate.inches_per_minute > 0:
        travel_minutes = length / process_rate.inches_per_minute
    else:
        travel_minutes = 0
    derived_machine_minutes = setup_minutes + travel_minutes * units

    consumable_rate = rates.consumables_per_inch.get(process, 0.0) if process is not None else 0.0
    consumable_base = length * consumable_rate * units

    costs = compose_line_costs(
        line,
        derived_machine_minutes=derived_machine_minutes,
        consumable_base=consumable_base,
        quantity=quantity,
        labor_rate_per_hour=rates.labor_rate_per_hour,
        overhead_rate_per_hour=rates.overhead_rate_per_hour,
        markup_percent=rates.markup_percent,
    )

    priced = replace(
        line,
        setup_minutes=setup_minutes,
        machine_minutes=costs.machine_minutes,
        derived_machine_minutes=costs.derived_machine_minutes,
        consumables_cost=costs.consumables_cost,
        labor_cost=costs.labor_cost,
        overhead_cost=costs.overhead_cost,
        sell_price_each=costs.sell_price_each,
        sell_price_total=costs.sell_price_total,
        calc_version=settings.calc_version,
    )
    logger.debug(
        "Weld line %d (%s): %.3f min, sell %.2f each / %.2f total",
        index + 1,
        process or "-",
        costs.machine_minutes,
        costs.sell_price_each,
        costs.sell_price_total,
    )

    issue = LineIssue(index, OperationType.WELD, tuple(missing)) if missing else None
    return CalculatedLine(priced, issue)
