"""Press-brake line pricing.

Machine time is setup plus, per unit, the bend strokes and the ram travel
along the bend length. Consumables are per bend plus fixed tooling and
tonnage charges for the job.
"""
from __future__ import annotations

import logging
from dataclasses import replace

from fab_quoter.domain_models.jobs import LineIssue, OperationType, PressBrakeLine

from ._line_common import CalculatedLine, compose_line_costs, resolve_setup_minutes
from .math_helpers import line_quantity, measurement, scaling_quantity
from .settings import FabricationPricingSettings

logger = logging.getLogger(__name__)

__all__ = ["calculate_press_brake_line"]


def calculate_press_brake_line(
    line: PressBrakeLine,
    settings: FabricationPricingSettings,
    index: int,
) -> CalculatedLine[PressBrakeLine]:
    """Price one press-brake *line*; *index* labels the line in warnings."""

    rates = settings.press_brake
    quantity = line_quantity(line.quantity)
    setup_minutes = resolve_setup_minutes(line.setup_minutes, rates.setup_minutes)

    bends_count = measurement(line.bends_count)
    bend_length = measurement(line.bend_length)
    missing: list[str] = []
    if bends_count is None:
        missing.append("bends count")
    if bend_length is None:
        missing.append("bend length (in)")
    bends = bends_count or 0.0
    length = bend_length or 0.0

    units = scaling_quantity(quantity)
    bend_minutes = bends * (rates.seconds_per_bend / 60)
    travel_minutes = length / rates.inches_per_minute if rates.inches_per_minute > 0 else 0
    derived_machine_minutes = setup_minutes + (bend_minutes + travel_minutes) * units

    consumable_base = (
        bends * rates.consumables_per_bend * units
        + rates.tooling_cost_per_job
        + rates.tonnage_cost_per_job
    )

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
        "Press brake line %d: %.3f min, sell %.2f each / %.2f total",
        index + 1,
        costs.machine_minutes,
        costs.sell_price_each,
        costs.sell_price_total,
    )

    issue = LineIssue(index, OperationType.PRESS_BRAKE, tuple(missing)) if missing else None
    return CalculatedLine(priced, issue)
