"""Override resolution and cost composition shared by fabrication lines."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from fab_quoter.domain_models.jobs import LineIssue, PressBrakeLine, WeldLine
from fab_quoter.domain_models.values import safe_float

from .math_helpers import round_currency, sell_prices

_LineT = TypeVar("_LineT")


@dataclass(frozen=True)
class CalculatedLine(Generic[_LineT]):
    """A priced line plus the advisory issue raised while pricing it."""

    line: _LineT
    issue: LineIssue | None = None

    @property
    def warnings(self) -> list[str]:
        return [self.issue.message] if self.issue is not None else []


@dataclass(frozen=True, slots=True)
class LineCosts:
    machine_minutes: float
    derived_machine_minutes: float | None
    consumables_cost: float
    labor_cost: float
    overhead_cost: float
    sell_price_each: float
    sell_price_total: float


def resolve_setup_minutes(entered: float | None, default_minutes: float) -> float:
    """Return the line's explicit setup minutes, else the family default."""

    if entered is None:
        return default_minutes
    return safe_float(entered, default_minutes)


def compose_line_costs(
    line: PressBrakeLine | WeldLine,
    *,
    derived_machine_minutes: float,
    consumable_base: float,
    quantity: float,
    labor_rate_per_hour: float,
    overhead_rate_per_hour: float,
    markup_percent: float,
) -> LineCosts:
    """Apply the override flags on *line* and build its cost stack.

    Overhead has no override: it always follows the resolved machine
    minutes, whether those were derived or entered.
    """

    if line.override_machine_minutes:
        machine_minutes = safe_float(line.machine_minutes)
        derived: float | None = None
    else:
        machine_minutes = derived_machine_minutes
        derived = derived_machine_minutes

    if line.override_consumables_cost:
        consumables_cost = safe_float(line.consumables_cost)
    else:
        consumables_cost = round_currency(consumable_base)

    if line.override_labor_cost:
        labor_cost = safe_float(line.labor_cost)
    else:
        labor_cost = round_currency(machine_minutes * (labor_rate_per_hour / 60))

    overhead_cost = round_currency(machine_minutes * (overhead_rate_per_hour / 60))

    raw_total = consumables_cost + labor_cost + overhead_cost
    each, total = sell_prices(raw_total, quantity, markup_percent)
    return LineCosts(
        machine_minutes=machine_minutes,
        derived_machine_minutes=derived,
        consumables_cost=consumables_cost,
        labor_cost=labor_cost,
        overhead_cost=overhead_cost,
        sell_price_each=each,
        sell_price_total=total,
    )


__all__ = ["CalculatedLine", "LineCosts", "compose_line_costs", "resolve_setup_minutes"]
