"""Job-level roll-ups of priced lines for travelers and reports."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Iterable, Sequence

import pandas as pd

from fab_quoter.domain_models.jobs import FabJobLine, PlasmaLine

__all__ = [
    "FabJobSummary",
    "PlasmaJobMetrics",
    "compute_plasma_job_metrics",
    "job_lines_frame",
    "summarize_fab_job",
]

_FAB_NUMERIC_COLUMNS = (
    "quantity",
    "setup_minutes",
    "machine_minutes",
    "consumables_cost",
    "labor_cost",
    "overhead_cost",
    "sell_price_total",
)
_PLASMA_NUMERIC_COLUMNS = ("quantity", "cut_length", "pierce_count", "machine_minutes")


@dataclass(frozen=True, slots=True)
class FabJobSummary:
    total_qty: float = 0.0
    total_machine_minutes: float = 0.0
    total_setup_minutes: float = 0.0
    total_sell: float = 0.0
    total_cost: float = 0.0


@dataclass(frozen=True, slots=True)
class PlasmaJobMetrics:
    total_qty: float = 0.0
    total_cut_length: float = 0.0
    total_pierces: float = 0.0
    total_machine_minutes: float = 0.0


def _record(line: FabJobLine | PlasmaLine) -> dict[str, object]:
    record = asdict(line)
    for key, value in record.items():
        if isinstance(value, Enum):
            record[key] = value.value
    return record


def job_lines_frame(lines: Iterable[FabJobLine | PlasmaLine]) -> pd.DataFrame:
    """Return one row per line with every input and computed column.

    Press-brake and weld lines share one frame; columns that do not apply
    to a line's operation are left empty.
    """

    return pd.DataFrame([_record(line) for line in lines])


def _numeric(frame: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
    numeric = pd.DataFrame(index=frame.index)
    for column in columns:
        if column in frame.columns:
            numeric[column] = pd.to_numeric(frame[column], errors="coerce").fillna(0.0)
        else:
            numeric[column] = 0.0
    return numeric


def summarize_fab_job(lines: Iterable[FabJobLine]) -> FabJobSummary:
    """Total quantity, minutes, sell price and cost over priced lines."""

    frame = job_lines_frame(lines)
    if frame.empty:
        return FabJobSummary()
    numeric = _numeric(frame, _FAB_NUMERIC_COLUMNS)
    cost = numeric["consumables_cost"] + numeric["labor_cost"] + numeric["overhead_cost"]
    return FabJobSummary(
        total_qty=float(numeric["quantity"].sum()),
        total_machine_minutes=float(numeric["machine_minutes"].sum()),
        total_setup_minutes=float(numeric["setup_minutes"].sum()),
        total_sell=float(numeric["sell_price_total"].sum()),
        total_cost=float(cost.sum()),
    )


def compute_plasma_job_metrics(lines: Iterable[PlasmaLine]) -> PlasmaJobMetrics:
    """Cut length, pierces and machine minutes for the whole quantity."""

    frame = job_lines_frame(lines)
    if frame.empty:
        return PlasmaJobMetrics()
    numeric = _numeric(frame, _PLASMA_NUMERIC_COLUMNS)
    qty = numeric["quantity"]
    return PlasmaJobMetrics(
        total_qty=float(qty.sum()),
        total_cut_length=float((numeric["cut_length"] * qty).sum()),
        total_pierces=float((numeric["pierce_count"] * qty).sum()),
        total_machine_minutes=float((numeric["machine_minutes"] * qty).sum()),
    )
