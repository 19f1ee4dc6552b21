"""Preventive-maintenance due status for shop units.

A schedule is due every ``interval_value`` miles, engine hours or days
after it was last completed. Meter-based schedules compare against the
unit's current odometer or hour meter; day-based schedules against today.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable, Sequence

logger = logging.getLogger(__name__)

__all__ = [
    "DUE_SOON_DAYS",
    "DUE_SOON_METER_UNITS",
    "ComputedSchedule",
    "PMIntervalType",
    "PMSchedule",
    "PMStatus",
    "compute_pm_status",
    "most_urgent",
    "needs_work_order",
    "pm_due_key",
    "sort_by_urgency",
    "summarize_pm_statuses",
]

DUE_SOON_DAYS = 14
DUE_SOON_METER_UNITS = 500


class PMIntervalType(str, Enum):
    MILES = "MILES"
    HOURS = "HOURS"
    DAYS = "DAYS"


class PMStatus(str, Enum):
    OVERDUE = "OVERDUE"
    DUE_SOON = "DUE_SOON"
    OK = "OK"
    NOT_CONFIGURED = "NOT_CONFIGURED"

    @property
    def priority(self) -> int:
        return _STATUS_PRIORITY[self]


_STATUS_PRIORITY = {
    PMStatus.OVERDUE: 0,
    PMStatus.DUE_SOON: 1,
    PMStatus.OK: 2,
    PMStatus.NOT_CONFIGURED: 3,
}


@dataclass(frozen=True, slots=True)
class PMSchedule:
    id: str
    name: str
    interval_type: PMIntervalType | str
    interval_value: float
    last_completed_date: date | str | None = None
    last_completed_meter: float | None = None
    last_generated_due_key: str | None = None


@dataclass(frozen=True, slots=True)
class ComputedSchedule:
    schedule: PMSchedule
    next_due: date | float | None
    status: PMStatus
    remaining: float | None  # days or meter units

    @property
    def interval_type(self) -> PMIntervalType:
        return PMIntervalType(self.schedule.interval_type)


def _as_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def _classify(remaining: float, due_soon: float) -> PMStatus:
    if remaining < 0:
        return PMStatus.OVERDUE
    if remaining <= due_soon:
        return PMStatus.DUE_SOON
    return PMStatus.OK


def compute_pm_status(
    schedule: PMSchedule,
    unit_mileage: float | None,
    unit_hours: float | None,
    *,
    today: date | None = None,
) -> ComputedSchedule:
    """Return the next due point, what remains until it, and the status.

    Raises ``ValueError`` for an interval type outside
    :class:`PMIntervalType`.
    """

    interval_type = PMIntervalType(schedule.interval_type)

    if interval_type is PMIntervalType.DAYS:
        if not schedule.last_completed_date:
            return ComputedSchedule(schedule, None, PMStatus.NOT_CONFIGURED, None)
        next_due_date = _as_date(schedule.last_completed_date) + timedelta(days=schedule.interval_value)
        remaining_days = (next_due_date - (today or date.today())).days
        return ComputedSchedule(
            schedule, next_due_date, _classify(remaining_days, DUE_SOON_DAYS), remaining_days
        )

    if schedule.last_completed_meter is None:
        return ComputedSchedule(schedule, None, PMStatus.NOT_CONFIGURED, None)

    current_meter = unit_mileage if interval_type is PMIntervalType.MILES else unit_hours
    next_due_meter = schedule.last_completed_meter + schedule.interval_value
    if current_meter is None:
        return ComputedSchedule(schedule, next_due_meter, PMStatus.NOT_CONFIGURED, None)

    remaining = next_due_meter - current_meter
    return ComputedSchedule(
        schedule, next_due_meter, _classify(remaining, DUE_SOON_METER_UNITS), remaining
    )


def _urgency_key(computed: ComputedSchedule) -> tuple[int, bool, float]:
    remaining = computed.remaining
    return (computed.status.priority, remaining is None, remaining if remaining is not None else 0.0)


def sort_by_urgency(computed: Iterable[ComputedSchedule]) -> list[ComputedSchedule]:
    """Order by status (overdue first), then least remaining first."""

    return sorted(computed, key=_urgency_key)


def most_urgent(computed: Iterable[ComputedSchedule]) -> ComputedSchedule | None:
    """Return the most urgent configured schedule, if any."""

    configured = [item for item in computed if item.status is not PMStatus.NOT_CONFIGURED]
    if not configured:
        return None
    return sort_by_urgency(configured)[0]


def summarize_pm_statuses(computed: Sequence[ComputedSchedule]) -> dict[PMStatus, int]:
    counts = Counter(item.status for item in computed)
    return {status: counts.get(status, 0) for status in PMStatus}


def pm_due_key(computed: ComputedSchedule) -> str:
    """Identify the due occurrence, e.g. ``"MILES:15000"``.

    A work order generated for one occurrence carries this key so the same
    occurrence is not generated twice.
    """

    next_due = computed.next_due
    if next_due is None:
        text = "NONE"
    elif isinstance(next_due, date):
        text = next_due.isoformat()
    elif float(next_due).is_integer():
        text = str(int(next_due))
    else:
        text = str(next_due)
    return f"{computed.interval_type.value}:{text}"


def needs_work_order(computed: ComputedSchedule) -> bool:
    """True when a PM work order should be generated for this occurrence."""

    if computed.status not in (PMStatus.OVERDUE, PMStatus.DUE_SOON):
        return False
    due_key = pm_due_key(computed)
    if due_key.endswith(":NONE"):
        return False
    if computed.schedule.last_generated_due_key == due_key:
        logger.debug("PM %s already has a work order for %s", computed.schedule.id, due_key)
        return False
    return True
