"""Technician efficiency and utilization metrics.

Efficiency compares estimated (billed) labor hours with the hours actually
logged against jobs; utilization compares clocked hours with the hours the
technician was scheduled to work.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable, Mapping, Sequence

from fab_quoter.pricing.math_helpers import round_half_up

__all__ = [
    "DEFAULT_SCHEDULE",
    "ClockEntry",
    "JobTimeEntry",
    "LaborLine",
    "PerformanceMetrics",
    "TrendDataPoint",
    "WorkSchedule",
    "calculate_performance_metrics",
    "calculate_trend_data",
    "count_scheduled_days",
    "efficiency_percent",
    "scheduled_hours_per_day",
    "utilization_percent",
]

_WEEKDAY_KEYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


@dataclass(frozen=True, slots=True)
class WorkSchedule:
    days: Mapping[str, bool] = field(
        default_factory=lambda: {
            "mon": True,
            "tue": True,
            "wed": True,
            "thu": True,
            "fri": True,
            "sat": False,
            "sun": False,
        }
    )
    start_time: str = "07:00"
    end_time: str = "15:30"


DEFAULT_SCHEDULE = WorkSchedule()


@dataclass(frozen=True, slots=True)
class LaborLine:
    """Estimated hours billed to a technician on a work order."""

    technician_id: str
    hours: float
    work_order_created: date


@dataclass(frozen=True, slots=True)
class JobTimeEntry:
    """Seconds a technician logged against a work order."""

    technician_id: str
    seconds: float
    started_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class ClockEntry:
    """A clock-in/clock-out shift."""

    technician_id: str
    total_minutes: float
    clock_in: datetime | None = None


@dataclass(frozen=True, slots=True)
class PerformanceMetrics:
    avg_efficiency_percent: int
    utilization_percent: int
    avg_hours_per_day: float
    total_estimated_hours: float
    total_actual_hours: float
    total_scheduled_hours: float
    total_worked_hours: float
    job_count: int
    over_estimate_hours: float  # positive when jobs took longer than estimated


@dataclass(frozen=True, slots=True)
class TrendDataPoint:
    date: date
    efficiency_percent: int
    actual_hours: float
    estimated_hours: float


def efficiency_percent(estimated_hours: float, actual_hours: float) -> int:
    """Estimated over actual hours as a whole percent.

    With no logged time the technician is at 100% if any work was
    estimated, else 0%.
    """

    if actual_hours > 0:
        return int(round_half_up(estimated_hours / actual_hours * 100))
    return 100 if estimated_hours > 0 else 0


def utilization_percent(worked_hours: float, scheduled_hours: float) -> int:
    if scheduled_hours > 0:
        return int(round_half_up(worked_hours / scheduled_hours * 100))
    return 0


def _one_decimal(value: float) -> float:
    return round_half_up(value * 10) / 10


def _minutes_of_day(text: str) -> int:
    hours, _, minutes = text.partition(":")
    return int(hours) * 60 + int(minutes or 0)


def scheduled_hours_per_day(schedule: WorkSchedule | None = None) -> float:
    s = schedule or DEFAULT_SCHEDULE
    return (_minutes_of_day(s.end_time) - _minutes_of_day(s.start_time)) / 60


def count_scheduled_days(schedule: WorkSchedule | None, start: date, end: date) -> int:
    """Count days from *start* to *end* inclusive that are working days."""

    s = schedule or DEFAULT_SCHEDULE
    count = 0
    current = start
    while current <= end:
        if s.days.get(_WEEKDAY_KEYS[current.weekday()], False):
            count += 1
        current += timedelta(days=1)
    return count


def _within(moment: date | datetime | None, start: date | None, end: date | None) -> bool:
    if start is None or end is None or moment is None:
        return True
    day = moment.date() if isinstance(moment, datetime) else moment
    return start <= day <= end


def _estimated_lines(
    technician_id: str, lines: Iterable[LaborLine], start: date | None, end: date | None
) -> list[LaborLine]:
    return [
        line
        for line in lines
        if line.technician_id == technician_id and _within(line.work_order_created, start, end)
    ]


def _actual_hours(
    technician_id: str, entries: Iterable[JobTimeEntry], start: date | None, end: date | None
) -> float:
    seconds = sum(
        entry.seconds
        for entry in entries
        if entry.technician_id == technician_id and _within(entry.started_at, start, end)
    )
    return seconds / 3600


def calculate_performance_metrics(
    technician_id: str,
    labor_lines: Sequence[LaborLine],
    job_time_entries: Sequence[JobTimeEntry],
    clock_entries: Sequence[ClockEntry],
    *,
    schedule: WorkSchedule | None = None,
    period_days: int | None = None,
    today: date | None = None,
) -> PerformanceMetrics:
    """Roll up a technician's hours over the trailing *period_days*.

    Without a period every record counts, and scheduled hours are taken
    over the last 30 days.
    """

    end = today or date.today()
    start = end - timedelta(days=period_days) if period_days else None

    estimated = _estimated_lines(technician_id, labor_lines, start, end)
    total_estimated = sum(line.hours for line in estimated)
    total_actual = _actual_hours(technician_id, job_time_entries, start, end)
    worked_minutes = sum(
        entry.total_minutes
        for entry in clock_entries
        if entry.technician_id == technician_id and _within(entry.clock_in, start, end)
    )
    total_worked = worked_minutes / 60

    scheduled_days = count_scheduled_days(schedule, start or end - timedelta(days=30), end)
    total_scheduled = scheduled_days * scheduled_hours_per_day(schedule)

    days_in_period = period_days or 30
    avg_hours_per_day = total_worked / min(scheduled_days or 1, days_in_period)

    return PerformanceMetrics(
        avg_efficiency_percent=efficiency_percent(total_estimated, total_actual),
        utilization_percent=utilization_percent(total_worked, total_scheduled),
        avg_hours_per_day=_one_decimal(avg_hours_per_day),
        total_estimated_hours=_one_decimal(total_estimated),
        total_actual_hours=_one_decimal(total_actual),
        total_scheduled_hours=_one_decimal(total_scheduled),
        total_worked_hours=_one_decimal(total_worked),
        job_count=len(estimated),
        over_estimate_hours=_one_decimal(total_actual - total_estimated),
    )


def calculate_trend_data(
    technician_id: str,
    labor_lines: Sequence[LaborLine],
    job_time_entries: Sequence[JobTimeEntry],
    period_days: int,
    *,
    today: date | None = None,
) -> list[TrendDataPoint]:
    """Efficiency per day, or per week for a 90-day period, oldest first."""

    end = today or date.today()
    group_size = 7 if period_days == 90 else 1
    groups = -(-period_days // group_size)

    points: list[TrendDataPoint] = []
    for i in range(groups - 1, -1, -1):
        group_end = end - timedelta(days=i * group_size)
        group_start = group_end - timedelta(days=group_size - 1)
        estimated = sum(
            line.hours for line in _estimated_lines(technician_id, labor_lines, group_start, group_end)
        )
        actual = _actual_hours(technician_id, job_time_entries, group_start, group_end)
        points.append(
            TrendDataPoint(
                date=group_end,
                efficiency_percent=efficiency_percent(estimated, actual),
                actual_hours=_one_decimal(actual),
                estimated_hours=_one_decimal(estimated),
            )
        )
    return points
