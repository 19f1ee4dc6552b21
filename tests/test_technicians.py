from __future__ import annotations

from datetime import date, datetime

import pytest

from fab_quoter.technicians import (
    ClockEntry,
    JobTimeEntry,
    LaborLine,
    WorkSchedule,
    calculate_performance_metrics,
    calculate_trend_data,
    count_scheduled_days,
    efficiency_percent,
    scheduled_hours_per_day,
    utilization_percent,
)

TODAY = date(2024, 5, 31)


@pytest.fixture
def labor_lines() -> list[LaborLine]:
    return [
        LaborLine("t1", 4.0, date(2024, 5, 28)),
        LaborLine("t1", 2.0, date(2024, 5, 30)),
        LaborLine("t1", 3.0, date(2024, 5, 1)),
        LaborLine("t2", 8.0, date(2024, 5, 28)),
    ]


@pytest.fixture
def job_time() -> list[JobTimeEntry]:
    return [
        JobTimeEntry("t1", 7200, datetime(2024, 5, 28, 9, 0)),
        JobTimeEntry("t1", 10800, datetime(2024, 5, 30, 13, 0)),
        JobTimeEntry("t2", 3600, datetime(2024, 5, 28, 9, 0)),
    ]


@pytest.fixture
def clock() -> list[ClockEntry]:
    return [
        ClockEntry("t1", 480, datetime(2024, 5, 28, 7, 0)),
        ClockEntry("t1", 450, datetime(2024, 5, 30, 7, 0)),
    ]


def test_efficiency_and_utilization_percent() -> None:
    assert efficiency_percent(6, 5) == 120
    assert efficiency_percent(2, 3) == 67
    assert efficiency_percent(3, 0) == 100
    assert efficiency_percent(0, 0) == 0
    assert utilization_percent(15.5, 51) == 30
    assert utilization_percent(4, 0) == 0


def test_schedule_helpers() -> None:
    assert scheduled_hours_per_day() == 8.5
    assert scheduled_hours_per_day(WorkSchedule(start_time="06:00", end_time="16:00")) == 10.0
    # Fri 24 May through Fri 31 May 2024.
    assert count_scheduled_days(None, date(2024, 5, 24), TODAY) == 6
    weekends = WorkSchedule(days={"sat": True, "sun": True})
    assert count_scheduled_days(weekends, date(2024, 5, 24), TODAY) == 2


def test_metrics_over_a_week(
    labor_lines: list[LaborLine], job_time: list[JobTimeEntry], clock: list[ClockEntry]
) -> None:
    metrics = calculate_performance_metrics("t1", labor_lines, job_time, clock, period_days=7, today=TODAY)

    assert metrics.job_count == 2
    assert metrics.total_estimated_hours == 6.0
    assert metrics.total_actual_hours == 5.0
    assert metrics.avg_efficiency_percent == 120
    assert metrics.total_worked_hours == 15.5
    assert metrics.total_scheduled_hours == 51.0
    assert metrics.utilization_percent == 30
    assert metrics.avg_hours_per_day == 2.6
    assert metrics.over_estimate_hours == -1.0


def test_metrics_without_period_count_everything(
    labor_lines: list[LaborLine], job_time: list[JobTimeEntry], clock: list[ClockEntry]
) -> None:
    metrics = calculate_performance_metrics("t1", labor_lines, job_time, clock, today=TODAY)

    assert metrics.job_count == 3
    assert metrics.total_estimated_hours == 9.0
    # 23 weekdays from 1 May through 31 May 2024.
    assert metrics.total_scheduled_hours == 195.5


def test_metrics_for_idle_technician() -> None:
    metrics = calculate_performance_metrics("t9", [], [], [], period_days=30, today=TODAY)

    assert metrics.job_count == 0
    assert metrics.avg_efficiency_percent == 0
    assert metrics.utilization_percent == 0
    assert metrics.avg_hours_per_day == 0.0


def test_daily_trend(labor_lines: list[LaborLine], job_time: list[JobTimeEntry]) -> None:
    points = calculate_trend_data("t1", labor_lines, job_time, 7, today=TODAY)

    assert [point.date for point in points] == [date(2024, 5, day) for day in range(25, 32)]
    by_day = {point.date.day: point for point in points}
    assert by_day[28].efficiency_percent == 200
    assert by_day[28].actual_hours == 2.0
    assert by_day[30].efficiency_percent == 67
    assert by_day[29].efficiency_percent == 0


def test_quarter_trend_is_weekly(labor_lines: list[LaborLine], job_time: list[JobTimeEntry]) -> None:
    points = calculate_trend_data("t1", labor_lines, job_time, 90, today=TODAY)

    assert len(points) == 13
    assert points[-1].date == TODAY
    assert points[-2].date == date(2024, 5, 24)
    assert points[-1].estimated_hours == 6.0
    assert points[-1].actual_hours == 5.0
