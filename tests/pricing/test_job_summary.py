from __future__ import annotations

import pytest

from fab_quoter import calculate_fab_job, calculate_plasma_job
from fab_quoter.domain_models import Job, PlasmaLine, PressBrakeLine, WeldLine
from fab_quoter.pricing import compute_plasma_job_metrics, job_lines_frame, summarize_fab_job
from fab_quoter.pricing.summary import FabJobSummary, PlasmaJobMetrics


def test_frame_has_one_row_per_line(job: Job, bend_line: PressBrakeLine, weld_line: WeldLine) -> None:
    priced = calculate_fab_job(job, [bend_line, weld_line]).lines
    frame = job_lines_frame(priced)

    assert list(frame["id"]) == ["pb-1", "wd-1"]
    assert list(frame["operation_type"]) == ["PRESS_BRAKE", "WELD"]
    assert frame.loc[1, "weld_process"] == "MIG"
    assert frame["bends_count"].isna().tolist() == [False, True]
    assert frame["sell_price_total"].tolist() == [55.57, 63.28]


def test_fab_summary_totals(job: Job, bend_line: PressBrakeLine, weld_line: WeldLine) -> None:
    priced = calculate_fab_job(job, [bend_line, weld_line]).lines
    summary = summarize_fab_job(priced)

    assert summary.total_qty == 2
    assert summary.total_setup_minutes == 18.0
    assert summary.total_machine_minutes == pytest.approx(10 + 32 / 60 + 0.5 + 8 + 60 / 14)
    assert summary.total_sell == pytest.approx(118.85)
    assert summary.total_cost == pytest.approx(19.8 + 17.47 + 8.28 + 24.0 + 18.43 + 8.19)


def test_unpriced_setup_counts_as_zero() -> None:
    summary = summarize_fab_job([PressBrakeLine(quantity=3)])
    assert summary.total_qty == 3
    assert summary.total_setup_minutes == 0.0


def test_empty_job_summaries() -> None:
    assert summarize_fab_job([]) == FabJobSummary()
    assert compute_plasma_job_metrics([]) == PlasmaJobMetrics()


def test_plasma_metrics_scale_by_quantity(job: Job) -> None:
    lines = [
        PlasmaLine(id="a", quantity=2, cut_length=100.0, pierce_count=4, material_type="STEEL", thickness=0.25),
        PlasmaLine(id="b", quantity=1, cut_length=None, pierce_count=None, material_type="STEEL", thickness=0.5),
    ]
    priced = calculate_plasma_job(job, lines).lines
    metrics = compute_plasma_job_metrics(priced)

    assert metrics.total_qty == 3
    assert metrics.total_cut_length == 200.0
    assert metrics.total_pierces == 8
    assert metrics.total_machine_minutes == pytest.approx(2 * (100 / 140 + 10 / 60))
