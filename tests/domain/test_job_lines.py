from __future__ import annotations

from dataclasses import FrozenInstanceError, asdict

import pytest

from fab_quoter.domain_models import (
    JobStatus,
    LineIssue,
    OperationType,
    PressBrakeLine,
    WeldLine,
    WeldProcess,
    fab_line_from_dict,
)
from fab_quoter.pricing.press_brake import calculate_press_brake_line
from fab_quoter.pricing.settings import DEFAULT_FABRICATION_SETTINGS
from fab_quoter.pricing.welding import calculate_weld_line


def test_variants_carry_their_operation_type() -> None:
    assert PressBrakeLine().operation_type is OperationType.PRESS_BRAKE
    assert WeldLine().operation_type is OperationType.WELD


def test_lines_are_immutable(bend_line: PressBrakeLine) -> None:
    with pytest.raises(FrozenInstanceError):
        bend_line.quantity = 2  # type: ignore[misc]


def test_from_dict_selects_variant_and_drops_foreign_columns() -> None:
    line = fab_line_from_dict(
        {
            "operation_type": "weld",
            "id": "w-7",
            "qty": 4,
            "weld_length": 12.5,
            "weld_process": WeldProcess.FLUX,
            "bends_count": None,
            "bend_length": None,
        }
    )

    assert isinstance(line, WeldLine)
    assert line.quantity == 4
    assert line.weld_length == 12.5
    assert line.weld_process is WeldProcess.FLUX


def test_from_dict_prefers_quantity_over_qty() -> None:
    line = fab_line_from_dict({"operation_type": "PRESS_BRAKE", "quantity": 2, "qty": 9, "bends_count": 3})
    assert isinstance(line, PressBrakeLine)
    assert line.quantity == 2
    assert line.bends_count == 3


def test_from_dict_accepts_enum_operation_type() -> None:
    line = fab_line_from_dict({"operation_type": OperationType.WELD, "quantity": 1})
    assert isinstance(line, WeldLine)
    assert line.quantity == 1


def test_priced_lines_rebuild_from_their_records(bend_line: PressBrakeLine, weld_line: WeldLine) -> None:
    priced_weld = calculate_weld_line(weld_line, DEFAULT_FABRICATION_SETTINGS, 0).line
    priced_bend = calculate_press_brake_line(bend_line, DEFAULT_FABRICATION_SETTINGS, 1).line

    assert fab_line_from_dict(asdict(priced_weld)) == priced_weld
    assert fab_line_from_dict(asdict(priced_bend)) == priced_bend


def test_from_dict_rejects_unknown_operation() -> None:
    with pytest.raises(ValueError):
        fab_line_from_dict({"operation_type": "LASER"})


def test_issue_message_is_one_based() -> None:
    issue = LineIssue(0, OperationType.PRESS_BRAKE, ("bends count", "bend length (in)"))
    assert issue.message == (
        "PRESS_BRAKE line 1: needs bends count, bend length (in) to calculate pricing "
        "(or override machine minutes)."
    )


@pytest.mark.parametrize(
    ("status", "closed"),
    [
        (JobStatus.DRAFT, False),
        (JobStatus.QUOTED, False),
        (JobStatus.IN_PROGRESS, False),
        (JobStatus.COMPLETED, True),
        (JobStatus.VOID, True),
    ],
)
def test_job_status_closed(status: JobStatus, closed: bool) -> None:
    assert status.is_closed is closed
