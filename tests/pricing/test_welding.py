from __future__ import annotations

import logging

import pytest

from fab_quoter.domain_models import OperationType, PressBrakeLine, WeldLine, WeldProcess
from fab_quoter.pricing.press_brake import calculate_press_brake_line
from fab_quoter.pricing.settings import FabricationPricingSettings, merge_fabrication_settings
from fab_quoter.pricing.welding import calculate_weld_line


def test_mig_weld_prices_from_process_rates(weld_line: WeldLine, settings: FabricationPricingSettings) -> None:
    result = calculate_weld_line(weld_line, settings, 0)
    line = result.line

    assert line.machine_minutes == pytest.approx(8 + 60 / 14)
    assert line.consumables_cost == 24.0
    assert line.labor_cost == 18.43
    assert line.overhead_cost == 8.19
    assert line.sell_price_each == 63.28
    assert line.sell_price_total == 63.28
    assert result.issue is None


def test_tig_run_over_three_parts(settings: FabricationPricingSettings) -> None:
    line = calculate_weld_line(
        WeldLine(quantity=3, weld_length=30.0, weld_process=WeldProcess.TIG), settings, 0
    ).line

    assert line.machine_minutes == pytest.approx(19.25)
    assert line.consumables_cost == 49.5
    assert line.labor_cost == 28.88
    assert line.overhead_cost == 12.83
    assert line.sell_price_each == 38.0
    assert line.sell_price_total == 114.0


def test_process_given_as_lowercase_text(weld_line: WeldLine, settings: FabricationPricingSettings) -> None:
    as_text = WeldLine(quantity=1, weld_length=60.0, weld_process=" mig ")
    expected = calculate_weld_line(weld_line, settings, 0).line
    priced = calculate_weld_line(as_text, settings, 0)

    assert priced.issue is None
    assert priced.line.sell_price_total == expected.sell_price_total


def test_missing_process_prices_setup_only(settings: FabricationPricingSettings) -> None:
    result = calculate_weld_line(WeldLine(quantity=1, weld_length=0.0), settings, 0)

    assert result.warnings == [
        "WELD line 1: needs weld process to calculate pricing (or override machine minutes)."
    ]
    assert result.line.machine_minutes == 8.0
    assert result.line.consumables_cost == 0.0
    assert result.line.labor_cost == 12.0
    assert result.line.overhead_cost == 5.33
    assert result.line.sell_price_each == 21.66


def test_missing_length_and_process_are_both_named(settings: FabricationPricingSettings) -> None:
    result = calculate_weld_line(WeldLine(quantity=1), settings, 4)

    assert result.issue is not None
    assert result.issue.line_index == 4
    assert result.issue.operation_type is OperationType.WELD
    assert result.issue.missing_fields == ("weld length (in)", "weld process")


def test_unknown_process_is_reported_once(
    settings: FabricationPricingSettings, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.DEBUG, logger="fab_quoter.pricing.welding")
    result = calculate_weld_line(WeldLine(quantity=1, weld_length=40.0, weld_process="SUB_ARC"), settings, 0)

    assert result.issue is not None
    assert result.issue.missing_fields == ("weld process",)
    assert result.line.machine_minutes == 8.0
    assert result.line.consumables_cost == 0.0
    assert "no rates for process 'SUB_ARC'" in caplog.text


def test_process_added_through_overrides_is_priced(settings: FabricationPricingSettings) -> None:
    custom = merge_fabrication_settings(
        {"welding": {"process_rates": {"SUB_ARC": 20}, "consumables_per_inch": {"SUB_ARC": 0.5}}}
    )
    result = calculate_weld_line(WeldLine(quantity=1, weld_length=40.0, weld_process="SUB_ARC"), custom, 0)

    assert result.issue is None
    assert result.line.machine_minutes == pytest.approx(10.0)
    assert result.line.consumables_cost == 20.0


def test_zero_travel_speed_leaves_setup_time(settings: FabricationPricingSettings) -> None:
    custom = merge_fabrication_settings({"welding": {"process_rates": {"MIG": 0}}})
    line = calculate_weld_line(
        WeldLine(quantity=2, weld_length=0.0, weld_process=WeldProcess.MIG), custom, 0
    ).line

    assert line.machine_minutes == 8.0
    assert line.sell_price_each == 10.83
    assert line.sell_price_total == 21.66


def test_weld_and_bend_rates_are_independent(settings: FabricationPricingSettings) -> None:
    custom = merge_fabrication_settings({"welding": {"labor_rate_per_hour": 0}})
    weld = calculate_weld_line(WeldLine(quantity=1, weld_length=0.0, weld_process="MIG"), custom, 0).line
    bend = calculate_press_brake_line(PressBrakeLine(quantity=1, bends_count=4, bend_length=120.0), custom, 0).line

    assert weld.labor_cost == 0.0
    assert bend.labor_cost == 17.47
