from __future__ import annotations

from datetime import datetime, timezone

import pytest

from fab_quoter.domain_models import Job, JobStatus, PressBrakeLine, WeldLine, WeldProcess
from fab_quoter.pricing.settings import DEFAULT_FABRICATION_SETTINGS, FabricationPricingSettings

FIXED_TIMESTAMP = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def job() -> Job:
    return Job(id="FJ-1001", status=JobStatus.QUOTED, name="Trailer hitch bracket")


@pytest.fixture
def settings() -> FabricationPricingSettings:
    return DEFAULT_FABRICATION_SETTINGS


@pytest.fixture
def bend_line() -> PressBrakeLine:
    return PressBrakeLine(id="pb-1", quantity=1, bends_count=4, bend_length=120.0)


@pytest.fixture
def weld_line() -> WeldLine:
    return WeldLine(id="wd-1", quantity=1, weld_length=60.0, weld_process=WeldProcess.MIG)


@pytest.fixture
def fixed_timestamp() -> datetime:
    return FIXED_TIMESTAMP
