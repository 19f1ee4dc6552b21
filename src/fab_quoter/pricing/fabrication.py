"""Fabrication job pricing: dispatches each line to its calculator."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from fab_quoter.domain_models.jobs import FabJobLine, Job, LineIssue, PressBrakeLine, WeldLine

from ._line_common import CalculatedLine
from .press_brake import calculate_press_brake_line
from .settings import FabricationPricingSettings, merge_fabrication_settings
from .welding import calculate_weld_line

logger = logging.getLogger(__name__)

__all__ = ["FabJobResult", "calculate_fab_job", "calculate_fab_line"]


@dataclass(frozen=True)
class FabJobResult:
    """Priced lines for a job plus the job-level warning list.

    ``warnings`` are the operator-facing strings in line order; ``issues``
    carries the same information in structured form.
    """

    lines: list[FabJobLine]
    warnings: list[str]
    issues: list[LineIssue] = field(default_factory=list)
    calc_version: int | None = None
    calculated_at: datetime | None = None

    @property
    def can_post(self) -> bool:
        """True when every line had the measurements it needed."""

        return not self.warnings


def calculate_fab_line(
    line: FabJobLine,
    settings: FabricationPricingSettings,
    index: int,
) -> CalculatedLine[Any]:
    """Price a single line with the calculator for its operation type."""

    if isinstance(line, PressBrakeLine):
        return calculate_press_brake_line(line, settings, index)
    if isinstance(line, WeldLine):
        return calculate_weld_line(line, settings, index)
    raise TypeError(f"Unsupported fabrication line type: {type(line).__name__}")


def calculate_fab_job(
    job: Job,
    lines: Iterable[FabJobLine],
    overrides: Mapping[str, Any] | FabricationPricingSettings | None = None,
    *,
    calculated_at: datetime | None = None,
) -> FabJobResult:
    """Price every line of *job*.

    *overrides* is a partial settings mapping merged onto the compiled-in
    defaults for this call only. The input lines are left untouched; the
    result holds new line objects in the same order, and the warnings from
    all lines flattened in that order.
    """

    settings = merge_fabrication_settings(overrides)
    priced: list[FabJobLine] = []
    warnings: list[str] = []
    issues: list[LineIssue] = []

    for index, line in enumerate(lines):
        calculated = calculate_fab_line(line, settings, index)
        priced.append(calculated.line)
        if calculated.issue is not None:
            issues.append(calculated.issue)
            warnings.extend(calculated.warnings)

    logger.debug(
        "Priced job %s: %d line(s), %d warning(s), calc version %s",
        job.id,
        len(priced),
        len(warnings),
        settings.calc_version,
    )
    return FabJobResult(
        lines=priced,
        warnings=warnings,
        issues=issues,
        calc_version=settings.calc_version,
        calculated_at=calculated_at or datetime.now(timezone.utc),
    )
