"""Fabrication and plasma pricing calculators."""
from __future__ import annotations

from .fabrication import FabJobResult, calculate_fab_job, calculate_fab_line
from .plasma import PlasmaJobResult, PlasmaPricingWarning, calculate_plasma_job
from .settings import (
    DEFAULT_FABRICATION_SETTINGS,
    DEFAULT_PLASMA_SETTINGS,
    FabricationPricingSettings,
    PlasmaPricingSettings,
    merge_fabrication_settings,
    merge_plasma_settings,
)
from .summary import compute_plasma_job_metrics, job_lines_frame, summarize_fab_job

__all__ = [
    "DEFAULT_FABRICATION_SETTINGS",
    "DEFAULT_PLASMA_SETTINGS",
    "FabJobResult",
    "FabricationPricingSettings",
    "PlasmaJobResult",
    "PlasmaPricingSettings",
    "PlasmaPricingWarning",
    "calculate_fab_job",
    "calculate_fab_line",
    "calculate_plasma_job",
    "compute_plasma_job_metrics",
    "job_lines_frame",
    "merge_fabrication_settings",
    "merge_plasma_settings",
    "summarize_fab_job",
]
