"""Cost and sell-price engine for a repair and fabrication shop."""
from __future__ import annotations

from .domain_models import Job, JobStatus, PlasmaLine, PressBrakeLine, WeldLine, WeldProcess
from .pricing import calculate_fab_job, calculate_plasma_job

__version__ = "0.1.0"

__all__ = [
    "Job",
    "JobStatus",
    "PlasmaLine",
    "PressBrakeLine",
    "WeldLine",
    "WeldProcess",
    "__version__",
    "calculate_fab_job",
    "calculate_plasma_job",
]
