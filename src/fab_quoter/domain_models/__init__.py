"""Domain records and value utilities."""

from .jobs import (
    FabJobLine,
    Job,
    JobStatus,
    LineIssue,
    OperationType,
    PlasmaLine,
    PressBrakeLine,
    WeldLine,
    WeldProcess,
    fab_line_from_dict,
)
from .values import coerce_float_or_none, safe_float

__all__ = [
    "FabJobLine",
    "Job",
    "JobStatus",
    "LineIssue",
    "OperationType",
    "PlasmaLine",
    "PressBrakeLine",
    "WeldLine",
    "WeldProcess",
    "coerce_float_or_none",
    "fab_line_from_dict",
    "safe_float",
]
