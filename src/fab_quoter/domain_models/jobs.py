"""Job and job-line records consumed and produced by the pricing engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union


class JobStatus(str, Enum):
    """Lifecycle of a fabrication or plasma job.

    The pricing engine only reads the status; transitions belong to the
    job workflow that owns persistence.
    """

    DRAFT = "DRAFT"
    QUOTED = "QUOTED"
    APPROVED = "APPROVED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    VOID = "VOID"

    @property
    def is_closed(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.VOID)


class OperationType(str, Enum):
    PRESS_BRAKE = "PRESS_BRAKE"
    WELD = "WELD"


class WeldProcess(str, Enum):
    MIG = "MIG"
    TIG = "TIG"
    STICK = "STICK"
    FLUX = "FLUX"


@dataclass(frozen=True, slots=True)
class Job:
    """Identity and lifecycle status of a job; read-only to the engine."""

    id: str
    status: JobStatus = JobStatus.DRAFT
    name: str = ""


@dataclass(frozen=True, slots=True)
class _FabLineBase:
    """Fields shared by every fabrication line variant.

    ``machine_minutes``, ``consumables_cost`` and ``labor_cost`` double as
    operator inputs when the matching ``override_*`` flag is set. Every
    other computed field is overwritten on each calculation pass.
    """

    id: str = ""
    quantity: float = 0.0
    setup_minutes: float | None = None

    override_machine_minutes: bool = False
    override_consumables_cost: bool = False
    override_labor_cost: bool = False

    machine_minutes: float = 0.0
    derived_machine_minutes: float | None = None
    consumables_cost: float = 0.0
    labor_cost: float = 0.0
    overhead_cost: float = 0.0
    sell_price_each: float = 0.0
    sell_price_total: float = 0.0
    calc_version: int | None = None


@dataclass(frozen=True, slots=True)
class PressBrakeLine(_FabLineBase):
    """A set of press-brake bends."""

    bends_count: int | None = None
    bend_length: float | None = None  # inches

    operation_type: OperationType = field(default=OperationType.PRESS_BRAKE, init=False)


@dataclass(frozen=True, slots=True)
class WeldLine(_FabLineBase):
    """A weld pass of ``weld_length`` inches using ``weld_process``.

    ``weld_process`` is usually a :class:`WeldProcess`; a free-form string
    from an older record is accepted and priced through the same lookup.
    """

    weld_length: float | None = None  # inches
    weld_process: WeldProcess | str | None = None

    operation_type: OperationType = field(default=OperationType.WELD, init=False)


FabJobLine = Union[PressBrakeLine, WeldLine]

_LINE_TYPES: Mapping[OperationType, type] = {
    OperationType.PRESS_BRAKE: PressBrakeLine,
    OperationType.WELD: WeldLine,
}


def fab_line_from_dict(raw: Mapping[str, Any]) -> FabJobLine:
    """Build a line variant from a persisted record keyed by ``operation_type``.

    Keys that do not belong to the selected variant are dropped, so a flat
    record carrying both press-brake and weld columns maps cleanly.
    """

    kind = raw["operation_type"]
    if isinstance(kind, Enum):
        kind = kind.value
    operation = OperationType(str(kind).strip().upper())
    line_cls = _LINE_TYPES[operation]
    allowed = {name for name in line_cls.__dataclass_fields__ if name != "operation_type"}
    kwargs = {key: value for key, value in raw.items() if key in allowed}
    if "qty" in raw and "quantity" not in kwargs:
        kwargs["quantity"] = raw["qty"]
    return line_cls(**kwargs)


@dataclass(frozen=True, slots=True)
class LineIssue:
    """Structured form of a missing-measurement warning for one line."""

    line_index: int
    operation_type: OperationType
    missing_fields: tuple[str, ...]

    @property
    def message(self) -> str:
        fields_text = ", ".join(self.missing_fields)
        return (
            f"{self.operation_type.value} line {self.line_index + 1}: needs {fields_text} "
            "to calculate pricing (or override machine minutes)."
        )


@dataclass(frozen=True, slots=True)
class PlasmaLine:
    """A plasma-cut part: cut path length, pierces and material/thickness."""

    id: str = ""
    quantity: float = 0.0
    cut_length: float | None = None  # inches
    pierce_count: int | None = None
    material_type: str | None = None
    thickness: float | None = None  # inches
    setup_minutes: float | None = None

    override_machine_minutes: bool = False
    override_consumables_cost: bool = False
    sell_price_each_override: float | None = None
    sell_price_total_override: float | None = None

    machine_minutes: float = 0.0
    derived_machine_minutes: float | None = None
    material_cost: float = 0.0
    consumables_cost: float = 0.0
    derived_consumables_cost: float = 0.0
    labor_cost: float = 0.0
    overhead_cost: float = 0.0
    sell_price_each: float = 0.0
    sell_price_total: float = 0.0
    calc_version: int | None = None


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
    "fab_line_from_dict",
]
