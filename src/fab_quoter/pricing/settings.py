"""Pricing settings objects and the structural merge of caller overrides.

Merge rules, applied recursively:

* scalar fields present in the override replace the default;
* nested sections (``press_brake``, ``welding``) merge field by field;
* rate maps (``process_rates``, ``consumables_per_inch``, ``cut_speeds``,
  ``pierce_seconds``) merge key by key, so an override that only names
  ``MIG`` keeps the ``TIG``/``STICK``/``FLUX`` defaults. A process-rate
  entry merges field by field onto the default entry; a plasma thickness
  table replaces the material's default table wholesale.

Keys may be given in snake_case or in the camelCase used by persisted shop
settings (``pressBrake.secondsPerBend``). Unknown keys are logged and
ignored; ``None`` values fall back to the default.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, fields, is_dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, TypeVar

from . import rate_defaults

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

# Marker for rate maps whose entries are ``{thickness: value}`` tables.
_THICKNESS_TABLE = "thickness_table"


@dataclass(frozen=True, slots=True)
class PressBrakeSettings:
    seconds_per_bend: float = 0.0
    inches_per_minute: float = 0.0
    setup_minutes: float = 0.0
    labor_rate_per_hour: float = 0.0
    overhead_rate_per_hour: float = 0.0
    consumables_per_bend: float = 0.0
    tonnage_cost_per_job: float = 0.0
    tooling_cost_per_job: float = 0.0
    markup_percent: float = 0.0


@dataclass(frozen=True, slots=True)
class WeldProcessRate:
    inches_per_minute: float = 0.0


@dataclass(frozen=True, slots=True)
class WeldingSettings:
    setup_minutes: float = 0.0
    process_rates: Mapping[str, WeldProcessRate] = field(
        default_factory=lambda: MappingProxyType({}),
        metadata={"entry": WeldProcessRate},
    )
    consumables_per_inch: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType({}),
        metadata={"entry": float},
    )
    labor_rate_per_hour: float = 0.0
    overhead_rate_per_hour: float = 0.0
    markup_percent: float = 0.0


@dataclass(frozen=True, slots=True)
class FabricationPricingSettings:
    """Rate tables for press-brake and welding lines."""

    calc_version: int = rate_defaults.CALC_VERSION
    press_brake: PressBrakeSettings = field(default_factory=PressBrakeSettings)
    welding: WeldingSettings = field(default_factory=WeldingSettings)


@dataclass(frozen=True, slots=True)
class PlasmaPricingSettings:
    """Rate tables for plasma-cut lines."""

    material_cost_per_inch: float = 0.0
    consumable_cost_per_pierce: float = 0.0
    setup_rate_per_minute: float = 0.0
    machine_rate_per_minute: float = 0.0
    overhead_percent: float = 0.0
    markup_percent: float = 0.0
    calc_version: int = rate_defaults.CALC_VERSION
    cut_speeds: Mapping[str, Mapping[float, float]] = field(
        default_factory=lambda: MappingProxyType({}),
        metadata={"entry": _THICKNESS_TABLE},
    )
    pierce_seconds: Mapping[str, Mapping[float, float]] = field(
        default_factory=lambda: MappingProxyType({}),
        metadata={"entry": _THICKNESS_TABLE},
    )
    consumables_cost_per_minute: float = 0.0
    default_setup_minutes: float = 0.0


def rate_key(value: Any) -> str | None:
    """Return the lookup key for a weld process or material name."""

    if value is None:
        return None
    if isinstance(value, Enum):
        value = value.value
    text = str(value).strip().upper()
    return text or None


def _normalize_key(name: Any) -> str:
    """Return the snake_case field name for *name* (camelCase tolerant)."""

    text = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", str(name or ""))
    return re.sub(r"[^a-z0-9]+", "_", text.lower()).strip("_")


def _thickness_table(raw: Mapping[Any, Any]) -> Mapping[float, float]:
    return MappingProxyType({float(key): float(value) for key, value in raw.items()})


def _merge_entry(entry_type: Any, existing: Any, value: Any, path: str) -> Any:
    if entry_type is float:
        return float(value)
    if entry_type == _THICKNESS_TABLE:
        if not isinstance(value, Mapping):
            raise TypeError(f"{path} must be a mapping of thickness to value")
        return _thickness_table(value)
    if isinstance(value, entry_type):
        return value
    if isinstance(value, Mapping):
        base = existing if existing is not None else entry_type()
        return _merge_dataclass(base, value, path)
    # ``{"MIG": 20}`` is shorthand for the entry's only rate.
    return entry_type(float(value))


def _merge_rate_map(
    current: Mapping[Any, Any],
    value: Mapping[Any, Any],
    entry_type: Any,
    path: str,
) -> Mapping[Any, Any]:
    merged = dict(current)
    for raw_key, entry in value.items():
        key = rate_key(raw_key)
        if key is None or entry is None:
            continue
        merged[key] = _merge_entry(entry_type, merged.get(key), entry, f"{path}{key}")
    return MappingProxyType(merged)


def _merge_dataclass(base: _T, overrides: Mapping[str, Any], path: str = "") -> _T:
    changes: dict[str, Any] = {}
    specs = {spec.name: spec for spec in fields(base)}  # type: ignore[arg-type]
    for raw_key, value in overrides.items():
        name = _normalize_key(raw_key)
        spec = specs.get(name)
        if spec is None:
            logger.warning("Ignoring unknown pricing setting %s%s", path, raw_key)
            continue
        if value is None:
            continue
        current = getattr(base, name)
        child_path = f"{path}{name}."
        if is_dataclass(current):
            if isinstance(value, type(current)):
                changes[name] = value
            elif isinstance(value, Mapping):
                changes[name] = _merge_dataclass(current, value, child_path)
            else:
                raise TypeError(f"{path}{name} must be a mapping of settings")
        elif isinstance(current, Mapping):
            if not isinstance(value, Mapping):
                raise TypeError(f"{path}{name} must be a mapping of rates")
            changes[name] = _merge_rate_map(current, value, spec.metadata.get("entry", float), child_path)
        elif isinstance(current, int) and not isinstance(current, bool):
            changes[name] = int(value)
        else:
            changes[name] = float(value)
    return replace(base, **changes)  # type: ignore[type-var]


DEFAULT_FABRICATION_SETTINGS = FabricationPricingSettings(
    calc_version=rate_defaults.CALC_VERSION,
    press_brake=PressBrakeSettings(**rate_defaults.PRESS_BRAKE_RATES),
    welding=WeldingSettings(
        process_rates=MappingProxyType(
            {
                process: WeldProcessRate(inches_per_minute=ipm)
                for process, ipm in rate_defaults.WELD_PROCESS_INCHES_PER_MINUTE.items()
            }
        ),
        consumables_per_inch=rate_defaults.WELD_CONSUMABLES_PER_INCH,
        **rate_defaults.WELDING_RATES,
    ),
)

DEFAULT_PLASMA_SETTINGS = PlasmaPricingSettings(
    calc_version=rate_defaults.CALC_VERSION,
    cut_speeds=rate_defaults.PLASMA_CUT_SPEEDS,
    pierce_seconds=rate_defaults.PLASMA_PIERCE_SECONDS,
    **rate_defaults.PLASMA_RATES,
)


def merge_fabrication_settings(
    overrides: Mapping[str, Any] | FabricationPricingSettings | None = None,
) -> FabricationPricingSettings:
    """Return the compiled-in fabrication settings with *overrides* applied.

    Always returns a new settings value; the shared defaults are never
    modified.
    """

    if isinstance(overrides, FabricationPricingSettings):
        return overrides
    return _merge_dataclass(DEFAULT_FABRICATION_SETTINGS, overrides or {})


def merge_plasma_settings(
    overrides: Mapping[str, Any] | PlasmaPricingSettings | None = None,
) -> PlasmaPricingSettings:
    """Return the compiled-in plasma settings with *overrides* applied."""

    if isinstance(overrides, PlasmaPricingSettings):
        return overrides
    return _merge_dataclass(DEFAULT_PLASMA_SETTINGS, overrides or {})


def settings_as_dict(settings: Any) -> dict[str, Any]:
    """Recursively convert a settings object to plain dictionaries."""

    def _plain(value: Any) -> Any:
        if is_dataclass(value) and not isinstance(value, type):
            return {spec.name: _plain(getattr(value, spec.name)) for spec in fields(value)}
        if isinstance(value, Mapping):
            return {key: _plain(item) for key, item in value.items()}
        return value

    return _plain(settings)


__all__ = [
    "DEFAULT_FABRICATION_SETTINGS",
    "DEFAULT_PLASMA_SETTINGS",
    "FabricationPricingSettings",
    "PlasmaPricingSettings",
    "PressBrakeSettings",
    "WeldProcessRate",
    "WeldingSettings",
    "merge_fabrication_settings",
    "merge_plasma_settings",
    "rate_key",
    "settings_as_dict",
]
