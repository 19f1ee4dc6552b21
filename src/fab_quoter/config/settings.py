"""Loading of shop-level pricing overrides persisted outside the engine."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

PRICING_SETTINGS_ENV_VAR = "FAB_QUOTER_PRICING_SETTINGS"

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Raised when configuration data cannot be loaded or validated."""


@dataclass(frozen=True)
class PricingOverrides:
    """Partial pricing settings for each calculator family."""

    fabrication: Mapping[str, Any] = field(default_factory=dict)
    plasma: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.fabrication and not self.plasma


def _load_json_mapping(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Malformed JSON in {path.name}: {exc}") from exc

    if not isinstance(raw, Mapping):
        raise ConfigError(f"Configuration root must be an object in {path.name}")

    return dict(raw)


def _section(raw: Mapping[str, Any], name: str, source: Path) -> dict[str, Any]:
    value = raw.get(name)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"Section {name!r} must be an object in {source.name}")
    return dict(value)


def load_pricing_overrides(path: str | os.PathLike[str] | None = None) -> PricingOverrides:
    """Read persisted pricing overrides.

    ``path`` wins over the ``FAB_QUOTER_PRICING_SETTINGS`` environment
    variable. When neither names a file an empty :class:`PricingOverrides`
    is returned so callers fall back to the compiled-in defaults.

    The file holds a JSON object with optional ``"fabrication"`` and
    ``"plasma"`` sections, each a partial settings mapping as accepted by
    :func:`fab_quoter.pricing.settings.merge_fabrication_settings` and
    :func:`fab_quoter.pricing.settings.merge_plasma_settings`.
    """

    if path is None:
        env_path = os.getenv(PRICING_SETTINGS_ENV_VAR, "").strip()
        if not env_path:
            return PricingOverrides()
        source = Path(env_path)
    else:
        source = Path(path)

    raw = _load_json_mapping(source)
    unknown = sorted(set(raw) - {"fabrication", "plasma"})
    if unknown:
        logger.warning("Ignoring unknown pricing sections in %s: %s", source.name, ", ".join(unknown))

    overrides = PricingOverrides(
        fabrication=_section(raw, "fabrication", source),
        plasma=_section(raw, "plasma", source),
    )
    logger.debug("Loaded pricing overrides from %s", source)
    return overrides


__all__ = [
    "ConfigError",
    "PRICING_SETTINGS_ENV_VAR",
    "PricingOverrides",
    "load_pricing_overrides",
]
