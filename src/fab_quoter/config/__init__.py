"""Logging setup and shop-level configuration for the pricing engine.

Every module logs under the ``fab_quoter`` namespace, so a host
application can tune the engine's verbosity with one logger. The level
for :func:`configure_logging` may come from ``FAB_QUOTER_LOG_LEVEL``.
"""
from __future__ import annotations

import logging
import os

from .settings import (
    PRICING_SETTINGS_ENV_VAR,
    ConfigError,
    PricingOverrides,
    load_pricing_overrides,
)

LOGGER_NAME = "fab_quoter"
LOG_LEVEL_ENV_VAR = "FAB_QUOTER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(*names: str) -> logging.Logger:
    """Return ``fab_quoter`` or a child logger such as ``fab_quoter.pricing``."""
    if not names:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(".".join((LOGGER_NAME, *names)))


logger = get_logger()


def resolve_log_level(level: int | str | None = None) -> int:
    """Turn ``level`` (or ``$FAB_QUOTER_LOG_LEVEL``) into a logging level.

    Names are case-insensitive (``"debug"``); numeric strings are accepted.
    Raises :class:`ConfigError` for a name :mod:`logging` does not know.
    """
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV_VAR, "").strip() or logging.INFO
    if isinstance(level, int):
        return level
    text = level.strip()
    if text.isdigit():
        return int(text)
    resolved = logging.getLevelName(text.upper())
    if not isinstance(resolved, int):
        raise ConfigError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(level: int | str | None = None, *, force: bool = False) -> None:
    """Install a basic root handler unless the host already configured one.

    With existing handlers only the ``fab_quoter`` logger level is set, so
    the host's own loggers are left alone.
    """
    resolved = resolve_log_level(level)
    root = logging.getLogger()
    if root.handlers and not force:
        logger.setLevel(resolved)
        return
    logging.basicConfig(level=resolved, format=LOG_FORMAT, force=force)
    logger.setLevel(resolved)


__all__ = [
    "ConfigError",
    "LOGGER_NAME",
    "LOG_LEVEL_ENV_VAR",
    "PRICING_SETTINGS_ENV_VAR",
    "PricingOverrides",
    "configure_logging",
    "get_logger",
    "load_pricing_overrides",
    "logger",
    "resolve_log_level",
]
