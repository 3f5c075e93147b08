"""
Log level names accepted by the `log_level` option and their stdlib mapping.

Canonical names: trace, debug, info, warning, error, critical, off.
Aliases: information -> info, none -> off.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

TRACE = 5
OFF = logging.CRITICAL + 10

LOG_LEVELS: dict[str, int] = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "off": OFF,
}

LOG_LEVEL_ALIASES: dict[str, str] = {
    "information": "info",
    "none": "off",
}

ROOT_LOGGER_NAME = "centralconf"

logging.addLevelName(TRACE, "TRACE")


def canonical_log_level(name: str) -> str | None:
    """Return the canonical level name for `name` (case-insensitive), or None if unknown."""
    normalized = name.strip().lower()
    normalized = LOG_LEVEL_ALIASES.get(normalized, normalized)
    return normalized if normalized in LOG_LEVELS else None


def to_logging_level(name: str) -> int:
    """
    Map a level name to a stdlib logging level.

    Raises:
        ValueError: If the name is not a known level
    """
    canonical = canonical_log_level(name)
    if canonical is None:
        raise ValueError(f"Unknown log level: {name!r}")
    return LOG_LEVELS[canonical]


def apply_log_level(name: str, logger_name: str = ROOT_LOGGER_NAME) -> int:
    """
    Re-level the project logger.

    Args:
        name: Level name (canonical or alias)
        logger_name: Logger to re-level (defaults to the package root logger)

    Returns:
        The stdlib level that was applied
    """
    level = to_logging_level(name)
    target = logging.getLogger(logger_name)
    if target.level != level:
        logger.info(f"[LogLevel] Setting '{logger_name}' log level to {name}")
    target.setLevel(level)
    return level
