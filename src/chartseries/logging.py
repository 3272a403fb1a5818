from __future__ import annotations

import logging


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
PACKAGE_LOGGER = "chartseries"


def normalize_level(level: str) -> str:
    resolved = str(level).strip().upper()
    if resolved not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level!r} (expected one of {', '.join(LOG_LEVELS)})")
    return resolved


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler once and set the package logger's level."""
    resolved = normalize_level(level)
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger(PACKAGE_LOGGER).setLevel(resolved)
