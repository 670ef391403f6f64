"""Logging setup driven by ObservabilityConfig."""

from __future__ import annotations

import logging
from typing import Optional

from .config import ObservabilityConfig, get_config


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Configure the root logger from the observability settings.

    Modules log through ``logging.getLogger(__name__)`` and attach
    context with ``extra=``; this only decides level and format.
    """
    config = config or get_config().observability
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, format=config.format)
    # httpx logs every request URL at INFO, query string (and key) included.
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
