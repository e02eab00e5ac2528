"""Logging configuration for the courseware tools.

Standard library logging carries the records; structlog renders them as one
JSON object per line so the output can be piped into the usual collectors.
"""

from __future__ import annotations

import json
import logging
from functools import partial

import structlog


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure stdlib logging and structlog."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format="%(message)s")
    logging.getLogger().setLevel(level)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.JSONRenderer(
                serializer=partial(json.dumps, ensure_ascii=False)
            ),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
