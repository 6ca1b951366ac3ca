"""Structured logging (structlog on top of stdlib logging).

``configure_logging`` is called once by the host application (and by the
test suite) before any log call; domain modules only ever do
``structlog.get_logger(__name__)``.
"""

from __future__ import annotations

import logging.config
import re
from typing import Any, Dict, List, Optional

import structlog

from config import settings

MASK = "***MASKED***"

SENSITIVE_PATTERN = re.compile(
    r"(password|passwd|secret|token|authorization|voucher_code)"
    r"""([=:]\s*["']?)([^\s,}"']+)""",
    re.IGNORECASE,
)


def mask_sensitive_data(_, __, event_dict):
    """Processor that masks voucher codes, passwords and tokens in log values."""
    for key, value in list(event_dict.items()):
        if key in settings.LOG_MASKED_KEYS and value is not None:
            event_dict[key] = MASK
        elif isinstance(value, str):
            event_dict[key] = SENSITIVE_PATTERN.sub(rf"\1\2{MASK}", value)
    return event_dict


# Shared processors used by both structlog and stdlib logging
_shared_processors: List[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    mask_sensitive_data,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def build_logging_config(
    level: Optional[str] = None, json: Optional[bool] = None
) -> Dict[str, Any]:
    """Return a ``logging.config.dictConfig`` mapping for the given options."""
    level = (level or settings.LOG_LEVEL).upper()
    json = settings.LOG_JSON if json is None else json
    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    renderer,
                ],
                "foreign_pre_chain": _shared_processors,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "structured",
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
    }


def configure_logging(level: Optional[str] = None, json: Optional[bool] = None) -> None:
    """Wire structlog into stdlib logging with the shared processor chain."""
    structlog.configure(
        processors=[
            *_shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.config.dictConfig(build_logging_config(level=level, json=json))
