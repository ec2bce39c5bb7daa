from __future__ import annotations

import logging
from typing import Optional

import structlog

from .config import ObservabilityConfig, get_config

logger = logging.getLogger("geocoding_client")


def json_formatter() -> structlog.stdlib.ProcessorFormatter:
    """Formatter rendering stdlib records as one JSON object per line.

    Fields passed with ``extra={...}`` become top-level keys.
    """
    timestamper = structlog.processors.TimeStamper(fmt="iso")
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            timestamper,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.ExtraAdder(),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )


def configure_logging(config: Optional[ObservabilityConfig] = None) -> logging.Handler:
    """Install a root handler according to the observability settings.

    Calling it again replaces the handler installed by the previous call.
    """
    config = config or get_config().observability

    handler = logging.StreamHandler()
    if config.structured:
        handler.setFormatter(json_formatter())
    else:
        handler.setFormatter(logging.Formatter(config.format))
    handler.set_name("geocoding_client")

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == "geocoding_client":
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(config.level)

    logger.debug("Logging configured", extra={"structured": config.structured})
    return handler
