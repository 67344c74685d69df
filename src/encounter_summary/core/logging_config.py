"""Structured logging configuration using structlog.

JSON lines when stderr is not a terminal, colored console output otherwise.
Module loggers stay plain ``logging.getLogger(__name__)``; structlog only
formats what reaches the root handler.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from encounter_summary.core.config import ObservabilityConfig


def setup_logging(config: ObservabilityConfig, *, json_output: bool | None = None) -> None:
    """Configure the root logger.

    Args:
        config: Log level and service name.
        json_output: Force JSON (True) or console (False) rendering;
            ``None`` decides from whether stderr is a TTY.
    """
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    use_json = (not sys.stderr.isatty()) if json_output is None else json_output
    renderer = structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    structlog.contextvars.bind_contextvars(service=config.service_name)
    logging.getLogger("encounter_summary").setLevel(level)
    # LiteLLM is chatty at INFO.
    logging.getLogger("LiteLLM").setLevel(max(level, logging.WARNING))
