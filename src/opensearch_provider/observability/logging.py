"""Structured logging configuration using structlog.

The provider modules log through stdlib ``logging``; records from them (and
from httpx) are rendered by structlog's ``ProcessorFormatter`` so the CLI
emits one consistent console or JSON stream on stderr.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from opensearch_provider.config.settings import ObservabilitySettings

PACKAGE_LOGGER = "opensearch_provider"

# Request lines from these are only useful when debugging
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def _renderers(log_format: str) -> list:
    if log_format == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=False)]


def setup_logging(settings: ObservabilitySettings | None = None) -> None:
    """Configure structured logging for the provider and its CLI.

    Sets the ``opensearch_provider`` loggers to the configured level and
    keeps the HTTP transport loggers at WARNING unless that level is DEBUG.

    Args:
        settings: Observability settings. Uses defaults if None.
    """
    level_name = settings.log_level.upper() if settings else "INFO"
    log_format = settings.log_format if settings else "console"
    level = getattr(logging, level_name, logging.INFO)

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderers(log_format),
            ],
        )
    )

    # stdout is reserved for CLI output
    logging.basicConfig(handlers=[handler], level=logging.WARNING, force=True)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)

    transport_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
