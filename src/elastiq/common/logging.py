"""Structured logging with structlog."""

import logging

import structlog

from elastiq.common.config import get_settings


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer()


def configure_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """Install the structlog processor chain.

    Arguments left as None fall back to the ELASTIQ_LOG_LEVEL / ELASTIQ_LOG_FORMAT settings.
    """
    if log_level is None or log_format is None:
        config = get_settings()
        log_level = log_level or config.log_level
        log_format = log_format or config.log_format

    level = logging.getLevelNamesMapping().get(log_level.upper())
    if level is None:
        raise ValueError(f"Unknown log level: {log_level!r}")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(log_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
