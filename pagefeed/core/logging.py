"""Structured logging for pagefeed and its HTTP stack."""

from __future__ import annotations

import logging.config
import os

import structlog

# Only these loggers are configured; the root logger stays with the host app.
LOGGERS = ("pagefeed", "httpx", "httpcore")


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Send pagefeed, httpx and httpcore records through one structlog formatter.

    Explicit arguments win over ``PAGEFEED_LOG_LEVEL`` (default INFO) and
    ``PAGEFEED_LOG_FORMAT`` (``console`` or ``json``, default console).
    httpx and httpcore stay at WARNING so request lines come from the
    client's own hooks.
    """
    log_level = (level or os.environ.get("PAGEFEED_LOG_LEVEL", "INFO")).upper()
    log_format = (fmt or os.environ.get("PAGEFEED_LOG_FORMAT", "console")).lower()

    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            *pre_chain,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    levels = {"pagefeed": log_level, "httpx": "WARNING", "httpcore": "WARNING"}
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": pre_chain,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "pagefeed": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "structlog",
                },
            },
            "loggers": {
                name: {"handlers": ["pagefeed"], "level": levels[name], "propagate": False}
                for name in LOGGERS
            },
        }
    )
