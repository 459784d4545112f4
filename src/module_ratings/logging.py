"""structlog setup for rating runs: console output locally, JSON in prod."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

from module_ratings.config import Settings

# Libraries that log every request at INFO; only shown when debugging a run.
NOISY_LOGGERS = ("httpx", "httpcore")


def wants_json(settings: Settings) -> bool:
    if settings.log_json is not None:
        return settings.log_json
    return settings.app_env == "prod"


def configure_logging(
    settings: Settings,
    level: str | None = None,
    *,
    stream: TextIO | None = None,
) -> None:
    """Route stdlib and structlog records through one structlog formatter.

    Args:
        settings: Supplies LOG_LEVEL, LOG_JSON and APP_ENV.
        level: Overrides ``settings.log_level`` (e.g. from ``--log-level``).
        stream: Destination, stderr by default so reports on stdout stay clean.
    """
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    renderer: structlog.types.Processor
    if wants_json(settings):
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(log_level)

    library_level = logging.DEBUG if log_level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def bind_context(**kwargs: object) -> None:
    """Bind key-value pairs (e.g. the slug) to every record of the current run."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
