"""CLI logging — structlog events rendered through stdlib logging on stderr."""

from __future__ import annotations

import logging
import os
import sys

import structlog


def setup_logging(level: str | None = None) -> None:
    """Route structlog events to stderr; stdout is reserved for the report.

    ARCHSENTINEL_LOG_LEVEL sets the level of ``archsentinel.*`` loggers
    (default WARNING) unless *level* is given. ARCHSENTINEL_LOG_FORMAT picks
    ``console`` (default) or ``json``. Third-party loggers stay at WARNING.
    """
    log_level = (level or os.environ.get("ARCHSENTINEL_LOG_LEVEL", "WARNING")).upper()
    as_json = os.environ.get("ARCHSENTINEL_LOG_FORMAT", "console").lower() == "json"

    processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if as_json:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=logging.WARNING, force=True)
    logging.getLogger("archsentinel").setLevel(log_level)

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
