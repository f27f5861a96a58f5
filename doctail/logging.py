"""structlog wiring for processes that host doctail."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

PACKAGE_LOGGER = "doctail"


def _processors(*, json: bool) -> list[structlog.types.Processor]:
    chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    # JSON consumers get tracebacks as structured data, the console renders them itself
    if json:
        chain.append(structlog.processors.dict_tracebacks)
    return chain


def setup_logging(
    *,
    json: bool = True,
    level: str = "INFO",
    package_level: str | None = None,
    stream: TextIO | None = None,
    cache_loggers: bool = True,
) -> None:
    """Route doctail's structlog events through stdlib logging.

    ``package_level`` sets the ``doctail`` logger separately from the
    root, e.g. ``"ERROR"`` to mute per-item conversion warnings in a
    noisy feed.  ``cache_loggers=False`` is for processes that swap the
    structlog configuration later (log capture in tests).  Records go to
    *stream*, stdout by default.
    """
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_processors(json=json),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=cache_loggers,
    )

    handler = logging.StreamHandler(sys.stdout if stream is None else stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())

    package = logging.getLogger(PACKAGE_LOGGER)
    package.setLevel(package_level.upper() if package_level else logging.NOTSET)
