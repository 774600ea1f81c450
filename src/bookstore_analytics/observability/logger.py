"""Logging bootstrap for the analytics engine.

Modules log through plain ``logging.getLogger(__name__)`` loggers. This
module routes those records through a structlog ``ProcessorFormatter`` on
the ``bookstore_analytics`` logger, so every line is rendered the same way
and carries the year and country of the query that produced it.

Usage::

    setup_logging(settings.observability)
    with query_scope(2024, "US"):
        index.best_seller_list(2024, "US")   # debug lines tagged year/country
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import IO, Any, Iterator

import structlog

from bookstore_analytics.core.config import ObservabilityConfig

PACKAGE_LOGGER = "bookstore_analytics"
_HANDLER_NAME = "bookstore_analytics.console"

_SCOPE_KEYS = ("year", "country")


def _drop_worldwide_scope(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: omit scope keys bound as None (worldwide queries)."""
    for key in _SCOPE_KEYS:
        if key in event_dict and event_dict[key] is None:
            del event_dict[key]
    return event_dict


def _renderer(log_format: str) -> Any:
    if log_format == "json":
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(config: ObservabilityConfig, stream: IO[str] | None = None) -> logging.Handler:
    """Install the structured handler on the package logger.

    Calling it again replaces the previously installed handler rather than
    stacking a second one. Returns the handler.
    """
    shared: list[Any] = [
        structlog.contextvars.merge_contextvars,
        _drop_worldwide_scope,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(config.log_format),
        ],
    )
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for old in [h for h in package_logger.handlers if h.get_name() == _HANDLER_NAME]:
        package_logger.removeHandler(old)
    package_logger.addHandler(handler)
    package_logger.setLevel(config.log_level)

    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return handler


@contextmanager
def query_scope(year: int, country: str | None = None) -> Iterator[None]:
    """Tag log records emitted inside the block with *year* and *country*."""
    with structlog.contextvars.bound_contextvars(year=year, country=country):
        yield
