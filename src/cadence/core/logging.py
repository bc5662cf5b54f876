"""
Structured logging for cadence.

cadence itself logs only at ``debug`` level: failed retry attempts, unsatisfied
poll attempts, and deferred debounce/throttle calls. Library loggers are
structlog wrappers around standard-library loggers under the ``cadence``
namespace, which carries a ``NullHandler``; nothing is printed until the
application configures logging, either with :func:`configure_logging` or its
own ``logging`` setup.

Architecture:
    ::

        configure_logging(level="DEBUG", json_format=None, service="cadence")
            │
            ▼
        structlog processor chain:
          1. filter_by_level
          2. TimeStamper(iso)
          3. merge_contextvars
          4. add_log_level / add_logger_name
          5. add_service_metadata
          6. JSONRenderer (not a tty) or ConsoleRenderer (tty)
            │
            ▼
        stdlib root logger ── StreamHandler(stdout, "%(message)s")

        logger = get_logger(__name__)
        logger.debug("retry_attempt_failed", attempt=2, delay=0.5)

Examples:
    >>> from cadence.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=True, service="billing")
    >>> get_logger("billing.sync").debug("poll_attempt_unsatisfied", attempt=1)

Guardrails:
    - Arguments unset on ``configure_logging`` fall back to ``CadenceSettings``
    - Auto-detects JSON vs console based on TTY
    - Unconfigured, library events stop at the ``cadence`` NullHandler

Tags:
    logging, structlog, observability, cadence

Doc-Types:
    api-reference
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from cadence.core.settings import get_settings

_SERVICE_NAME = "cadence"

logging.getLogger("cadence").addHandler(logging.NullHandler())


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def configure_logging(
    level: str | None = None,
    json_format: bool | None = None,
    service: str | None = None,
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for the application.

    Replaces the root logger's handlers with a single stdout handler.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR); defaults to settings
        json_format: True for JSON, False for console, None for settings/auto
        service: Service name to include in logs; defaults to settings
        add_timestamp: Include ISO timestamp in logs

    Example:
        # Production (JSON for log aggregation)
        configure_logging(level="INFO", json_format=True, service="billing")

        # Development (auto-detect: colored console if tty)
        configure_logging(level="DEBUG")
    """
    global _SERVICE_NAME
    settings = get_settings()

    level = (level or settings.log_level).upper()
    if json_format is None:
        json_format = settings.log_json
    if json_format is None:
        json_format = not sys.stdout.isatty()
    _SERVICE_NAME = service or settings.service_name

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[structlog.stdlib.filter_by_level, *shared_processors, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
        force=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``).

    The logger wraps ``logging.getLogger(name)``, so level filtering and
    handlers follow the standard-library configuration while processors
    follow the current structlog configuration.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs.

    Example:
        bind_context(job="nightly-sync")
        logger.debug("retry_attempt_failed")  # Includes job
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context."""
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Context manager for scoped logging context.

    Example:
        with LogContext(job="nightly-sync"):
            await retry(fetch, 3, 0.5)
        # Context cleared here
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    def __exit__(self, *args) -> None:
        unbind_context(*self._context.keys())

    async def __aenter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    async def __aexit__(self, *args) -> None:
        unbind_context(*self._context.keys())


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
]
