"""Structured logging with structlog and forecasting run context.

Every event logged while a run is active carries the run_id and the
forecasting method, so the fit, predict and save events of one run can be
correlated.
"""

import logging
import uuid
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

import structlog

from forecastkit.core.config import get_settings

# Context variables for correlating all events of one forecasting run
run_id_ctx: ContextVar[str | None] = ContextVar("run_id", default=None)
method_ctx: ContextVar[str | None] = ContextVar("forecast_method", default=None)


@contextmanager
def bind_run(method: str) -> Iterator[str]:
    """Bind a fresh run_id and the forecasting method for the enclosed block.

    Args:
        method: Forecasting method of the run.

    Yields:
        The generated run_id.
    """
    run_id = uuid.uuid4().hex[:12]
    run_token = run_id_ctx.set(run_id)
    method_token = method_ctx.set(method)
    try:
        yield run_id
    finally:
        method_ctx.reset(method_token)
        run_id_ctx.reset(run_token)


def add_run_context(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Add run_id and method from context to log events.

    An explicit method= on the event wins over the bound one.
    """
    run_id = run_id_ctx.get()
    if run_id:
        event_dict["run_id"] = run_id
    method = method_ctx.get()
    if method:
        event_dict.setdefault("method", method)
    return event_dict


def configure_logging() -> None:
    """Configure structlog for the application."""
    settings = get_settings()

    shared_processors: list[structlog.types.Processor] = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        add_run_context,
    ]

    if settings.log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Get a configured logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module).

    Returns:
        Configured structlog logger with run context binding.
    """
    logger: structlog.typing.FilteringBoundLogger = structlog.get_logger(name)
    return logger
