"""Structured logging configuration using structlog.

Every entry carries the service name and environment. While a workflow run is
in progress its ``execution_id`` and ``workflow_id`` are bound as context
variables, so log lines from executors, channels and the HTTP clients can be
correlated with the run record without passing ids around.
"""

import logging
import sys
from contextlib import contextmanager
from typing import Iterator

import structlog
from app.config import get_settings

_NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def _add_service_info(logger, method_name: str, event_dict: dict) -> dict:
    settings = get_settings()
    event_dict.setdefault("service", settings.APP_NAME)
    event_dict.setdefault("environment", settings.ENVIRONMENT)
    return event_dict


def _choose_renderer(log_format: str, is_development: bool):
    if log_format == "text" or (is_development and log_format != "json"):
        return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    return structlog.processors.JSONRenderer()


def setup_logging() -> None:
    """Configure structlog and route stdlib logging through it."""
    settings = get_settings()

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service_info,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

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
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _choose_renderer(settings.LOG_FORMAT.lower(), settings.is_development),
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.SQLALCHEMY_ECHO else logging.WARNING
    )


@contextmanager
def run_log_context(execution_id: str, workflow_id: str) -> Iterator[None]:
    """Bind run identifiers to every log entry emitted inside the block."""
    with structlog.contextvars.bound_contextvars(
        execution_id=execution_id,
        workflow_id=workflow_id,
    ):
        yield
