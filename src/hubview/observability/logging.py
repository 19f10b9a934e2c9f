"""Structured logging configuration.

Features:
- JSON and text format support
- Service context injection
- Context variable merging (e.g. the cluster being fetched)

Logs are written to stderr; stdout carries command output only.
"""

import logging
import sys
from datetime import datetime, timezone

import structlog
from structlog.types import EventDict, Processor

from hubview import __version__
from hubview.config import LogFormat, LogLevel

SERVICE_NAME = "hubview"


def add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add service context to log events."""
    event_dict["service"] = SERVICE_NAME
    event_dict["version"] = __version__
    return event_dict


def add_timestamp(
    logger: logging.Logger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add ISO 8601 timestamp."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def setup_logging(
    log_level: LogLevel | str = LogLevel.WARNING,
    log_format: LogFormat | str = LogFormat.TEXT,
) -> None:
    """Configure structured logging for the command line.

    Args:
        log_level: Minimum level to emit
        log_format: ``json`` for machine-readable output, ``text`` otherwise
    """
    # Handle both enum and string values
    level_str = log_level.value if hasattr(log_level, "value") else str(log_level).upper()
    numeric_level = getattr(logging, level_str)

    logging.basicConfig(
        level=numeric_level,
        stream=sys.stderr,
        format="%(message)s",
        force=True,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_timestamp,
        add_service_context,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    fmt_str = log_format.value if hasattr(log_format, "value") else str(log_format).lower()
    if fmt_str == LogFormat.JSON.value:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # The kubernetes client logs every retry of urllib3 at WARNING
    logging.getLogger("urllib3").setLevel(logging.ERROR)
    logging.getLogger("kubernetes").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (defaults to module name)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_api_call_start(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    resource: str,
) -> None:
    """Log start of a Kubernetes API call."""
    logger.debug(
        "API call started",
        api_operation=operation,
        api_resource=resource,
    )


def log_api_call_end(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    resource: str,
    success: bool,
    duration_ms: float,
    error: str | None = None,
) -> None:
    """Log completion of a Kubernetes API call."""
    log_data = {
        "api_operation": operation,
        "api_resource": resource,
        "success": success,
        "duration_ms": round(duration_ms, 2),
    }
    if error:
        log_data["error"] = error

    logger.debug("API call completed", **log_data)
