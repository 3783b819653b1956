"""Structured logging configuration for the gmetric client"""
import logging
import os
import sys
from typing import Any, Dict, Sequence
import structlog
from structlog.stdlib import LoggerFactory
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer, TimeStamper, StackInfoRenderer


def setup_structured_logging(config) -> None:
    """Setup structured logging with JSON format for production and console for development"""

    # Configure processors
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        TimeStamper(fmt="iso"),
        StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    # Use JSON renderer for production, console for development
    is_development = os.getenv("ENVIRONMENT", "production").lower() == "development"
    if is_development:
        processors.append(ConsoleRenderer())
    else:
        processors.append(JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, config.log_level.upper())
    handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    handlers.append(console_handler)

    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(config.log_file))
        file_handler.setLevel(level)
        handlers.append(file_handler)

    # Configure root logger, replacing handlers from any earlier setup
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=handlers,
        force=True
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)


def log_client_open(logger: structlog.stdlib.BoundLogger, destinations: Sequence[Any], opened: int, failures: int = 0) -> None:
    """Log the outcome of opening a client"""
    logger.info(
        "Client opened",
        destinations=[str(d) for d in destinations],
        opened=opened,
        failures=failures,
        degraded=failures > 0 and opened > 0,
        event_type="gmetric_open"
    )


def log_client_close(logger: structlog.stdlib.BoundLogger, closed: int, failures: int = 0) -> None:
    """Log the outcome of closing a client"""
    logger.info(
        "Client closed",
        closed=closed,
        failures=failures,
        event_type="gmetric_close"
    )


def log_error(logger: structlog.stdlib.BoundLogger, error: Exception, context: Dict[str, Any] = None) -> None:
    """Log a client error, listing each destination failure of an aggregate"""
    failures = list(getattr(error, "errors", [error]))
    logger.error(
        "Client operation failed",
        error_type=type(error).__name__,
        failure_count=len(failures),
        failures=[
            {"destination": str(getattr(f, "destination", "")), "error": str(getattr(f, "cause", f))}
            for f in failures
        ],
        context=context or {},
        event_type="gmetric_error"
    )
