"""Structured logging configuration for hpecom."""

import logging
import sys
from typing import Any, Dict, Optional

import structlog
from structlog.types import Processor

from .config import get_settings


def setup_logging() -> None:
    """Configure structured logging for hpecom."""
    settings = get_settings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
    )

    # Configure structlog
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def set_level(level: str) -> None:
    """Change the root log level after setup (used by --verbose)."""
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_api_call(
    logger: structlog.stdlib.BoundLogger,
    service: str,
    method: str,
    uri: str,
    body: Optional[Any],
    whatif: bool,
    **kwargs: Any,
) -> None:
    """Log a REST API call."""
    log_data: Dict[str, Any] = {
        "api_service": service,
        "http_method": method,
        "uri": uri,
        "whatif": whatif,
    }

    # Payload summary only, bodies may carry e-mail addresses and keys
    if isinstance(body, dict) and body:
        log_data["payload_keys"] = list(body.keys())
        log_data["payload_size"] = len(str(body))

    log_data.update(kwargs)

    logger.info("api.call", **log_data)


# Initialize logging on module import
setup_logging()
