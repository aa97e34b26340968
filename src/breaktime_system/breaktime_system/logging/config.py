"""
Centralized logging configuration for the break-time system.

All components log through structlog so lifecycle events carry the same
key/value context (user_id, break_id, break_type) whatever the renderer.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )
    logging.getLogger().setLevel(log_level)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)
    """
    return structlog.get_logger(name)


def log_state_transition(
    logger: FilteringBoundLogger,
    break_id: int,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a break state transition (NONE -> ACTIVE -> ENDED) with standardized format.
    """
    bound_logger = logger.bind(
        break_id=break_id,
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )
    if context:
        bound_logger = bound_logger.bind(**context)
    bound_logger.info("break_state_transition")


def log_break_rejected(
    logger: FilteringBoundLogger,
    reason: str,
    user_id: int,
    context: Optional[dict[str, Any]] = None
) -> None:
    bound_logger = logger.bind(reason=reason, user_id=user_id)
    if context:
        bound_logger = bound_logger.bind(**context)
    bound_logger.warning("break_rejected")
