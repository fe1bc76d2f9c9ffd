"""
Centralized logging configuration for the auto banker.

This module provides standardized logging configuration using structlog
for all components. The monitor loop, the confirmation endpoint and the
collaborator clients all log through this configuration so that poll cycles
and confirmation requests read the same way in the add-on log.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(level: str = "INFO", format_json: bool = False) -> None:
    """
    Configure structlog for the add-on.

    Everything is written to stdout, which the Supervisor shows as the add-on
    log. ``__main__`` calls this before the options are validated, so a bad
    options file is still reported in the configured format.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output one JSON object per line; otherwise
            human-readable key=value lines
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(stream=sys.stdout, format="%(message)s")
    logging.getLogger().setLevel(log_level)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]

    # The Supervisor log panel does not render colour
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

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_monitor_logger(name: str) -> FilteringBoundLogger:
    """Get a logger bound to the balance monitor subsystem."""
    return structlog.get_logger(name, subsystem="monitor")


def get_confirmation_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger specifically configured for confirmation requests.

    Every confirmation request may move money, so its log lines are bound
    with an audit marker that can be filtered on in the add-on log.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for confirmation requests
    """
    return structlog.get_logger(
        name,
        subsystem="confirmation",
        audit_trail=True
    )


def log_confirmation_transition(
    logger: FilteringBoundLogger,
    request_id: str,
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a confirmation state transition with standardized format.

    Args:
        logger: Structlog logger instance
        request_id: ID of the confirmation request
        from_state: Current state
        to_state: Target state
        trigger: What triggered the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        request_id=request_id,
        from_state=from_state,
        to_state=to_state,
        trigger=trigger
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Confirmation state transition")
