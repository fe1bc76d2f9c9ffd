"""
Logging configuration and utilities for the auto banker.
"""
from .config import (
    configure_logging,
    get_confirmation_logger,
    get_logger,
    get_monitor_logger,
    log_confirmation_transition,
)

__all__ = [
    "configure_logging",
    "get_confirmation_logger",
    "get_logger",
    "get_monitor_logger",
    "log_confirmation_transition",
]
