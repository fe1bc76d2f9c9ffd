"""
Error classification for the auto banker.

Configuration errors are fatal at startup. Collaborator errors (Akahu, Home
Assistant) are recoverable: the monitor retries on its next cycle and the
confirmation endpoint turns them into a failure response and notification.
"""

from .collaborators import (
    CollaboratorError,
    BalanceFetchError,
    TransferError,
    NotificationError,
    MalformedResponseError,
    CurrencyMismatchError,
)
from .system_failures import (
    UnrecoverableError,
    ConfigurationError,
)

__all__ = [
    # Collaborator errors
    "CollaboratorError",
    "BalanceFetchError",
    "TransferError",
    "NotificationError",
    "MalformedResponseError",
    "CurrencyMismatchError",
    # System failures
    "UnrecoverableError",
    "ConfigurationError",
]
