"""
Collaborator error classifications for external service calls.

Every call to Akahu or Home Assistant that fails raises one of these. They are
recovered locally and never terminate the process.
"""

from typing import Any, Dict, Optional


class CollaboratorError(Exception):
    """Base class for failures of an external collaborator."""

    def __init__(self, message: str, service: Optional[str] = None,
                 status: Optional[int] = None, body: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.service = service
        self.status = status
        self.body = body
        self.context = context or {}
        self.recoverable = True


class BalanceFetchError(CollaboratorError):
    """Balance could not be read from the bank."""

    def __init__(self, message: str, account_id: Optional[str] = None, **kwargs):
        kwargs.setdefault("service", "akahu")
        super().__init__(message, **kwargs)
        self.account_id = account_id


class TransferError(CollaboratorError):
    """The bank rejected or failed to accept a transfer."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("service", "akahu")
        super().__init__(message, **kwargs)


class NotificationError(CollaboratorError):
    """A notification could not be delivered."""

    def __init__(self, message: str, notification_id: Optional[str] = None, **kwargs):
        kwargs.setdefault("service", "home_assistant")
        super().__init__(message, **kwargs)
        self.notification_id = notification_id


class MalformedResponseError(CollaboratorError):
    """A collaborator answered with an unexpected payload shape."""

    def __init__(self, message: str, expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.expected_format = expected_format


class CurrencyMismatchError(CollaboratorError):
    """Balance reported in a currency other than the expected one."""

    def __init__(self, expected: str, actual: Optional[str], **kwargs):
        kwargs.setdefault("service", "akahu")
        super().__init__(f"Expected {expected}, got {actual}", **kwargs)
        self.expected = expected
        self.actual = actual
