"""
System failure error classifications for unrecoverable errors.

These exceptions stop the process before any monitoring or listening starts.
"""

from typing import Any, Dict, Optional


class UnrecoverableError(Exception):
    """Base class for errors that require human intervention."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class ConfigurationError(UnrecoverableError):
    """Missing or malformed startup options."""

    def __init__(self, message: str, problems: Optional[list] = None,
                 source: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.problems = problems or []
        self.source = source

    def __str__(self) -> str:
        if not self.problems:
            return super().__str__()
        details = "; ".join(str(problem) for problem in self.problems)
        return f"{super().__str__()}: {details}"
