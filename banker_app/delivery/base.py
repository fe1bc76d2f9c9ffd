"""Base classes for notification delivery mechanisms."""

import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..data.models import Notification
from ..errors import NotificationError
from ..logging import get_logger


class DeliveryStatus(Enum):
    """Notification delivery status."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class DeliveryResult:
    """Result of a notification delivery attempt."""
    status: DeliveryStatus
    notification_id: str
    message: Optional[str] = None
    delivery_time_ms: Optional[int] = None


class BaseNotifier(ABC):
    """
    Base class for notifiers.

    Subclasses implement ``deliver``; callers use ``notify``, which records
    delivery statistics and converts unexpected failures to NotificationError.
    There is no retry: a failed notification is reported to the caller once.

    One notifier is shared by the monitor thread and the endpoint's worker
    threads, so the counters are only touched under ``_stats_lock``.
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = get_logger(f"notification.delivery.{name}")
        self._stats_lock = threading.Lock()
        self._delivery_count = 0
        self._error_count = 0

    @abstractmethod
    def deliver(self, notification: Notification) -> DeliveryResult:
        """
        Deliver one notification, creating or replacing it by id.

        Raises:
            NotificationError: If the destination rejected the notification
        """
        pass

    def notify(self, notification: Notification) -> DeliveryResult:
        """Deliver a notification and record the outcome."""
        start_time = time.time()

        try:
            result = self.deliver(notification)
        except NotificationError:
            self._record(success=False)
            raise
        except Exception as e:
            self._record(success=False)
            raise NotificationError(
                f"{self.name} delivery failed: {e}",
                notification_id=notification.notification_id
            ) from e

        result.delivery_time_ms = int((time.time() - start_time) * 1000)
        self._record(success=True)
        return result

    def _record(self, success: bool) -> None:
        with self._stats_lock:
            if success:
                self._delivery_count += 1
            else:
                self._error_count += 1

    def get_stats(self) -> dict[str, Any]:
        """Get delivery statistics."""
        with self._stats_lock:
            delivered = self._delivery_count
            failed = self._error_count

        return {
            "name": self.name,
            "delivery_count": delivered,
            "error_count": failed,
            "success_rate": delivered / (delivered + failed) if delivered + failed else 0.0
        }
