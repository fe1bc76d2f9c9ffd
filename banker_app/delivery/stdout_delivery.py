"""Standard output notification delivery, for running outside Home Assistant."""

import json
import sys
from datetime import datetime, timezone

from ..data.models import Notification
from .base import BaseNotifier, DeliveryResult, DeliveryStatus


class StdoutNotifier(BaseNotifier):
    """Prints each notification as one JSON line."""

    def __init__(self, name: str = "stdout", stream=None):
        super().__init__(name)
        self.stream = stream

    def deliver(self, notification: Notification) -> DeliveryResult:
        """Deliver a notification to stdout."""
        output = json.dumps({
            "notification_id": notification.notification_id,
            "title": notification.title,
            "message": notification.render_message(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })
        print(output, file=self.stream or sys.stdout, flush=True)

        self.logger.info(
            "Notification printed to stdout",
            delivery_name=self.name,
            title=notification.title
        )

        return DeliveryResult(
            status=DeliveryStatus.SUCCESS,
            notification_id=notification.notification_id,
            message="Printed to stdout"
        )
