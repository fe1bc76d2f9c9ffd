"""Home Assistant persistent notification delivery via the Supervisor API."""

import json
import socket
from typing import Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

from ..config.defaults import get_default_config
from ..data.models import Notification
from ..errors import NotificationError
from .base import BaseNotifier, DeliveryResult, DeliveryStatus

SERVICE = "persistent_notification/create"


class HomeAssistantNotifier(BaseNotifier):
    """Creates or replaces a persistent notification in Home Assistant."""

    def __init__(
        self,
        supervisor_token: str,
        api_url: Optional[str] = None,
        timeout_seconds: float = 30.0,
        name: str = "home_assistant"
    ):
        super().__init__(name)
        if not supervisor_token:
            raise NotificationError("Supervisor token is required")

        self.supervisor_token = supervisor_token
        self.api_url = (api_url or get_default_config().notification.api_url).rstrip('/')
        self.timeout_seconds = timeout_seconds

        parsed = urlparse(self.api_url)
        if not parsed.scheme or not parsed.netloc:
            raise NotificationError(f"Invalid Home Assistant API URL: {self.api_url}")

    def call_service(self, service: str, data: dict) -> str:
        """
        Call a Home Assistant service.

        Args:
            service: Service path, e.g. ``persistent_notification/create``
            data: Service data

        Returns:
            Response body

        Raises:
            NotificationError: With HTTP status and body on a non-success response
        """
        body = json.dumps(data).encode('utf-8')
        req = Request(
            f"{self.api_url}/services/{service}",
            data=body,
            headers={
                'Authorization': f'Bearer {self.supervisor_token}',
                'Content-Type': 'application/json',
                'User-Agent': 'auto-banker/1.0'
            },
            method='POST'
        )

        try:
            with urlopen(req, timeout=self.timeout_seconds) as response:
                response_code = response.getcode()
                response_data = response.read().decode('utf-8')

        except HTTPError as e:
            error_body = e.read().decode('utf-8', errors='replace')
            self.logger.warning(
                "Home Assistant service call failed",
                delivery_name=self.name,
                service=service,
                status=e.code,
                body=error_body[:200]
            )
            raise NotificationError(
                f"HA service call failed {e.code}: {error_body}",
                status=e.code,
                body=error_body,
                notification_id=data.get("notification_id")
            ) from e

        except (OSError, URLError, socket.timeout) as e:
            self.logger.warning(
                "Home Assistant network error",
                delivery_name=self.name,
                service=service,
                error=str(e)
            )
            raise NotificationError(
                f"HA service call failed: {e}",
                notification_id=data.get("notification_id")
            ) from e

        if not 200 <= response_code < 300:
            raise NotificationError(
                f"HA service call failed {response_code}: {response_data}",
                status=response_code,
                body=response_data,
                notification_id=data.get("notification_id")
            )

        return response_data

    def deliver(self, notification: Notification) -> DeliveryResult:
        """Deliver a notification as a persistent notification."""
        self.call_service(SERVICE, {
            "title": notification.title,
            "message": notification.render_message(),
            "notification_id": notification.notification_id,
        })

        self.logger.info(
            "Notification delivered",
            delivery_name=self.name,
            title=notification.title,
            notification_id=notification.notification_id
        )

        return DeliveryResult(
            status=DeliveryStatus.SUCCESS,
            notification_id=notification.notification_id
        )
