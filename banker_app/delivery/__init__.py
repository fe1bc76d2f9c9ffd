"""
Notification delivery mechanisms.
"""
from .base import BaseNotifier, DeliveryResult, DeliveryStatus
from .home_assistant import HomeAssistantNotifier
from .stdout_delivery import StdoutNotifier

__all__ = [
    "BaseNotifier",
    "DeliveryResult",
    "DeliveryStatus",
    "HomeAssistantNotifier",
    "StdoutNotifier",
]
