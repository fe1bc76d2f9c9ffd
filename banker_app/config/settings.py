"""Immutable runtime configuration for the auto banker."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from .defaults import get_default_config

_DEFAULTS = get_default_config()


@dataclass(frozen=True)
class BankerConfig:
    """Startup configuration, resolved once and shared read-only."""

    # Akahu credentials
    app_token: str
    user_token: str

    # Accounts and amounts
    account_from: str
    account_to: str
    min_balance: Decimal
    topup_amount: Decimal

    # Monitoring
    poll_seconds: int

    # Capability secret embedded in the confirmation link
    webhook_secret: str

    # Resolved from options, environment or computed defaults
    web_url: str = ""
    supervisor_token: Optional[str] = None
    notifier: str = _DEFAULTS.notification.default_notifier

    currency: str = _DEFAULTS.currency
    host: str = _DEFAULTS.server.host
    port: int = _DEFAULTS.server.port
    http_timeout_seconds: float = _DEFAULTS.http_timeout_seconds
    log_level: str = _DEFAULTS.log_level
    log_json: bool = False

    @property
    def action_url(self) -> str:
        """Confirmation link carrying the webhook secret."""
        return f"{self.web_url.rstrip('/')}/transfer/{self.webhook_secret}"

    def redacted(self) -> dict[str, Any]:
        """Loggable view of the configuration with credentials truncated."""
        return {
            "app_id": self.app_token[:16] + "…",
            "user_token": self.user_token[:18] + "…",
            "account_from": self.account_from,
            "account_to": self.account_to,
            "min_balance": str(self.min_balance),
            "topup_amount": str(self.topup_amount),
            "poll_seconds": self.poll_seconds,
            "notifier": self.notifier,
        }
