"""Default configuration parameters for the auto banker."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ServerParams:
    """Confirmation listener parameters."""
    host: str = "0.0.0.0"                 # Reachable through the ingress proxy
    port: int = 8099


@dataclass(frozen=True)
class AkahuParams:
    """Akahu API parameters."""
    api_url: str = "https://api.akahu.io/v1"
    app_token_prefix: str = "app_token_"
    user_token_prefix: str = "user_token_"
    transfer_note: str = "HA auto-move"


@dataclass(frozen=True)
class NotificationParams:
    """Home Assistant notification parameters."""
    api_url: str = "http://supervisor/core/api"
    notification_id: str = "auto-banker"  # Fixed id, new notices replace old ones
    web_url_template: str = "http://homeassistant.local:8123/api/webhook/auto-banker-{secret}"
    default_notifier: str = "home_assistant"


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    server: ServerParams
    akahu: AkahuParams
    notification: NotificationParams
    currency: str = "NZD"
    http_timeout_seconds: float = 30.0
    log_level: str = "INFO"


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        server=ServerParams(),
        akahu=AkahuParams(),
        notification=NotificationParams(),
    )
