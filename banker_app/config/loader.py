"""Configuration loader with options > environment > computed precedence."""

import os
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from ..errors import ConfigurationError
from .defaults import DefaultConfig, get_default_config
from .settings import BankerConfig
from .validation import ConfigValidator

SUPERVISOR_TOKEN_ENV = "SUPERVISOR_TOKEN"
WEB_URL_ENV = "ADDON_WEB_URL"


@dataclass(frozen=True)
class ConfigLoader:
    """Builds the immutable BankerConfig from the add-on options file."""

    defaults: DefaultConfig
    environ: Mapping[str, str]

    @classmethod
    def create(cls, environ: Optional[Mapping[str, str]] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if environ is None:
            environ = dict(os.environ)

        return cls(
            defaults=get_default_config(),
            environ=environ,
        )

    def read_options(self, options_path: Union[str, Path]) -> dict[str, Any]:
        """Read the options file. YAML parsing accepts the add-on JSON file as is."""
        path = Path(options_path)

        if not path.exists():
            raise ConfigurationError(
                "Options file not found",
                source=str(path)
            )

        try:
            with open(path, encoding="utf-8") as f:
                options = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Options file is not valid JSON or YAML: {e}",
                source=str(path)
            ) from e

        if not isinstance(options, dict):
            raise ConfigurationError(
                "Options file must contain a mapping",
                source=str(path)
            )

        return options

    def load(self, options_path: Union[str, Path]) -> BankerConfig:
        """Read, validate and resolve the options file."""
        return self.from_options(self.read_options(options_path), source=str(options_path))

    def from_options(self, options: dict[str, Any], source: Optional[str] = None) -> BankerConfig:
        """Validate raw options and resolve environment-derived values."""
        problems = ConfigValidator.validate_options(options)
        if problems:
            raise ConfigurationError(
                "Invalid auto banker options",
                problems=problems,
                source=source
            )

        notifier = options.get("notifier", self.defaults.notification.default_notifier)
        supervisor_token = self.environ.get(SUPERVISOR_TOKEN_ENV) or None
        if notifier == "home_assistant" and not supervisor_token:
            raise ConfigurationError(
                f"{SUPERVISOR_TOKEN_ENV} is not set; it is required by the home_assistant notifier",
                source=source
            )

        return BankerConfig(
            app_token=options["akahu_app_id"],
            user_token=options["akahu_user_token"],
            account_from=options["account_from"],
            account_to=options["account_to"],
            min_balance=Decimal(str(options["min_balance_nzd"])),
            topup_amount=Decimal(str(options["topup_amount_nzd"])),
            poll_seconds=options["poll_seconds"],
            webhook_secret=options["webhook_secret"],
            web_url=self.resolve_web_url(options),
            supervisor_token=supervisor_token,
            notifier=notifier,
            currency=self.defaults.currency,
            host=self.defaults.server.host,
            port=options.get("port", self.defaults.server.port),
            http_timeout_seconds=float(
                options.get("http_timeout_seconds", self.defaults.http_timeout_seconds)
            ),
            log_level=str(options.get("log_level", self.defaults.log_level)).upper(),
            log_json=options.get("log_json", False),
        )

    def resolve_web_url(self, options: dict[str, Any]) -> str:
        """
        Resolve the base of the confirmation link.

        Priority order:
        1. ``web_url`` option (highest priority)
        2. ``ADDON_WEB_URL`` environment variable
        3. Computed Home Assistant webhook URL (lowest priority)
        """
        explicit = options.get("web_url")
        if explicit:
            return str(explicit)

        from_env = self.environ.get(WEB_URL_ENV)
        if from_env:
            return from_env

        return self.defaults.notification.web_url_template.format(
            secret=options["webhook_secret"]
        )
