"""Configuration validation utilities."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from .defaults import get_default_config

NOTIFIERS = ("home_assistant", "stdout")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


def _is_number(value: Any) -> bool:
    # NaN and Infinity parse as Decimal but are not amounts
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, str)):
        return False
    try:
        return Decimal(str(value)).is_finite()
    except (InvalidOperation, ValueError):
        return False


class ConfigValidator:
    """Validates raw options before they become a BankerConfig."""

    @staticmethod
    def validate_credentials(options: dict[str, Any]) -> list[ValidationError]:
        """Validate Akahu credentials are present and carry their type prefix."""
        errors = []
        akahu = get_default_config().akahu

        for field, prefix in (
            ("akahu_app_id", akahu.app_token_prefix),
            ("akahu_user_token", akahu.user_token_prefix),
        ):
            value = options.get(field)
            if not value or not isinstance(value, str):
                errors.append(ValidationError(
                    field=field,
                    message="Is required",
                    value=None
                ))
            elif not value.startswith(prefix):
                # Never echo the credential itself
                errors.append(ValidationError(
                    field=field,
                    message=f"Looks wrong (should start with {prefix})",
                    value=value[:len(prefix)] + "…"
                ))

        return errors

    @staticmethod
    def validate_accounts(options: dict[str, Any]) -> list[ValidationError]:
        """Validate account identifiers."""
        errors = []

        for field in ("account_from", "account_to"):
            value = options.get(field)
            if not value or not isinstance(value, str):
                errors.append(ValidationError(
                    field=field,
                    message="Must be a non-empty account id",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_amounts(options: dict[str, Any]) -> list[ValidationError]:
        """Validate balance threshold and top-up amount."""
        errors = []

        for field in ("min_balance_nzd", "topup_amount_nzd"):
            value = options.get(field)
            if not _is_number(value) or Decimal(str(value)) < 0:
                errors.append(ValidationError(
                    field=field,
                    message="Must be a non-negative number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_monitoring(options: dict[str, Any]) -> list[ValidationError]:
        """Validate poll interval, secret and optional runtime settings."""
        errors = []

        value = options.get("poll_seconds")
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            errors.append(ValidationError(
                field="poll_seconds",
                message="Must be a positive integer",
                value=value
            ))

        value = options.get("webhook_secret")
        if not value or not isinstance(value, str):
            errors.append(ValidationError(
                field="webhook_secret",
                message="Must be a non-empty string",
                value=None
            ))

        if "notifier" in options:
            value = options["notifier"]
            if value not in NOTIFIERS:
                errors.append(ValidationError(
                    field="notifier",
                    message=f"Must be one of {', '.join(NOTIFIERS)}",
                    value=value
                ))

        if "http_timeout_seconds" in options:
            value = options["http_timeout_seconds"]
            if not _is_number(value) or Decimal(str(value)) <= 0:
                errors.append(ValidationError(
                    field="http_timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        if "port" in options:
            value = options["port"]
            if isinstance(value, bool) or not isinstance(value, int) or not 0 < value < 65536:
                errors.append(ValidationError(
                    field="port",
                    message="Must be a TCP port number",
                    value=value
                ))

        if "log_level" in options:
            value = options["log_level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="log_level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        if "log_json" in options:
            value = options["log_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="log_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_options(options: dict[str, Any]) -> list[ValidationError]:
        """Validate the complete options mapping."""
        errors = []
        errors.extend(ConfigValidator.validate_credentials(options))
        errors.extend(ConfigValidator.validate_accounts(options))
        errors.extend(ConfigValidator.validate_amounts(options))
        errors.extend(ConfigValidator.validate_monitoring(options))
        return errors
