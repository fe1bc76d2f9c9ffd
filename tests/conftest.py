"""Pytest configuration and shared fixtures."""

import pytest
from decimal import Decimal
from typing import Any, Dict, List, Optional

from banker_app.config.settings import BankerConfig
from banker_app.data.models import BalanceReading, Notification, TransferRequest, TransferResult
from banker_app.delivery.base import BaseNotifier, DeliveryResult, DeliveryStatus
from banker_app.errors import NotificationError

SECRET = "s3cret-capability"


class RecordingNotifier(BaseNotifier):
    """Notifier that keeps every notification it is asked to deliver."""

    def __init__(self, fail_with: Optional[Exception] = None):
        super().__init__("recording")
        self.sent: List[Notification] = []
        self.fail_with = fail_with

    def deliver(self, notification: Notification) -> DeliveryResult:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(notification)
        return DeliveryResult(
            status=DeliveryStatus.SUCCESS,
            notification_id=notification.notification_id
        )


class StubBalanceSource:
    """Balance source returning queued readings or raising queued errors."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls: List[str] = []

    def get_balance(self, account_id: str) -> BalanceReading:
        self.calls.append(account_id)
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


class StubTransferExecutor:
    """Transfer executor recording requests."""

    def __init__(self, result: Any = None):
        self.result = result if result is not None else TransferResult(transfer_id="tx_1")
        self.requests: List[TransferRequest] = []

    def create_transfer(self, request: TransferRequest) -> TransferResult:
        self.requests.append(request)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.fixture
def sample_options() -> Dict[str, Any]:
    """Add-on options as written by the Home Assistant Supervisor."""
    return {
        "akahu_app_id": "app_token_abcdefghijklmnopqrstuvwxyz",
        "akahu_user_token": "user_token_abcdefghijklmnopqrstuvwxyz",
        "account_from": "acc_savings",
        "account_to": "acc_everyday",
        "min_balance_nzd": 50.0,
        "topup_amount_nzd": 100,
        "poll_seconds": 300,
        "webhook_secret": SECRET,
    }


@pytest.fixture
def sample_environ() -> Dict[str, str]:
    return {"SUPERVISOR_TOKEN": "supervisor-token"}


@pytest.fixture
def banker_config() -> BankerConfig:
    return BankerConfig(
        app_token="app_token_abcdefghijklmnopqrstuvwxyz",
        user_token="user_token_abcdefghijklmnopqrstuvwxyz",
        account_from="acc_savings",
        account_to="acc_everyday",
        min_balance=Decimal("50.00"),
        topup_amount=Decimal("100"),
        poll_seconds=300,
        webhook_secret=SECRET,
        web_url="http://banker.local:8099",
        supervisor_token="supervisor-token",
    )


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def failing_notifier() -> RecordingNotifier:
    return RecordingNotifier(fail_with=NotificationError("HA service call failed 500: boom", status=500))


def reading(amount: str, currency: str = "NZD", account_id: str = "acc_everyday") -> BalanceReading:
    return BalanceReading(account_id=account_id, amount=Decimal(amount), currency=currency)


def akahu_account(current: Any, currency: str = "NZD", account_id: str = "acc_everyday") -> Dict[str, Any]:
    return {
        "success": True,
        "item": {
            "_id": account_id,
            "name": "Everyday",
            "balance": {"current": current, "available": current, "currency": currency},
        },
    }
