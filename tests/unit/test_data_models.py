"""Unit tests for value objects and Akahu payload parsing."""

import pytest
from decimal import Decimal

from banker_app.data.models import Notification, TransferRequest, format_amount
from banker_app.data.parsers import parse_account_balance, parse_transfer
from banker_app.errors import CurrencyMismatchError, MalformedResponseError

from conftest import akahu_account, reading


class TestBalanceReading:

    @pytest.mark.parametrize("amount,expected", [
        ("42.10", True),
        ("49.99", True),
        ("50.00", False),
        ("50", False),
        ("60.00", False),
    ])
    def test_is_below_is_strict(self, amount, expected) -> None:
        assert reading(amount).is_below(Decimal("50.00")) is expected

    def test_require_currency_passes(self) -> None:
        r = reading("10")
        assert r.require_currency("NZD") is r

    def test_require_currency_mismatch(self) -> None:
        with pytest.raises(CurrencyMismatchError) as exc_info:
            reading("10", currency="AUD").require_currency("NZD")

        assert exc_info.value.expected == "NZD"
        assert exc_info.value.actual == "AUD"
        assert str(exc_info.value) == "Expected NZD, got AUD"


class TestTransferRequest:

    def test_from_config_uses_configured_values(self, banker_config) -> None:
        request = TransferRequest.from_config(banker_config)
        assert request.from_account == "acc_savings"
        assert request.to_account == "acc_everyday"
        assert request.amount == Decimal("100")
        assert request.currency == "NZD"
        assert request.note == "HA auto-move"


class TestNotification:

    def test_default_id_is_fixed(self) -> None:
        first = Notification(title="a", message="b")
        second = Notification(title="c", message="d", action_url="http://x")
        assert first.notification_id == second.notification_id == "auto-banker"

    def test_render_message_with_link(self) -> None:
        n = Notification(title="Low balance", message="Top up?", action_url="http://x/transfer/s")
        assert n.render_message() == "Top up?\n\n[Transfer now](http://x/transfer/s)"

    def test_render_message_without_link(self) -> None:
        assert Notification(title="t", message="done").render_message() == "done"

    def test_format_amount(self) -> None:
        assert format_amount(Decimal("42.1")) == "42.10"
        assert format_amount(Decimal("5")) == "5.00"


class TestAkahuParsers:

    def test_parse_account_balance(self) -> None:
        result = parse_account_balance(akahu_account(42.1), "acc_everyday")
        assert result.amount == Decimal("42.1")
        assert result.currency == "NZD"
        assert result.account_id == "acc_everyday"

    def test_parse_account_balance_without_balance(self) -> None:
        payload = {"success": True, "item": {"_id": "acc_everyday"}}
        with pytest.raises(MalformedResponseError, match="no balance"):
            parse_account_balance(payload, "acc_everyday")

    def test_parse_account_balance_missing_current(self) -> None:
        payload = {"success": True, "item": {"balance": {"currency": "NZD"}}}
        with pytest.raises(MalformedResponseError, match="balance.current"):
            parse_account_balance(payload, "acc_everyday")

    def test_parse_reported_failure(self) -> None:
        with pytest.raises(MalformedResponseError, match="reported failure"):
            parse_account_balance({"success": False, "message": "Unauthorized"}, "acc")

    def test_parse_non_object(self) -> None:
        with pytest.raises(MalformedResponseError):
            parse_account_balance(["not", "a", "dict"], "acc")

    def test_parse_transfer(self) -> None:
        result = parse_transfer({"success": True, "item": {"_id": "transfer_123", "status": "PENDING"}})
        assert result.transfer_id == "transfer_123"
        assert result.status == "PENDING"

    def test_parse_transfer_without_id(self) -> None:
        with pytest.raises(MalformedResponseError, match="_id"):
            parse_transfer({"success": True, "item": {"status": "PENDING"}})
