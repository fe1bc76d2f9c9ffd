"""Tests for the error classification system."""

from banker_app.errors import (
    BalanceFetchError,
    CollaboratorError,
    ConfigurationError,
    CurrencyMismatchError,
    MalformedResponseError,
    NotificationError,
    TransferError,
    UnrecoverableError,
)
from banker_app.config.validation import ValidationError


class TestErrorClassification:

    def test_collaborator_errors_are_recoverable(self) -> None:
        for error in (
            BalanceFetchError("down", account_id="acc_1"),
            TransferError("declined", status=400, body="no"),
            NotificationError("HA down", status=502),
            MalformedResponseError("bad json", service="akahu"),
            CurrencyMismatchError(expected="NZD", actual="USD"),
        ):
            assert isinstance(error, CollaboratorError)
            assert error.recoverable is True

    def test_default_services(self) -> None:
        assert BalanceFetchError("x").service == "akahu"
        assert TransferError("x").service == "akahu"
        assert NotificationError("x").service == "home_assistant"
        assert CurrencyMismatchError("NZD", None).service == "akahu"

    def test_transfer_error_details(self) -> None:
        error = TransferError("failed 400: insufficient funds", status=400, body="insufficient funds")
        assert error.status == 400
        assert error.body == "insufficient funds"
        assert str(error) == "failed 400: insufficient funds"

    def test_currency_mismatch_message(self) -> None:
        error = CurrencyMismatchError(expected="NZD", actual=None)
        assert str(error) == "Expected NZD, got None"

    def test_configuration_error_is_unrecoverable(self) -> None:
        problems = [ValidationError(field="poll_seconds", message="Must be a positive integer", value=0)]
        error = ConfigurationError("Invalid auto banker options", problems=problems, source="/data/options.json")

        assert isinstance(error, UnrecoverableError)
        assert error.recoverable is False
        assert error.source == "/data/options.json"
        assert str(error) == "Invalid auto banker options: poll_seconds: Must be a positive integer"

    def test_configuration_error_without_problems(self) -> None:
        assert str(ConfigurationError("Options file not found")) == "Options file not found"
