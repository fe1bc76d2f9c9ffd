"""
Akahu payload parsers for converting raw API responses to value objects.

Akahu wraps single resources as ``{"success": true, "item": {...}}``. Amounts
arrive as JSON numbers and are converted through ``str`` so that 42.1 becomes
Decimal("42.1") rather than its binary float expansion.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from ..errors import MalformedResponseError
from .models import BalanceReading, TransferResult


def _unwrap_item(payload: Any, resource: str) -> dict[str, Any]:
    """Return the ``item`` of an Akahu envelope."""
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            f"Akahu {resource} response is not an object",
            service="akahu",
            expected_format='{"success": true, "item": {...}}'
        )

    if payload.get("success") is False:
        raise MalformedResponseError(
            f"Akahu {resource} response reported failure: {payload.get('message')}",
            service="akahu",
            body=str(payload)
        )

    item = payload.get("item")
    if not isinstance(item, dict):
        raise MalformedResponseError(
            f"Akahu {resource} response has no item",
            service="akahu",
            expected_format='{"success": true, "item": {...}}'
        )

    return item


def parse_decimal(value: Any, field: str) -> Decimal:
    """Convert a JSON number or numeric string to Decimal."""
    if value is None or isinstance(value, bool):
        raise MalformedResponseError(f"Missing numeric field: {field}", service="akahu")

    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise MalformedResponseError(
            f"Invalid numeric field {field}: {value!r}",
            service="akahu"
        ) from e


def parse_account_balance(payload: Any, account_id: str) -> BalanceReading:
    """
    Parse an Akahu account response into a BalanceReading.

    Args:
        payload: Decoded JSON from ``GET /accounts/{id}``
        account_id: Account the balance was requested for

    Returns:
        BalanceReading with the current balance and its currency

    Raises:
        MalformedResponseError: If the balance block is missing or invalid
    """
    item = _unwrap_item(payload, "account")

    balance = item.get("balance")
    if not isinstance(balance, dict):
        raise MalformedResponseError(
            "Akahu account has no balance",
            service="akahu",
            expected_format='{"balance": {"current": 0.0, "currency": "NZD"}}',
            context={"account_id": account_id}
        )

    return BalanceReading(
        account_id=item.get("_id", account_id),
        amount=parse_decimal(balance.get("current"), "balance.current"),
        currency=balance.get("currency"),
    )


def parse_transfer(payload: Any) -> TransferResult:
    """Parse an Akahu transfer response into a TransferResult."""
    item = _unwrap_item(payload, "transfer")

    transfer_id = item.get("_id")
    if not transfer_id:
        raise MalformedResponseError(
            "Akahu transfer has no _id",
            service="akahu",
            body=str(payload)[:200]
        )

    return TransferResult(transfer_id=str(transfer_id), status=item.get("status"))
