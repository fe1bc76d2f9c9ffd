"""
Value objects exchanged between the monitor, the confirmation endpoint and
the external collaborators.

Every hand-off is by value: these are immutable and none of them outlives the
poll cycle or confirmation request that produced it.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from ..config.defaults import get_default_config
from ..errors import CurrencyMismatchError

if TYPE_CHECKING:
    from ..config.settings import BankerConfig

_DEFAULTS = get_default_config()


@dataclass(frozen=True)
class BalanceReading:
    """Current balance of one account."""
    account_id: str
    amount: Decimal
    currency: str

    def require_currency(self, expected: str) -> "BalanceReading":
        """Return self, or raise if the balance is not in the expected currency."""
        if self.currency != expected:
            raise CurrencyMismatchError(
                expected=expected,
                actual=self.currency,
                context={"account_id": self.account_id}
            )
        return self

    def is_below(self, floor: Decimal) -> bool:
        """Low-balance condition: strictly below the floor."""
        return self.amount < floor


@dataclass(frozen=True)
class TransferRequest:
    """Fixed top-up transfer between the two configured accounts."""
    from_account: str
    to_account: str
    amount: Decimal
    currency: str
    note: str = _DEFAULTS.akahu.transfer_note

    @classmethod
    def from_config(cls, config: "BankerConfig") -> "TransferRequest":
        """Build the top-up transfer. Request input never reaches this."""
        return cls(
            from_account=config.account_from,
            to_account=config.account_to,
            amount=config.topup_amount,
            currency=config.currency,
        )


@dataclass(frozen=True)
class TransferResult:
    """Identifier of a transfer accepted by the bank."""
    transfer_id: str
    status: Optional[str] = None


@dataclass(frozen=True)
class Notification:
    """User-visible notification. The fixed id makes a new one replace the last."""
    title: str
    message: str
    action_url: Optional[str] = None
    notification_id: str = _DEFAULTS.notification.notification_id

    def render_message(self) -> str:
        """Message body with the action link appended as markdown."""
        if not self.action_url:
            return self.message
        return f"{self.message}\n\n[Transfer now]({self.action_url})"


def format_amount(amount: Decimal) -> str:
    """Format a currency amount with two decimal places."""
    return f"{amount:.2f}"
