"""
Balance threshold monitor.

Polls the destination account on a fixed interval and, whenever the balance is
strictly below the configured floor, sends a low-balance notification carrying
the confirmation link. Collaborator failures end the current cycle only.
"""

import threading
from datetime import datetime, timezone
from typing import Optional, Protocol

from .config.settings import BankerConfig
from .data.models import BalanceReading, Notification, format_amount
from .delivery.base import BaseNotifier
from .logging.config import get_monitor_logger

logger = get_monitor_logger(__name__)

LOW_BALANCE_TITLE = "Low balance"


class BalanceSource(Protocol):
    def get_balance(self, account_id: str) -> BalanceReading: ...


class ThresholdMonitor:
    """Poll loop comparing the destination balance against the floor."""

    def __init__(
        self,
        config: BankerConfig,
        balance_source: BalanceSource,
        notifier: BaseNotifier
    ) -> None:
        self.config = config
        self.balance_source = balance_source
        self.notifier = notifier
        self.logger = logger

        self.cycle_count = 0
        self.consecutive_failures = 0
        self.last_reading: Optional[BalanceReading] = None

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def build_action_url(self) -> str:
        """Confirmation link for the top-up."""
        return self.config.action_url

    def build_low_balance_notification(self, reading: BalanceReading) -> Notification:
        """Compose the low-balance notification for a reading."""
        cfg = self.config
        message = (
            f"Account {cfg.account_to} is {format_amount(reading.amount)} {cfg.currency} "
            f"(< {cfg.min_balance}). Will transfer {cfg.topup_amount} {cfg.currency} "
            f"from {cfg.account_from} if you confirm."
        )
        return Notification(
            title=LOW_BALANCE_TITLE,
            message=message,
            action_url=self.build_action_url()
        )

    def run_cycle(self) -> bool:
        """
        Run a single poll cycle.

        Returns:
            True if a low-balance notification was sent

        Raises:
            CollaboratorError: If the balance fetch or the notification fails,
                or the balance is not in the expected currency
        """
        reading = self.balance_source.get_balance(self.config.account_to)
        reading.require_currency(self.config.currency)
        self.last_reading = reading

        self.logger.info(
            "Current balance",
            account_id=self.config.account_to,
            balance=format_amount(reading.amount),
            currency=reading.currency,
            checked_at=datetime.now(timezone.utc).isoformat()
        )

        if not reading.is_below(self.config.min_balance):
            return False

        self.notifier.notify(self.build_low_balance_notification(reading))
        self.logger.info(
            "Low balance notification sent",
            balance=format_amount(reading.amount),
            min_balance=str(self.config.min_balance),
            topup_amount=str(self.config.topup_amount)
        )
        return True

    def run(self, stop_event: Optional[threading.Event] = None) -> None:
        """
        Poll until the stop event is set.

        Each cycle is isolated: any exception is logged and the next cycle
        starts after the usual interval. The stop event is checked between
        cycles and interrupts the sleep.
        """
        stop_event = stop_event or self._stop_event

        self.logger.info(
            "Balance monitor started",
            account_id=self.config.account_to,
            poll_seconds=self.config.poll_seconds
        )

        while not stop_event.is_set():
            self.cycle_count += 1
            try:
                self.run_cycle()
                self.consecutive_failures = 0
            except Exception as e:
                self.consecutive_failures += 1
                self.logger.error(
                    "Poll cycle failed",
                    cycle=self.cycle_count,
                    consecutive_failures=self.consecutive_failures,
                    error=str(e),
                    error_type=type(e).__name__
                )

            stop_event.wait(self.config.poll_seconds)

        self.logger.info("Balance monitor stopped", cycles=self.cycle_count)

    def start(self) -> threading.Thread:
        """Run the poll loop on a daemon thread."""
        if self._thread is not None and self._thread.is_alive():
            return self._thread

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self.run,
            args=(self._stop_event,),
            name="balance-monitor",
            daemon=True
        )
        self._thread.start()
        return self._thread

    def stop(self, timeout: Optional[float] = None) -> None:
        """Signal the poll loop to stop and wait for the current cycle to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
