"""
Main auto banker coordinator.

Wires the Akahu client, the notifier, the balance monitor and the confirmation
endpoint from one BankerConfig, then runs the two activities side by side:
the monitor on a daemon thread and the HTTP listener on the calling thread.
"""

from typing import Optional

import uvicorn
from fastapi import FastAPI

from .akahu.client import AkahuClient
from .api.app import create_app
from .config.settings import BankerConfig
from .confirmation import ConfirmationHandler, TransferExecutor
from .delivery.base import BaseNotifier
from .delivery.home_assistant import HomeAssistantNotifier
from .delivery.stdout_delivery import StdoutNotifier
from .logging import get_logger
from .monitor import BalanceSource, ThresholdMonitor

logger = get_logger(__name__)


def create_notifier(config: BankerConfig) -> BaseNotifier:
    """Build the notifier selected by the configuration."""
    if config.notifier == "stdout":
        return StdoutNotifier()

    return HomeAssistantNotifier(
        supervisor_token=config.supervisor_token,
        timeout_seconds=config.http_timeout_seconds
    )


class AutoBankerEngine:
    """
    Coordinator for the auto banker.

    The monitor and the endpoint share only the read-only configuration;
    they meet only through the user clicking the link.
    """

    def __init__(
        self,
        config: BankerConfig,
        akahu: Optional[AkahuClient] = None,
        notifier: Optional[BaseNotifier] = None,
        balance_source: Optional[BalanceSource] = None,
        transfer_executor: Optional[TransferExecutor] = None
    ) -> None:
        """Initialize the engine; collaborators default to the real clients."""
        self.config = config
        self.logger = logger

        if balance_source is None or transfer_executor is None:
            akahu = akahu or AkahuClient(
                app_token=config.app_token,
                user_token=config.user_token,
                timeout_seconds=config.http_timeout_seconds
            )
        self.balance_source = balance_source or akahu
        self.transfer_executor = transfer_executor or akahu
        self.notifier = notifier or create_notifier(config)

        self.monitor = ThresholdMonitor(config, self.balance_source, self.notifier)
        self.confirmation_handler = ConfirmationHandler(
            config, self.transfer_executor, self.notifier
        )
        self.app: FastAPI = create_app(self.confirmation_handler)

        self.logger.info("Auto banker engine initialized", notifier=self.notifier.name)

    def start_monitor(self) -> None:
        """Start the background poll loop."""
        self.monitor.start()

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Stop the poll loop between cycles."""
        self.monitor.stop(timeout)
        self.logger.info("Auto banker engine stopped")

    def run(self) -> None:
        """Run the monitor and serve the confirmation endpoint until interrupted."""
        self.start_monitor()
        try:
            self.logger.info(
                "Auto banker listening",
                host=self.config.host,
                port=self.config.port
            )
            uvicorn.run(
                self.app,
                host=self.config.host,
                port=self.config.port,
                log_level=self.config.log_level.lower()
            )
        finally:
            self.stop()
