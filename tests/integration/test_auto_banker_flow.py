"""
Integration tests for the full low-balance to top-up flow.

The monitor and the endpoint are wired by the engine around stub collaborators
and only meet through the link in the notification, as a user would.
"""

import threading
from dataclasses import replace
from urllib.parse import urlparse

from fastapi.testclient import TestClient

from banker_app.data.models import TransferResult
from banker_app.engine import AutoBankerEngine, create_notifier
from banker_app.delivery import HomeAssistantNotifier, StdoutNotifier
from banker_app.errors import BalanceFetchError, TransferError

from conftest import StubBalanceSource, StubTransferExecutor, reading


class BlockingBalanceSource:
    """Balance source whose fetch stays in flight until released."""

    def __init__(self, result):
        self.result = result
        self.entered = threading.Event()
        self.release = threading.Event()

    def get_balance(self, account_id: str):
        self.entered.set()
        self.release.wait(timeout=5)
        return self.result


class StopAfter:
    def __init__(self, waits: int):
        self.remaining = waits

    def is_set(self) -> bool:
        return self.remaining <= 0

    def wait(self, timeout=None) -> bool:
        self.remaining -= 1
        return self.is_set()


def make_engine(config, notifier, source, executor) -> AutoBankerEngine:
    return AutoBankerEngine(
        config,
        notifier=notifier,
        balance_source=source,
        transfer_executor=executor
    )


class TestLowBalanceToTopUp:

    def test_click_link_from_notification(self, banker_config, notifier) -> None:
        executor = StubTransferExecutor(TransferResult(transfer_id="tx_1"))
        engine = make_engine(banker_config, notifier, StubBalanceSource(reading("42.10")), executor)

        assert engine.monitor.run_cycle() is True
        low_balance = notifier.sent[-1]
        assert "42.10" in low_balance.message

        path = urlparse(low_balance.action_url).path
        assert path == f"/transfer/{banker_config.webhook_secret}"

        r = TestClient(engine.app).get(path)

        assert r.status_code == 200
        assert len(executor.requests) == 1
        assert notifier.sent[-1].title == "Top-up queued"
        assert "tx_1" in notifier.sent[-1].message

    def test_healthy_balance_no_link(self, banker_config, notifier) -> None:
        engine = make_engine(banker_config, notifier, StubBalanceSource(reading("60.00")), StubTransferExecutor())
        assert engine.monitor.run_cycle() is False
        assert notifier.sent == []

    def test_failed_transfer_reported(self, banker_config, notifier) -> None:
        executor = StubTransferExecutor(TransferError("insufficient funds", status=400))
        engine = make_engine(banker_config, notifier, StubBalanceSource(reading("1")), executor)

        r = TestClient(engine.app).get(f"/transfer/{banker_config.webhook_secret}")

        assert r.status_code == 500
        assert notifier.sent[-1].title == "Top-up failed"
        assert "insufficient funds" in notifier.sent[-1].message

    def test_monitor_survives_network_error(self, banker_config, notifier) -> None:
        source = StubBalanceSource(BalanceFetchError("network error"), reading("42.10"))
        engine = make_engine(banker_config, notifier, source, StubTransferExecutor())

        engine.monitor.run(StopAfter(2))

        assert len(source.calls) == 2
        assert len(notifier.sent) == 1

    def test_endpoint_serves_while_monitor_runs(self, banker_config, notifier) -> None:
        executor = StubTransferExecutor()
        engine = make_engine(banker_config, notifier, StubBalanceSource(reading("60")), executor)

        engine.start_monitor()
        try:
            r = TestClient(engine.app).get(f"/transfer/{banker_config.webhook_secret}")
        finally:
            engine.stop(timeout=5)

        assert r.status_code == 200
        assert len(executor.requests) == 1

    def test_endpoint_serves_during_in_flight_balance_fetch(self, banker_config, notifier) -> None:
        executor = StubTransferExecutor()
        source = BlockingBalanceSource(reading("60"))
        engine = make_engine(banker_config, notifier, source, executor)

        engine.start_monitor()
        try:
            assert source.entered.wait(timeout=5)
            r = TestClient(engine.app).get(f"/transfer/{banker_config.webhook_secret}")
            still_fetching = not source.release.is_set()
        finally:
            source.release.set()
            engine.stop(timeout=5)

        assert still_fetching
        assert r.status_code == 200
        assert len(executor.requests) == 1
        assert notifier.sent[-1].title == "Top-up queued"


class TestCreateNotifier:

    def test_home_assistant_by_default(self, banker_config) -> None:
        assert isinstance(create_notifier(banker_config), HomeAssistantNotifier)

    def test_stdout(self, banker_config) -> None:
        assert isinstance(create_notifier(replace(banker_config, notifier="stdout")), StdoutNotifier)
