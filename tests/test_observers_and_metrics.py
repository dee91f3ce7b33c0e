from __future__ import annotations

import json
import logging

import pytest
from fastapi.testclient import TestClient

from wallet.api.app import create_app
from wallet.ledger.contract import TransferLedger
from wallet.ledger.errors import NotFoundError
from wallet.ledger.observer import fanout, log_observer, metrics_observer
from wallet.ledger.store import MemoryStateStore
from wallet.runtime import metrics


@pytest.fixture(autouse=True)
def _reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


def test_log_observer_emits_jsonl(caplog: pytest.LogCaptureFixture) -> None:
    lg = TransferLedger(store=MemoryStateStore(), observer=log_observer(logging.getLogger("wallet.test")))

    with caplog.at_level(logging.INFO, logger="wallet.test"):
        lg.create_transfer_record("a", "b", "1", "1")
        with pytest.raises(NotFoundError):
            lg.query_transfer_record_by_from("zz")

    records = [r for r in caplog.records if r.name == "wallet.test"]
    events = [json.loads(r.getMessage()) for r in records]
    assert [e["event"] for e in events] == ["op_start", "op_ok", "op_start", "op_failed"]
    assert events[-1]["error"] == "not_found"
    assert records[-1].levelno == logging.WARNING


def test_metrics_observer_counts_outcomes() -> None:
    lg = TransferLedger(store=MemoryStateStore(), observer=fanout(metrics_observer()))
    lg.init_ledger()
    lg.init_ledger()
    with pytest.raises(NotFoundError):
        lg.query_transfer_record_by_to("zz")

    assert metrics.get_counter("ledger_initLedger_ok_total") == 2
    assert metrics.get_counter("ledger_queryTransferRecordByTo_failed_total") == 1


def test_prometheus_text() -> None:
    metrics.inc_counter("ledger_initLedger_ok_total")
    text = metrics.format_prometheus()
    assert text.startswith("wallet_uptime_ms ")
    assert "wallet_ledger_initLedger_ok_total 1\n" in text


def test_metrics_route_disabled_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("WALLET_METRICS_ENABLED", raising=False)
    c = TestClient(create_app(boot_runtime=False))
    assert c.get("/v1/metrics").status_code == 404


def test_metrics_route_when_enabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WALLET_METRICS_ENABLED", "1")
    lg = TransferLedger(store=MemoryStateStore(), observer=metrics_observer())
    c = TestClient(create_app(boot_runtime=False, ledger=lg))

    c.post("/v1/ledger/init")
    r = c.get("/v1/metrics")
    assert r.status_code == 200
    assert "wallet_ledger_initLedger_ok_total 1" in r.text
