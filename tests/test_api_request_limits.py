from __future__ import annotations

from fastapi.testclient import TestClient

from wallet.api.app import create_app
from wallet.ledger.contract import TransferLedger
from wallet.ledger.store import MemoryStateStore


def test_request_size_limit_returns_413(monkeypatch):
    # Make limit very small for test determinism.
    monkeypatch.setenv("WALLET_MAX_REQUEST_BYTES", "128")
    monkeypatch.delenv("WALLET_SIZE_LIMIT_DISABLE", raising=False)

    store = MemoryStateStore()
    app = create_app(boot_runtime=False, ledger=TransferLedger(store=store))
    c = TestClient(app)

    payload = {"from_pos": "alice", "to_pos": "bob", "amount": "1", "transfer_time": "1", "pad": "x" * 500}

    r = c.post("/v1/records", json=payload)
    assert r.status_code == 413

    j = r.json()
    assert j.get("ok") is False
    assert j["error"].get("code") == "request_too_large"
    assert len(store) == 0


def test_size_limit_can_be_disabled(monkeypatch):
    monkeypatch.setenv("WALLET_MAX_REQUEST_BYTES", "128")
    monkeypatch.setenv("WALLET_SIZE_LIMIT_DISABLE", "1")

    c = TestClient(create_app(boot_runtime=False, ledger=TransferLedger(store=MemoryStateStore())))
    payload = {"from_pos": "alice", "to_pos": "bob", "amount": "1", "transfer_time": "1", "pad": "x" * 500}
    assert c.post("/v1/records", json=payload).status_code == 201
