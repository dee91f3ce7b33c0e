from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from wallet.ledger.contract import TransferLedger
from wallet.ledger.store import MemoryStateStore


def test_create_app_boot_runtime_false_does_not_attach_ledger() -> None:
    from wallet.api.app import create_app

    app = create_app(boot_runtime=False)
    assert getattr(app.state, "ledger", None) is None

    # App should still be startable for route/middleware tests.
    with TestClient(app) as _client:
        pass


def test_create_app_boot_runtime_true_attaches_ledger(monkeypatch: pytest.MonkeyPatch) -> None:
    from wallet.api import app as api_app

    built = TransferLedger(store=MemoryStateStore())
    monkeypatch.delenv("WALLET_CONFIG_PATH", raising=False)
    monkeypatch.setattr(api_app, "build_ledger", lambda cfg=None: built)

    app = api_app.create_app(boot_runtime=True)
    assert app.state.ledger is built
    assert app.state.cfg.mode == "prod"

    with TestClient(app) as _client:
        pass


def test_boot_with_sqlite_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    from wallet.api.app import create_app

    monkeypatch.delenv("WALLET_CONFIG_PATH", raising=False)
    monkeypatch.setenv("WALLET_MODE", "dev")
    monkeypatch.setenv("WALLET_STORE", "sqlite")
    monkeypatch.setenv("WALLET_DB_PATH", str(tmp_path / "wallet.db"))
    monkeypatch.setenv("WALLET_SEED_ON_BOOT", "1")

    c = TestClient(create_app(boot_runtime=True))
    assert c.get("/v1/health").json()["store"] == "SqliteStateStore"
    assert c.get("/v1/records/to/赵五").json()["record"]["amount"] == "10"
    assert (tmp_path / "wallet.db").exists()
