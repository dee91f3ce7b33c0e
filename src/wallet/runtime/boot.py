# src/wallet/runtime/boot.py

from __future__ import annotations

import logging
from typing import Optional

from wallet.ledger.contract import TransferLedger
from wallet.ledger.ledger_logging import log_event
from wallet.ledger.observer import Observer, default_observer
from wallet.ledger.sqlite_store import SqliteDB, SqliteStateStore
from wallet.ledger.store import MemoryStateStore, StateStore
from wallet.runtime.config import WalletConfig, load_wallet_config

_log = logging.getLogger("wallet.boot")


def build_store(cfg: WalletConfig) -> StateStore:
    if cfg.store == "memory":
        return MemoryStateStore()
    return SqliteStateStore(db=SqliteDB(path=cfg.db_path))


def build_ledger(cfg: Optional[WalletConfig] = None, *, observer: Optional[Observer] = None) -> TransferLedger:
    """
    Build a TransferLedger from an explicit config or, if omitted, from
    WALLET_CONFIG_PATH / WALLET_* environment variables.
    """
    c = cfg or load_wallet_config()
    ledger = TransferLedger(store=build_store(c), observer=observer or default_observer())
    log_event(_log, "ledger_boot", mode=c.mode, store=c.store, db_path=c.db_path if c.store == "sqlite" else None)

    if c.seed_on_boot:
        ledger.init_ledger()

    return ledger
