# src/wallet/ledger/__init__.py
"""
Wallet ledger core

  - record: TransferRecord shape and the fixed seed records
  - codec: canonical JSON encoding/decoding of records
  - keys: world-state key layout (party indexes + simple keys)
  - store: StateStore interface + in-memory implementation
  - sqlite_store: SQLite-backed StateStore
  - contract: TransferLedger operations
  - observer: operation-boundary callbacks (logging, metrics)
  - dispatch: invoke an operation by name with text arguments
  - errors: LedgerError taxonomy

Hosts (HTTP, CLI) should depend on contract/dispatch and inject a store.
"""

from __future__ import annotations

__all__ = [
    "record",
    "codec",
    "keys",
    "store",
    "sqlite_store",
    "contract",
    "observer",
    "dispatch",
    "errors",
]
