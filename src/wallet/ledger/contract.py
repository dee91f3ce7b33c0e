# src/wallet/ledger/contract.py
"""Transfer-record operations over an injected world-state store.

Operations write each transfer under its from-index and to-index keys
(see wallet.ledger.keys) and read back by party. Nothing is retried and
nothing is rolled back: a store failure on the second index write leaves
the first write in place and surfaces to the caller.

init_ledger() is not idempotent in the upsert-or-fail sense. Calling it
again rewrites the same keys with the same bytes.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from wallet.ledger import codec, keys
from wallet.ledger.errors import LedgerError, NotFoundError
from wallet.ledger.ledger_logging import log_event
from wallet.ledger.observer import OP_FAILED, OP_OK, OP_START, Json, Observer, null_observer
from wallet.ledger.record import SEED_RECORDS, TransferRecord
from wallet.ledger.store import StateStore

_log = logging.getLogger("wallet.ledger")


class TransferLedger:
    def __init__(self, *, store: StateStore, observer: Optional[Observer] = None) -> None:
        self._store = store
        self._observer: Observer = observer or null_observer

    @property
    def store(self) -> StateStore:
        return self._store

    # ---- observer plumbing ----

    def _notify(self, event: str, fields: Json) -> None:
        try:
            self._observer(event, fields)
        except Exception as e:
            # Observers never change an operation's outcome.
            log_event(_log, "observer_failed", level=logging.WARNING, observer_event=event, error=repr(e))

    @contextmanager
    def _op(self, name: str, **fields: Any) -> Iterator[None]:
        started = time.monotonic()
        self._notify(OP_START, {"op": name, **fields})
        try:
            yield
        except Exception as e:
            code = e.code if isinstance(e, LedgerError) else type(e).__name__
            self._notify(
                OP_FAILED,
                {
                    "op": name,
                    "duration_ms": int((time.monotonic() - started) * 1000),
                    "error": code,
                    "message": str(e),
                },
            )
            raise
        self._notify(OP_OK, {"op": name, "duration_ms": int((time.monotonic() - started) * 1000)})

    # ---- store access ----

    def _write(self, record: TransferRecord) -> None:
        payload = codec.encode(record)
        for k in keys.record_keys(record):
            self._store.put(k, payload)

    def _read(self, key: bytes, label: str) -> str:
        raw = self._store.get(key)
        if raw is None or len(raw) == 0:
            raise NotFoundError(f"{label} does not exist", details={"key": label})
        return codec.render(codec.decode(raw))

    # ---- operations ----

    def init_ledger(self) -> None:
        with self._op("initLedger", records=len(SEED_RECORDS)):
            for rec in SEED_RECORDS:
                self._write(rec)

    def create_transfer_record(self, from_pos: Any, to_pos: Any, amount: Any, transfer_time: Any) -> None:
        rec = TransferRecord.create(from_pos, to_pos, amount, transfer_time)
        with self._op("createTransferRecord", from_pos=rec.from_pos, to_pos=rec.to_pos):
            self._write(rec)

    def query_transfer_record_by_from(self, from_pos: Any) -> str:
        party = str(from_pos)
        with self._op("queryTransferRecordByFrom", from_pos=party):
            return self._read(keys.from_key(party), party)

    def query_transfer_record_by_to(self, to_pos: Any) -> str:
        party = str(to_pos)
        with self._op("queryTransferRecordByTo", to_pos=party):
            return self._read(keys.to_key(party), party)

    def create_record(self, key: Any, from_pos: Any, to_pos: Any, amount: Any, transfer_time: Any) -> None:
        """Write one record under a caller-chosen simple key."""
        rec = TransferRecord.create(from_pos, to_pos, amount, transfer_time)
        with self._op("createRecord", key=str(key)):
            self._store.put(keys.simple_key(key), codec.encode(rec))

    def query_record(self, key: Any) -> str:
        with self._op("queryRecord", key=str(key)):
            return self._read(keys.simple_key(key), str(key))
