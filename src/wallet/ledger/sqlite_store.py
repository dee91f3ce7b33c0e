# src/wallet/ledger/sqlite_store.py
from __future__ import annotations

import os
import random
import sqlite3
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from wallet.ledger.errors import StoreError


def _now_ms() -> int:
    return int(time.time() * 1000)


def _env_int(name: str, default: int) -> int:
    try:
        raw = str(os.environ.get(name, "")).strip()
        return int(raw) if raw else int(default)
    except ValueError:
        return int(default)


class SqliteDB:
    """SQLite manager for the world-state file.

    Design goals:
      - single durable DB file
      - cross-process safe (SQLite locks)
      - cross-thread safe by never sharing connections

    SQLite allows only one writer at a time; BEGIN IMMEDIATE can transiently
    fail with "database is locked". write_tx() waits for the writer lock with
    a bounded backoff and then fails closed.
    """

    SCHEMA_VERSION = 1

    def __init__(self, *, path: str) -> None:
        self.path = str(path)

    @staticmethod
    def _sqlite_synchronous_pragma() -> str:
        """Return a safe PRAGMA synchronous value.

        Defaults:
          - prod        -> FULL
          - dev/testnet -> NORMAL

        Override with WALLET_SQLITE_SYNCHRONOUS in {OFF,NORMAL,FULL,EXTRA}.
        """
        mode = (os.environ.get("WALLET_MODE") or "prod").strip().lower()
        default = "FULL" if mode == "prod" else "NORMAL"
        raw = (os.environ.get("WALLET_SQLITE_SYNCHRONOUS") or default).strip().upper()

        if raw not in {"OFF", "NORMAL", "FULL", "EXTRA"}:
            raw = default
        return raw

    def ensure_parent_dir(self) -> None:
        Path(self.path).parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        self.ensure_parent_dir()

        connect_timeout_s = float(_env_int("WALLET_SQLITE_CONNECT_TIMEOUT_MS", 30_000)) / 1000.0

        con = sqlite3.connect(
            self.path,
            timeout=connect_timeout_s,
            isolation_level=None,  # we manage BEGIN/COMMIT ourselves
            check_same_thread=False,
        )
        try:
            self._apply_pragmas(con, busy_default_ms=int(connect_timeout_s * 1000))
        except BaseException:
            con.close()
            raise
        return con

    def _apply_pragmas(self, con: sqlite3.Connection, *, busy_default_ms: int) -> None:
        con.row_factory = sqlite3.Row

        allow_non_wal = (os.environ.get("WALLET_SQLITE_ALLOW_NON_WAL") or "").strip().lower() in {"1", "true"}
        row = con.execute("PRAGMA journal_mode=WAL;").fetchone()
        mode = str(row[0]).strip().lower() if row is not None else ""
        if mode and mode != "wal" and not allow_non_wal:
            raise sqlite3.OperationalError(f"sqlite journal_mode is '{mode}', expected 'wal'")

        con.execute(f"PRAGMA synchronous={self._sqlite_synchronous_pragma()};")
        con.execute("PRAGMA temp_store=MEMORY;")

        wal_ckpt = max(1, _env_int("WALLET_SQLITE_WAL_AUTOCHECKPOINT", 1000))
        con.execute(f"PRAGMA wal_autocheckpoint={wal_ckpt};")

        busy_ms = max(0, _env_int("WALLET_SQLITE_BUSY_TIMEOUT_MS", busy_default_ms))
        con.execute(f"PRAGMA busy_timeout={busy_ms};")

    def init_schema(self) -> None:
        with self.write_tx() as con:
            con.execute(
                """
                CREATE TABLE IF NOT EXISTS meta (
                  key TEXT PRIMARY KEY,
                  value TEXT NOT NULL
                );
                """
            )

            con.execute(
                """
                CREATE TABLE IF NOT EXISTS world_state (
                  key BLOB PRIMARY KEY,
                  value BLOB NOT NULL,
                  updated_ts_ms INTEGER NOT NULL
                );
                """
            )

            row = con.execute("SELECT value FROM meta WHERE key='schema_version' LIMIT 1;").fetchone()
            if row is None:
                con.execute("INSERT INTO meta(key, value) VALUES('schema_version', ?);", (str(self.SCHEMA_VERSION),))
            else:
                try:
                    v = int(str(row["value"]))
                except ValueError:
                    v = 0
                if v != self.SCHEMA_VERSION:
                    raise RuntimeError(
                        f"sqlite schema_version mismatch: have={v} want={self.SCHEMA_VERSION}. "
                        "Refuse to start to avoid corrupting data."
                    )

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        con = self._connect()
        try:
            yield con
        finally:
            con.close()

    @staticmethod
    def _is_locked_error(e: Exception) -> bool:
        msg = str(e).lower()
        return ("database is locked" in msg) or ("database is busy" in msg)

    def _backoff(self, attempt: int) -> None:
        base_sleep = max(0.001, float(_env_int("WALLET_SQLITE_WRITE_BACKOFF_BASE_MS", 5)) / 1000.0)
        max_sleep = max(base_sleep, float(_env_int("WALLET_SQLITE_WRITE_BACKOFF_MAX_MS", 250)) / 1000.0)
        sleep_s = min(max_sleep, base_sleep * (2.0 ** min(attempt, 8)))
        time.sleep(sleep_s * (0.5 + random.random()))

    @contextmanager
    def write_tx(self) -> Iterator[sqlite3.Connection]:
        """Open a write transaction, waiting a bounded time for the writer lock.

        Only lock acquisition is repeated; a failed statement inside the
        transaction rolls back and raises.
        """
        deadline_ts = _now_ms() + max(250, _env_int("WALLET_SQLITE_WRITE_DEADLINE_MS", 30_000))

        with self.connection() as con:
            attempt = 0
            while True:
                try:
                    con.execute("BEGIN IMMEDIATE;")
                    break
                except sqlite3.OperationalError as e:
                    if not self._is_locked_error(e) or _now_ms() >= deadline_ts:
                        raise
                    self._backoff(attempt)
                    attempt += 1

            try:
                yield con
                con.execute("COMMIT;")
            except BaseException:
                if con.in_transaction:
                    con.execute("ROLLBACK;")
                raise


class SqliteStateStore:
    """World state persisted in a single SQLite table.

    This provides:
      - put(key, value): upsert one key in its own write transaction
      - get(key): latest value or None

    sqlite3 failures surface as StoreError; nothing is retried here.
    """

    def __init__(self, *, db: SqliteDB) -> None:
        self._db = db
        try:
            self._db.init_schema()
        except sqlite3.Error as e:
            raise StoreError(f"sqlite init failed: {e}", details={"path": db.path}) from e
        except RuntimeError as e:
            # schema_version mismatch
            raise StoreError(str(e), code="schema_mismatch", details={"path": db.path}) from e

    @property
    def path(self) -> str:
        return self._db.path

    def put(self, key: bytes, value: bytes) -> None:
        try:
            with self._db.write_tx() as con:
                con.execute(
                    """
                    INSERT INTO world_state(key, value, updated_ts_ms)
                    VALUES(?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                      value=excluded.value,
                      updated_ts_ms=excluded.updated_ts_ms;
                    """,
                    (bytes(key), bytes(value), _now_ms()),
                )
        except sqlite3.Error as e:
            raise StoreError(f"sqlite put failed: {e}", details={"path": self._db.path}) from e

    def get(self, key: bytes) -> Optional[bytes]:
        try:
            with self._db.connection() as con:
                row = con.execute("SELECT value FROM world_state WHERE key=?;", (bytes(key),)).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"sqlite get failed: {e}", details={"path": self._db.path}) from e
        if row is None:
            return None
        return bytes(row["value"])

    def keys(self) -> List[bytes]:
        with self._db.connection() as con:
            rows = con.execute("SELECT key FROM world_state ORDER BY key;").fetchall()
        return [bytes(r["key"]) for r in rows]
