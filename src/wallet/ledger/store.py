from __future__ import annotations

import threading
from typing import Dict, List, Optional, Protocol


class StateStore(Protocol):
    """Narrow world-state interface the ledger operations depend on.

    put() either acknowledges the write or raises; get() returns None for an
    absent key. Implementations report their own failures as StoreError.
    """

    def put(self, key: bytes, value: bytes) -> None: ...

    def get(self, key: bytes) -> Optional[bytes]: ...


class MemoryStateStore:
    """
    In-process world state used for tests and the `memory` store backend.

    - Last acknowledged write wins
    - Values are copied on the way in
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: Dict[bytes, bytes] = {}

    def put(self, key: bytes, value: bytes) -> None:
        k = bytes(key)
        v = bytes(value)
        with self._lock:
            self._data[k] = v

    def get(self, key: bytes) -> Optional[bytes]:
        with self._lock:
            return self._data.get(bytes(key))

    # ---- helpers for tests / harness ----

    def keys(self) -> List[bytes]:
        with self._lock:
            return sorted(self._data.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
