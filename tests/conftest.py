from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pytest

# Ensure local "src/" takes precedence over any globally-installed "wallet" package.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

src_str = str(SRC)
if src_str not in sys.path:
    sys.path.insert(0, src_str)

from wallet.ledger.contract import TransferLedger  # noqa: E402
from wallet.ledger.store import MemoryStateStore  # noqa: E402


class RecordingObserver:
    def __init__(self) -> None:
        self.events: List[Tuple[str, Dict[str, Any]]] = []

    def __call__(self, event: str, fields: Dict[str, Any]) -> None:
        self.events.append((event, dict(fields)))

    def names(self) -> List[str]:
        return [e for e, _ in self.events]


@pytest.fixture
def store() -> MemoryStateStore:
    return MemoryStateStore()


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def ledger(store: MemoryStateStore, observer: RecordingObserver) -> TransferLedger:
    return TransferLedger(store=store, observer=observer)
