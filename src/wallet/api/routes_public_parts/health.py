from __future__ import annotations

import time

from fastapi import APIRouter, Request

from wallet.api.routes_public_parts.common import Json

router = APIRouter()


@router.get("/health")
def health(request: Request) -> Json:
    # liveness only; never touches the store
    ledger = getattr(request.app.state, "ledger", None)
    store = getattr(ledger, "store", None) if ledger is not None else None
    cfg = getattr(request.app.state, "cfg", None)
    return {
        "ok": True,
        "ts_ms": int(time.time() * 1000),
        "ready": ledger is not None,
        "store": type(store).__name__ if store is not None else None,
        "mode": getattr(cfg, "mode", None),
    }
