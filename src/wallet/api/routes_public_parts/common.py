from __future__ import annotations

import json
from typing import Any, Dict

from fastapi import Request

from wallet.api.errors import ApiError
from wallet.api.structured_logging import note_ledger_op
from wallet.ledger.contract import TransferLedger

Json = Dict[str, Any]


def _ledger(request: Request, op: str, **subject: Any) -> TransferLedger:
    note_ledger_op(request, op, **subject)
    lg = getattr(request.app.state, "ledger", None)
    if lg is None:
        raise ApiError.unavailable("not_ready", "ledger not attached to app.state", {})
    return lg


def _record_payload(text: str) -> Json:
    """Query responses carry both the canonical text and its parsed object."""
    return {"ok": True, "record": json.loads(text), "raw": text}
