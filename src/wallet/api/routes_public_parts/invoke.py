from __future__ import annotations

from fastapi import APIRouter, Request

from wallet.api.routes_public_parts.common import Json, _ledger
from wallet.api.schemas import InvokeRequest
from wallet.ledger.dispatch import invoke

router = APIRouter()


@router.post("/invoke")
def invoke_op(request: Request, body: InvokeRequest) -> Json:
    """Invoke an operation by name, the way a chaincode client would.

    Returns:
      { ok, fn, result }  where result is the record text for queries, else null
    """
    result = invoke(_ledger(request, body.fn), body.fn, body.args)
    return {"ok": True, "fn": body.fn, "result": result}
