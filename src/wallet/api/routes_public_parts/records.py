from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Request

from wallet.api.routes_public_parts.common import Json, _ledger, _record_payload
from wallet.api.schemas import TransferRecordRequest

router = APIRouter()


@router.post("/ledger/init")
def ledger_init(request: Request) -> Json:
    """Write the fixed seed records. Re-running overwrites the same keys."""
    _ledger(request, "initLedger").init_ledger()
    return {"ok": True}


@router.post("/records", status_code=201)
def records_create(request: Request, body: TransferRecordRequest) -> Json:
    lg = _ledger(request, "createTransferRecord", from_pos=body.from_pos, to_pos=body.to_pos)
    lg.create_transfer_record(body.from_pos, body.to_pos, body.amount, body.transfer_time)
    return {"ok": True}


@router.put("/records/key/{key}", status_code=201)
def records_put_by_key(request: Request, key: str, body: TransferRecordRequest) -> Json:
    lg = _ledger(request, "createRecord", key=key)
    lg.create_record(key, body.from_pos, body.to_pos, body.amount, body.transfer_time)
    return {"ok": True, "key": key}


@router.get("/records/key/{key}")
def records_by_key(request: Request, key: str) -> Dict[str, Any]:
    return _record_payload(_ledger(request, "queryRecord", key=key).query_record(key))


@router.get("/records/from/{party}")
def records_by_from(request: Request, party: str) -> Dict[str, Any]:
    lg = _ledger(request, "queryTransferRecordByFrom", party=party)
    return _record_payload(lg.query_transfer_record_by_from(party))


@router.get("/records/to/{party}")
def records_by_to(request: Request, party: str) -> Dict[str, Any]:
    lg = _ledger(request, "queryTransferRecordByTo", party=party)
    return _record_payload(lg.query_transfer_record_by_to(party))
