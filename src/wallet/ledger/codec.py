# src/wallet/ledger/codec.py
from __future__ import annotations

import json
from typing import Any

from wallet.ledger.errors import CodecError
from wallet.ledger.record import TransferRecord


def dumps_json(obj: Any) -> bytes:
    """Canonical JSON bytes: sorted keys, compact, UTF-8 without escaping."""
    try:
        return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise CodecError(f"encode failed: {e}", code="encode_failed") from e


def loads_json(data: bytes | str) -> Any:
    try:
        if isinstance(data, (bytes, bytearray, memoryview)):
            data = bytes(data).decode("utf-8")
        return json.loads(data)
    except json.JSONDecodeError as e:
        raise CodecError(f"invalid json: {e}", code="invalid_json") from e
    except RecursionError as e:
        raise CodecError("invalid json: nesting too deep", code="invalid_json") from e
    except UnicodeDecodeError as e:
        raise CodecError(f"invalid utf-8: {e}", code="invalid_utf8") from e


def encode(record: TransferRecord) -> bytes:
    if not isinstance(record, TransferRecord):
        raise CodecError("encode expects a TransferRecord", code="encode_failed")
    return dumps_json(record.to_json())


def decode(data: bytes | str) -> TransferRecord:
    raw = loads_json(data)
    if not isinstance(raw, dict):
        raise CodecError("stored record must be an object", code="invalid_record")
    return TransferRecord.from_json(raw)


def render(record: TransferRecord) -> str:
    """Canonical text form returned by queries."""
    return encode(record).decode("utf-8")
