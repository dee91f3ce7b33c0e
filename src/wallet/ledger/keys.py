"""World-state key layout.

Two kinds of keys share the store:

  - composite index keys, one per side of a transfer:
        U+0000 "ledger.from" U+0000 <party> U+0000
        U+0000 "ledger.to"   U+0000 <party> U+0000
  - simple keys chosen by the caller (createRecord / queryRecord), which
    must not start with U+0000.

Each index key holds the most recently written record for that party on
that side; an older record for the same party is superseded.
"""

from __future__ import annotations

from typing import Any, Tuple

from wallet.ledger.errors import InvalidArgumentError
from wallet.ledger.record import TransferRecord

_SEP = "\x00"

FROM_INDEX = "ledger.from"
TO_INDEX = "ledger.to"


def _encode(s: str) -> bytes:
    try:
        return s.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidArgumentError("key is not encodable as UTF-8", details={"key": repr(s)}) from e


def composite_key(object_type: str, *attrs: str) -> bytes:
    for a in (object_type, *attrs):
        if _SEP in a:
            raise InvalidArgumentError(
                "composite key attributes must not contain U+0000",
                details={"attribute": a},
            )
    s = _SEP + object_type + _SEP + "".join(a + _SEP for a in attrs)
    return _encode(s)


def from_key(from_pos: str) -> bytes:
    return composite_key(FROM_INDEX, str(from_pos))


def to_key(to_pos: str) -> bytes:
    return composite_key(TO_INDEX, str(to_pos))


def record_keys(record: TransferRecord) -> Tuple[bytes, bytes]:
    return from_key(record.from_pos), to_key(record.to_pos)


def simple_key(key: Any) -> bytes:
    k = str(key if key is not None else "")
    if not k:
        raise InvalidArgumentError("key must be a non-empty string", details={"key": k})
    if k.startswith(_SEP):
        raise InvalidArgumentError("key must not start with U+0000", details={"key": k})
    return _encode(k)
