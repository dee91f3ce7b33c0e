from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from wallet.ledger.errors import CodecError

Json = Dict[str, Any]

DOC_TYPE = "ledger"

# Wire field names. `time` is the name the seed data originally used.
F_DOC_TYPE = "docType"
F_FROM = "from_pos"
F_TO = "to_pos"
F_AMOUNT = "amount"
F_TRANSFER_TIME = "transfer_time"
F_TIME_LEGACY = "time"


@dataclass(frozen=True, slots=True)
class TransferRecord:
    """A single immutable transfer entry.

    `amount` and `transfer_time` are opaque text; nothing here parses them.
    """

    from_pos: str
    to_pos: str
    amount: str
    transfer_time: str
    doc_type: str = DOC_TYPE

    def __post_init__(self) -> None:
        if self.doc_type != DOC_TYPE:
            raise CodecError(
                f"docType must be {DOC_TYPE!r}",
                code="invalid_doc_type",
                details={"doc_type": self.doc_type},
            )

    @staticmethod
    def create(from_pos: Any, to_pos: Any, amount: Any, transfer_time: Any) -> "TransferRecord":
        return TransferRecord(
            from_pos=str(from_pos),
            to_pos=str(to_pos),
            amount=str(amount),
            transfer_time=str(transfer_time),
        )

    @staticmethod
    def from_json(j: Json) -> "TransferRecord":
        if not isinstance(j, dict):
            raise CodecError("record must be an object", code="invalid_record")

        if F_DOC_TYPE not in j:
            raise CodecError(f"missing field '{F_DOC_TYPE}'", code="missing_field", details={"field": F_DOC_TYPE})

        tt_field = F_TRANSFER_TIME if F_TRANSFER_TIME in j else F_TIME_LEGACY
        fields = {
            "from_pos": F_FROM,
            "to_pos": F_TO,
            "amount": F_AMOUNT,
            "transfer_time": tt_field,
            "doc_type": F_DOC_TYPE,
        }

        kwargs: Dict[str, str] = {}
        for attr, wire in fields.items():
            if wire not in j:
                name = F_TRANSFER_TIME if wire == F_TIME_LEGACY else wire
                raise CodecError(f"missing field '{name}'", code="missing_field", details={"field": name})
            v = j[wire]
            if not isinstance(v, str):
                raise CodecError(
                    f"field '{wire}' must be a string, got {type(v).__name__}",
                    code="invalid_field",
                    details={"field": wire},
                )
            kwargs[attr] = v

        return TransferRecord(**kwargs)

    def to_json(self) -> Json:
        return {
            F_DOC_TYPE: self.doc_type,
            F_FROM: self.from_pos,
            F_TO: self.to_pos,
            F_AMOUNT: self.amount,
            F_TRANSFER_TIME: self.transfer_time,
        }


SEED_RECORDS: Tuple[TransferRecord, ...] = (
    TransferRecord(from_pos="李四", to_pos="赵五", amount="10", transfer_time="1548737871"),
    TransferRecord(from_pos="赵五", to_pos="李四", amount="30", transfer_time="1548757871"),
)
