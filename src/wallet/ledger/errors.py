from __future__ import annotations

from typing import Any, Dict, Optional


class LedgerError(RuntimeError):
    """Base error for ledger operations.

    `code` is a stable machine-readable string; `details` carries the
    identifying context (key, field, ...) for the caller.
    """

    default_code = "ledger_error"

    def __init__(self, msg: str, *, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(msg)
        self.code = str(code or self.default_code)
        self.details: Dict[str, Any] = dict(details or {})

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else ""


class NotFoundError(LedgerError):
    default_code = "not_found"


class CodecError(LedgerError):
    default_code = "codec_error"


class StoreError(LedgerError):
    default_code = "store_unavailable"


class InvalidArgumentError(LedgerError):
    default_code = "invalid_argument"


class UnknownOperationError(LedgerError):
    default_code = "unknown_operation"
