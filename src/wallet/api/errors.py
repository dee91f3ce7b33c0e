from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from wallet.api.structured_logging import note_ledger_error
from wallet.ledger.errors import (
    CodecError,
    InvalidArgumentError,
    LedgerError,
    NotFoundError,
    StoreError,
    UnknownOperationError,
)


@dataclass
class ApiError(Exception):
    status_code: int
    code: str
    message: str
    details: Dict[str, Any]

    @staticmethod
    def bad_request(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> "ApiError":
        return ApiError(400, code, message, details or {})

    @staticmethod
    def not_found(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> "ApiError":
        return ApiError(404, code, message, details or {})

    @staticmethod
    def unavailable(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> "ApiError":
        return ApiError(503, code, message, details or {})

    @staticmethod
    def internal(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> "ApiError":
        return ApiError(500, code, message, details or {})

    @staticmethod
    def from_ledger_error(e: LedgerError) -> "ApiError":
        if isinstance(e, NotFoundError):
            return ApiError.not_found(e.code, e.message, e.details)
        if isinstance(e, (InvalidArgumentError, UnknownOperationError)):
            return ApiError.bad_request(e.code, e.message, e.details)
        if isinstance(e, StoreError):
            return ApiError.unavailable(e.code, e.message, e.details)
        if isinstance(e, CodecError):
            return ApiError.internal("codec_error", e.message, {"reason": e.code, **e.details})
        return ApiError.internal(e.code, e.message, e.details)

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.status_code,
            content={
                "ok": False,
                "error": {"code": self.code, "message": self.message, "details": self.details},
            },
        )


async def api_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, LedgerError):
        err = ApiError.from_ledger_error(exc)
    elif isinstance(exc, ApiError):
        err = exc
    else:
        raise exc
    note_ledger_error(request, err.code)
    return err.to_response()
