# src/wallet/api/structured_logging.py
"""JSONL logging for the HTTP host.

Every request produces one `ledger_request` event on the `wallet.http`
logger. Routes tag the request with the ledger operation they run
(`note_ledger_op`) and the error handler tags the failure code, so a log
line reads as "which operation, on which party or key, and how it ended"
rather than a bare access-log entry.
"""

from __future__ import annotations

import logging
import os
import sys
import time
import uuid
from typing import Any, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from wallet.ledger.ledger_logging import log_event

_HANDLER_FLAG = "_wallet_jsonl"


def configure_structured_logging(level_name: Optional[str] = None) -> None:
    """Send `wallet.*` loggers to stdout, one JSON object per line.

    Level comes from the argument, else WALLET_LOG_LEVEL. Calling it again
    only changes the level.
    """
    name = (level_name or os.environ.get("WALLET_LOG_LEVEL") or "INFO").strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.INFO

    lg = logging.getLogger("wallet")
    lg.setLevel(level)
    if not any(getattr(h, _HANDLER_FLAG, False) for h in lg.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        setattr(handler, _HANDLER_FLAG, True)
        lg.addHandler(handler)
    lg.propagate = False

    # ledger_request events replace uvicorn's access lines
    logging.getLogger("uvicorn.access").disabled = True


def note_ledger_op(request: Request, op: str, **subject: Any) -> None:
    """Tag the request with the ledger operation it runs."""
    request.state.ledger_op = op
    request.state.ledger_subject = {k: str(v) for k, v in subject.items()}


def note_ledger_error(request: Request, code: str) -> None:
    request.state.ledger_error = code


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Logs one `ledger_request` event per request.

    WALLET_LOG_REQUESTS=0 turns it off.
    """

    def __init__(self, app) -> None:
        super().__init__(app)
        raw = (os.environ.get("WALLET_LOG_REQUESTS") or "1").strip().lower()
        self._enabled = raw not in {"0", "false", "no", "off"}
        self._logger = logging.getLogger("wallet.http")

    async def dispatch(self, request: Request, call_next):
        if not self._enabled:
            return await call_next(request)

        started = time.monotonic()
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        request.state.request_id = request_id

        status = 500
        outcome: Optional[str] = None
        try:
            response = await call_next(request)
            status = int(response.status_code)
            response.headers.setdefault("x-request-id", request_id)
            return response
        except Exception as e:
            outcome = type(e).__name__
            raise
        finally:
            state = request.state
            if outcome is None:
                outcome = getattr(state, "ledger_error", None) or ("ok" if status < 400 else f"http_{status}")
            log_event(
                self._logger,
                "ledger_request",
                level=logging.WARNING if status >= 500 else logging.INFO,
                request_id=request_id,
                method=request.method,
                path=str(request.url.path or ""),
                op=getattr(state, "ledger_op", None),
                subject=getattr(state, "ledger_subject", {}),
                outcome=outcome,
                status=status,
                duration_ms=int((time.monotonic() - started) * 1000),
            )
