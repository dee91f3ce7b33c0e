from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from wallet.ledger.ledger_logging import log_event
from wallet.runtime.metrics import inc_counter

Json = Dict[str, Any]

# Called at operation boundaries with one of:
#   ("op_start",  {"op": ..., <args>})
#   ("op_ok",     {"op": ..., "duration_ms": ...})
#   ("op_failed", {"op": ..., "duration_ms": ..., "error": <code>, "message": ...})
Observer = Callable[[str, Json], None]

OP_START = "op_start"
OP_OK = "op_ok"
OP_FAILED = "op_failed"

_log = logging.getLogger("wallet.ledger")


def null_observer(event: str, fields: Json) -> None:
    return None


def log_observer(logger: Optional[logging.Logger] = None) -> Observer:
    lg = logger or _log

    def _observe(event: str, fields: Json) -> None:
        level = logging.WARNING if event == OP_FAILED else logging.INFO
        log_event(lg, event, level=level, **fields)

    return _observe


def metrics_observer() -> Observer:
    """Count finished operations as ledger_<op>_ok_total / ledger_<op>_failed_total."""

    def _observe(event: str, fields: Json) -> None:
        op = str(fields.get("op") or "unknown")
        if event == OP_OK:
            inc_counter(f"ledger_{op}_ok_total")
        elif event == OP_FAILED:
            inc_counter(f"ledger_{op}_failed_total")

    return _observe


def fanout(*observers: Observer) -> Observer:
    obs = tuple(o for o in observers if o is not None)

    def _observe(event: str, fields: Json) -> None:
        for o in obs:
            o(event, dict(fields))

    return _observe


def default_observer() -> Observer:
    return fanout(log_observer(), metrics_observer())
