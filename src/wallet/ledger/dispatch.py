# src/wallet/ledger/dispatch.py

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from wallet.ledger.contract import TransferLedger
from wallet.ledger.errors import InvalidArgumentError, UnknownOperationError

OpFn = Callable[..., Optional[str]]

# name -> (arity, bound-method getter)
_OPERATIONS: Dict[str, Tuple[int, Callable[[TransferLedger], OpFn]]] = {
    "initLedger": (0, lambda lg: lg.init_ledger),
    "createTransferRecord": (4, lambda lg: lg.create_transfer_record),
    "queryTransferRecordByFrom": (1, lambda lg: lg.query_transfer_record_by_from),
    "queryTransferRecordByTo": (1, lambda lg: lg.query_transfer_record_by_to),
    "createRecord": (5, lambda lg: lg.create_record),
    "queryRecord": (1, lambda lg: lg.query_record),
}

OPERATION_NAMES: Tuple[str, ...] = tuple(_OPERATIONS.keys())


def invoke(ledger: TransferLedger, fn: str, args: Sequence[Any] = ()) -> Optional[str]:
    """Invoke a ledger operation by name with positional text arguments.

    Returns the operation's text result (queries) or None (writes).
    """
    name = str(fn or "").strip()
    entry = _OPERATIONS.get(name)
    if entry is None:
        raise UnknownOperationError("Invalid Smart Contract function name.", details={"fn": name})

    arity, getter = entry
    argv = [str(a) for a in (args or ())]
    if len(argv) != arity:
        raise InvalidArgumentError(
            f"Incorrect number of arguments. Expecting {arity}",
            details={"fn": name, "expected": arity, "got": len(argv)},
        )

    return getter(ledger)(*argv)
