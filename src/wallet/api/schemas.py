"""Pydantic request schemas for the public API.

These exist only for HTTP input validation. The stored record format is
owned by wallet.ledger.codec.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class TransferRecordRequest(BaseModel):
    from_pos: str = Field(..., description="Sending party id")
    to_pos: str = Field(..., description="Receiving party id")
    amount: str = Field(..., description="Opaque decimal string")
    transfer_time: str = Field(..., description="Epoch seconds as text")

    model_config = {"extra": "ignore"}


class InvokeRequest(BaseModel):
    fn: str = Field(..., description="Operation name, e.g. queryTransferRecordByFrom")
    args: List[str] = Field(default_factory=list, description="Positional text arguments")
