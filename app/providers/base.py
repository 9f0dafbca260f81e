# app/providers/base.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Literal, Optional, Protocol

TransferStatus = Literal["CONFIRMED", "FAILED"]


@dataclass(frozen=True)
class TransferResult:
    status: TransferStatus
    reference: Optional[str] = None
    error: Optional[str] = None
    response: Optional[dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.status == "CONFIRMED"


class TransferProvider(Protocol):
    def transfer(self, recipient: Hashable, amount: int) -> TransferResult: ...
