# app/providers/mock.py
from __future__ import annotations

import uuid
from typing import Hashable, List, Optional, Tuple

from app.providers.base import TransferResult


class MockTransferProvider:
    """
    Test/dev provider.

    - succeed=False returns a FAILED result without raising.
    - raise_exc makes transfer() raise instead, the way a broken network client would.
    - Every attempt is recorded in `calls`, successful ones also in `transfers`.
    """

    def __init__(
        self,
        *,
        succeed: bool = True,
        error: str = "Transfer rejected",
        raise_exc: Optional[Exception] = None,
    ):
        self.succeed = succeed
        self.error = error
        self.raise_exc = raise_exc
        self.calls: List[Tuple[Hashable, int]] = []
        self.transfers: List[Tuple[Hashable, int]] = []
        self.deposits: List[int] = []

    def deposit(self, amount: int) -> None:
        self.deposits.append(int(amount))

    def transfer(self, recipient: Hashable, amount: int) -> TransferResult:
        self.calls.append((recipient, amount))
        if self.raise_exc is not None:
            raise self.raise_exc

        if not self.succeed:
            return TransferResult(status="FAILED", error=self.error, response={"mock": True})

        self.transfers.append((recipient, amount))
        return TransferResult(
            status="CONFIRMED",
            reference=f"mock-{uuid.uuid4()}",
            response={"mock": True},
        )
