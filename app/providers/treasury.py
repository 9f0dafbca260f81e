# app/providers/treasury.py
from __future__ import annotations

import logging
import uuid
from typing import Dict, Hashable, Iterable

from app.providers.base import TransferResult

logger = logging.getLogger("poolpay.treasury")


class InMemoryTreasury:
    """
    Pool account held in process memory.

    Contributions are deposited by the host after the ledger accepts them;
    transfers debit the account and credit the recipient. A transfer fails
    on insufficient funds or when the recipient is on the rejected list.
    """

    def __init__(self, *, rejected: Iterable[Hashable] = ()):
        self.balance = 0
        self.rejected = set(rejected)
        self.credited: Dict[Hashable, int] = {}

    def deposit(self, amount: int) -> None:
        self.balance += int(amount)

    def transfer(self, recipient: Hashable, amount: int) -> TransferResult:
        if recipient in self.rejected:
            logger.warning("treasury transfer rejected recipient=%s amount=%s", recipient, amount)
            return TransferResult(status="FAILED", error="RECIPIENT_REJECTED")

        if amount > self.balance:
            logger.warning(
                "treasury transfer insufficient funds recipient=%s amount=%s balance=%s",
                recipient,
                amount,
                self.balance,
            )
            return TransferResult(status="FAILED", error="INSUFFICIENT_FUNDS")

        self.balance -= int(amount)
        self.credited[recipient] = self.credited.get(recipient, 0) + int(amount)
        ref = f"tr-{uuid.uuid4()}"
        logger.info("treasury transfer ok recipient=%s amount=%s ref=%s", recipient, amount, ref)
        return TransferResult(status="CONFIRMED", reference=ref, response={"balance": self.balance})
