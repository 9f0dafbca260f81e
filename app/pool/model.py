# app/pool/model.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional, Tuple

Identity = Hashable


@dataclass
class Participant:
    identity: Identity
    funded_amount: int
    paid: bool = False


@dataclass(frozen=True)
class PayoutRequest:
    requester: Identity
    amount: int


@dataclass(frozen=True)
class PayoutRecord:
    recipient: Identity
    amount: int


@dataclass(frozen=True)
class PoolSnapshot:
    operator: Identity
    quota: int
    min_contribution: int
    total_supply: int
    total_contributors: int
    completed_payouts: int
    cycle: int
    queue: Tuple[Identity, ...]
    pending_request: Optional[PayoutRequest]
    payout_history: Tuple[PayoutRecord, ...]
