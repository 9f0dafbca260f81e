# app/pool/ledger.py
from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Tuple

from app.pool.errors import (
    AlreadyContributed,
    AmountTooLow,
    InvalidQuota,
    NoPendingRequest,
    NotNextInQueue,
    NotOperator,
    NotPaymentPhase,
    TransferFailure,
)
from app.pool.events import EventSink, LoggingEventSink, TransferEvent
from app.pool.model import Identity, Participant, PayoutRecord, PayoutRequest, PoolSnapshot
from app.providers.base import TransferProvider

logger = logging.getLogger("poolpay.ledger")

DEFAULT_MIN_CONTRIBUTION = 50


class Ledger:
    """
    Pooled-contribution payout ledger.

    Participants contribute once per cycle and join a FIFO queue. When the
    number of contributors equals the quota, the queue head may request the
    pool; the operator approves, the pool is transferred to the requester and
    the queue advances. The cycle rolls over once every queued participant
    has been paid out.

    Every public operation validates first and mutates last, so a raised
    PoolError leaves state exactly as it was. Callers are responsible for
    serializing operations (see PoolService).
    """

    def __init__(
        self,
        *,
        operator: Identity,
        transfer: TransferProvider,
        min_contribution: int = DEFAULT_MIN_CONTRIBUTION,
        quota: int = 0,
        events: EventSink | None = None,
    ):
        if quota < 0:
            raise InvalidQuota(f"quota must be >= 0, got {quota}")

        self._operator = operator
        self._transfer = transfer
        self._events = events or LoggingEventSink()
        self._min_contribution = int(min_contribution)
        self._quota = int(quota)

        self._participants: Dict[Identity, Participant] = {}
        self._queue: Deque[Identity] = deque()
        self._pending: Optional[PayoutRequest] = None
        self._history: List[PayoutRecord] = []
        self._total_supply = 0
        self._contributors_count = 0
        self._completed_payouts = 0
        self._cycle = 1

    # -----------------------
    # Configuration
    # -----------------------
    @property
    def operator(self) -> Identity:
        return self._operator

    def get_min_contribution(self) -> int:
        return self._min_contribution

    def set_quota(self, caller: Identity, new_quota: int) -> None:
        if caller != self._operator:
            raise NotOperator()
        if new_quota < 0:
            raise InvalidQuota(f"quota must be >= 0, got {new_quota}")

        old = self._quota
        self._quota = int(new_quota)
        logger.info("quota updated old=%s new=%s cycle=%s", old, self._quota, self._cycle)

    def get_quota(self) -> int:
        return self._quota

    # -----------------------
    # Contribution phase
    # -----------------------
    def contribute(self, caller: Identity, amount: int) -> None:
        # A returning contributor is rejected, never topped up.
        if caller in self._participants:
            raise AlreadyContributed()
        if amount < self._min_contribution:
            raise AmountTooLow(f"amount {amount} below minimum {self._min_contribution}")

        funded = self.balance_of(caller) + int(amount)
        self._contributors_count += 1
        self._queue.append(caller)
        self._participants[caller] = Participant(identity=caller, funded_amount=funded, paid=False)
        self._total_supply += int(amount)

        logger.info(
            "contribution accepted contributor=%s amount=%s total_supply=%s contributors=%s cycle=%s",
            caller,
            amount,
            self._total_supply,
            self._contributors_count,
            self._cycle,
        )
        self._events.emit(
            TransferEvent(kind="FUNDS_RECEIVED", sender=None, recipient=caller, value=self._total_supply)
        )

    # -----------------------
    # Payment phase
    # -----------------------
    def request_payout(self, caller: Identity) -> None:
        if self._contributors_count != self._quota:
            raise NotPaymentPhase(
                f"contributors={self._contributors_count} quota={self._quota}"
            )
        if caller != self.get_next_requester():
            raise NotNextInQueue()

        if self._pending is not None:
            logger.warning(
                "payout request replaced requester=%s old_amount=%s",
                self._pending.requester,
                self._pending.amount,
            )
        self._pending = PayoutRequest(requester=caller, amount=self._total_supply)
        logger.info("payout requested requester=%s amount=%s", caller, self._total_supply)

    def approve_payout(self, caller: Identity, requester: Identity | None = None) -> PayoutRecord:
        if caller != self._operator:
            raise NotOperator()

        pending = self._pending
        if pending is None:
            raise NoPendingRequest()
        if requester is not None and requester != pending.requester:
            raise NoPendingRequest(f"no pending request for {requester}")

        # Nothing is mutated until the transfer reports success.
        try:
            result = self._transfer.transfer(pending.requester, pending.amount)
        except Exception as exc:
            logger.warning(
                "payout transfer error requester=%s amount=%s err=%s",
                pending.requester,
                pending.amount,
                exc,
            )
            raise TransferFailure(f"{type(exc).__name__}: {exc}") from exc

        if not result.ok:
            logger.warning(
                "payout transfer failed requester=%s amount=%s err=%s",
                pending.requester,
                pending.amount,
                result.error,
            )
            raise TransferFailure(result.error or "transfer failed")

        record = PayoutRecord(recipient=pending.requester, amount=pending.amount)
        self._pending = None
        # the queue only moves on approval, so the requester is still its head
        self._queue.popleft()
        self._total_supply -= pending.amount
        self._completed_payouts += 1
        self._history.append(record)
        for participant in self._participants.values():
            participant.paid = False

        logger.info(
            "payout approved requester=%s amount=%s reference=%s completed=%s",
            record.recipient,
            record.amount,
            result.reference,
            self._completed_payouts,
        )
        self.next_cycle()
        self._events.emit(
            TransferEvent(kind="PAYOUT_MADE", sender=self._operator, recipient=record.recipient, value=record.amount)
        )
        return record

    # -----------------------
    # Cycle
    # -----------------------
    def all_paid(self) -> bool:
        for identity in self._queue:
            participant = self._participants.get(identity)
            if participant is None or not participant.paid:
                return False
        return True

    def next_cycle(self) -> bool:
        """Roll into a new cycle when everyone queued has been paid. Returns True if it rolled."""
        if not self.all_paid():
            return False
        if len(self._history) != self._contributors_count:
            return False

        self._participants = {}
        self._history = []
        self._contributors_count = 0
        self._completed_payouts = 0
        self._cycle += 1
        logger.info("cycle advanced cycle=%s total_supply=%s", self._cycle, self._total_supply)
        return True

    # -----------------------
    # Reads
    # -----------------------
    def get_next_requester(self) -> Optional[Identity]:
        return self._queue[0] if self._queue else None

    def get_pending_request(self) -> Optional[PayoutRequest]:
        return self._pending

    def get_completed_payouts(self) -> int:
        return self._completed_payouts

    def get_payout_history(self) -> List[PayoutRecord]:
        return list(self._history)

    def get_total_supply(self) -> int:
        return self._total_supply

    def total_contributors(self) -> int:
        return self._contributors_count

    def get_cycle(self) -> int:
        return self._cycle

    def balance_of(self, identity: Identity) -> int:
        participant = self._participants.get(identity)
        return participant.funded_amount if participant else 0

    def get_contributors(self) -> List[Tuple[Identity, int]]:
        return [(identity, self.balance_of(identity)) for identity in self._queue]

    def snapshot(self) -> PoolSnapshot:
        return PoolSnapshot(
            operator=self._operator,
            quota=self._quota,
            min_contribution=self._min_contribution,
            total_supply=self._total_supply,
            total_contributors=self._contributors_count,
            completed_payouts=self._completed_payouts,
            cycle=self._cycle,
            queue=tuple(self._queue),
            pending_request=self._pending,
            payout_history=tuple(self._history),
        )
