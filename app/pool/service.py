# app/pool/service.py
from __future__ import annotations

import logging
from threading import Lock
from typing import List, Optional, Tuple

from app.pool.errors import PoolError
from app.pool.events import EventSink
from app.pool.ledger import Ledger
from app.pool.model import Identity, PayoutRecord, PayoutRequest, PoolSnapshot
from app.providers.base import TransferProvider
from services import metrics

logger = logging.getLogger("poolpay.ledger")


class PoolService:
    """
    Host adapter around a single Ledger.

    Runs every operation under one lock (sync FastAPI handlers share a thread
    pool) and moves contributed value into the transfer provider's account.
    """

    def __init__(
        self,
        *,
        operator: Identity,
        provider: TransferProvider,
        min_contribution: int,
        quota: int = 0,
        events: EventSink | None = None,
    ):
        self.provider = provider
        self.ledger = Ledger(
            operator=operator,
            transfer=provider,
            min_contribution=min_contribution,
            quota=quota,
            events=events,
        )
        self._lock = Lock()

    def set_quota(self, caller: Identity, new_quota: int) -> int:
        with self._lock:
            self.ledger.set_quota(caller, new_quota)
            return self.ledger.get_quota()

    def contribute(self, caller: Identity, amount: int) -> PoolSnapshot:
        with self._lock:
            try:
                self.ledger.contribute(caller, amount)
            except PoolError as exc:
                metrics.increment_pool_contribution(exc.code)
                raise

            deposit = getattr(self.provider, "deposit", None)
            if deposit is not None:
                deposit(amount)
            metrics.increment_pool_contribution("accepted")
            return self.ledger.snapshot()

    def request_payout(self, caller: Identity) -> Optional[PayoutRequest]:
        with self._lock:
            self.ledger.request_payout(caller)
            return self.ledger.get_pending_request()

    def approve_payout(self, caller: Identity, requester: Identity | None = None) -> Tuple[PayoutRecord, bool]:
        """Returns the payout record and whether the cycle rolled over."""
        with self._lock:
            cycle_before = self.ledger.get_cycle()
            try:
                record = self.ledger.approve_payout(caller, requester)
            except PoolError as exc:
                metrics.increment_pool_payout(exc.code)
                raise

            metrics.increment_pool_payout("paid")
            rolled = self.ledger.get_cycle() != cycle_before
            if rolled:
                metrics.increment_pool_cycle()
            return record, rolled

    def next_cycle(self) -> bool:
        with self._lock:
            rolled = self.ledger.next_cycle()
            if rolled:
                metrics.increment_pool_cycle()
            return rolled

    def snapshot(self) -> PoolSnapshot:
        with self._lock:
            return self.ledger.snapshot()

    def next_requester(self) -> Optional[Identity]:
        with self._lock:
            return self.ledger.get_next_requester()

    def contributors(self) -> List[Tuple[Identity, int]]:
        with self._lock:
            return self.ledger.get_contributors()

    def balance_of(self, identity: Identity) -> int:
        with self._lock:
            return self.ledger.balance_of(identity)

    def all_paid(self) -> bool:
        with self._lock:
            return self.ledger.all_paid()
