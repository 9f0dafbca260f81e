# routes/pool.py
from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from app.pool.errors import PoolError
from app.pool.service import PoolService
from deps.auth import get_current_caller, CurrentCaller
from deps.pool import get_pool
from schemas import (
    BalanceResponse,
    ContributionRequest,
    ContributorItem,
    ContributorListResponse,
    NextCycleResponse,
    NextRequesterResponse,
    PayoutHistoryItem,
    PayoutHistoryResponse,
    PayoutRequestItem,
    PoolStateResponse,
)
from services.pool_errors import raise_http_from_pool_error

logger = logging.getLogger("poolpay")
router = APIRouter(prefix="/v1/pool", tags=["pool"])


def _state(pool: PoolService) -> PoolStateResponse:
    return PoolStateResponse.from_snapshot(pool.snapshot(), all_paid=pool.all_paid())


@router.get("", response_model=PoolStateResponse)
def get_pool_state(
    _caller: CurrentCaller = Depends(get_current_caller),
    pool: PoolService = Depends(get_pool),
):
    return _state(pool)


@router.post("/contributions", response_model=PoolStateResponse, status_code=201)
def contribute(
    body: ContributionRequest,
    caller: CurrentCaller = Depends(get_current_caller),
    pool: PoolService = Depends(get_pool),
):
    try:
        pool.contribute(caller.caller_id, body.amount_cents)
    except PoolError as exc:
        logger.info("contribution rejected caller=%s code=%s", caller.caller_id, exc.code)
        raise_http_from_pool_error(exc)
    return _state(pool)


@router.post("/payout-requests", response_model=PayoutRequestItem, status_code=201)
def request_payout(
    caller: CurrentCaller = Depends(get_current_caller),
    pool: PoolService = Depends(get_pool),
):
    try:
        pending = pool.request_payout(caller.caller_id)
    except PoolError as exc:
        logger.info("payout request rejected caller=%s code=%s", caller.caller_id, exc.code)
        raise_http_from_pool_error(exc)
    return PayoutRequestItem.from_request(pending)


@router.get("/next-requester", response_model=NextRequesterResponse)
def next_requester(
    _caller: CurrentCaller = Depends(get_current_caller),
    pool: PoolService = Depends(get_pool),
):
    return NextRequesterResponse(requester_id=pool.next_requester())


@router.get("/contributors", response_model=ContributorListResponse)
def list_contributors(
    _caller: CurrentCaller = Depends(get_current_caller),
    pool: PoolService = Depends(get_pool),
):
    items = [ContributorItem(contributor_id=i, funded_cents=b) for i, b in pool.contributors()]
    return ContributorListResponse(cycle=pool.snapshot().cycle, contributors=items)


@router.get("/balances/{contributor_id}", response_model=BalanceResponse)
def balance_of(
    contributor_id: UUID,
    _caller: CurrentCaller = Depends(get_current_caller),
    pool: PoolService = Depends(get_pool),
):
    return BalanceResponse(contributor_id=contributor_id, funded_cents=pool.balance_of(contributor_id))


@router.get("/history", response_model=PayoutHistoryResponse)
def payout_history(
    _caller: CurrentCaller = Depends(get_current_caller),
    pool: PoolService = Depends(get_pool),
):
    snap = pool.snapshot()
    return PayoutHistoryResponse(
        cycle=snap.cycle,
        completed_payouts=snap.completed_payouts,
        payouts=[PayoutHistoryItem.from_record(r) for r in snap.payout_history],
    )


@router.post("/next-cycle", response_model=NextCycleResponse)
def next_cycle(
    _caller: CurrentCaller = Depends(get_current_caller),
    pool: PoolService = Depends(get_pool),
):
    advanced = pool.next_cycle()
    return NextCycleResponse(cycle=pool.snapshot().cycle, advanced=advanced)
