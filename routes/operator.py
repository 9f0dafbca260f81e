# routes/operator.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from app.pool.errors import PoolError
from app.pool.service import PoolService
from deps.auth import get_current_caller, CurrentCaller
from deps.pool import get_pool
from schemas import (
    ApprovePayoutRequest,
    ApprovePayoutResponse,
    PayoutHistoryItem,
    QuotaResponse,
    SetQuotaRequest,
)
from services.pool_errors import raise_http_from_pool_error

logger = logging.getLogger("poolpay")
router = APIRouter(prefix="/v1/operator", tags=["operator"])


@router.get("/quota", response_model=QuotaResponse)
def get_quota(
    _caller: CurrentCaller = Depends(get_current_caller),
    pool: PoolService = Depends(get_pool),
):
    return QuotaResponse(quota=pool.snapshot().quota)


@router.put("/quota", response_model=QuotaResponse)
def set_quota(
    body: SetQuotaRequest,
    caller: CurrentCaller = Depends(get_current_caller),
    pool: PoolService = Depends(get_pool),
):
    try:
        quota = pool.set_quota(caller.caller_id, body.quota)
    except PoolError as exc:
        logger.warning("set quota rejected caller=%s code=%s", caller.caller_id, exc.code)
        raise_http_from_pool_error(exc)
    return QuotaResponse(quota=quota)


@router.post("/payouts/approve", response_model=ApprovePayoutResponse)
def approve_payout(
    body: ApprovePayoutRequest | None = None,
    caller: CurrentCaller = Depends(get_current_caller),
    pool: PoolService = Depends(get_pool),
):
    requester = body.requester_id if body else None
    try:
        record, rolled = pool.approve_payout(caller.caller_id, requester)
    except PoolError as exc:
        logger.warning("payout approval rejected caller=%s code=%s", caller.caller_id, exc.code)
        raise_http_from_pool_error(exc)

    return ApprovePayoutResponse(
        payout=PayoutHistoryItem.from_record(record),
        cycle=pool.snapshot().cycle,
        cycle_advanced=rolled,
    )
