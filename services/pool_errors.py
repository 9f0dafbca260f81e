# services/pool_errors.py
from __future__ import annotations

from fastapi import HTTPException

from app.pool.errors import PoolError

POOL_ERROR_HTTP_MAP: dict[str, int] = {
    "NOT_OPERATOR": 403,
    "INVALID_QUOTA": 422,
    "ALREADY_CONTRIBUTED": 409,
    "AMOUNT_TOO_LOW": 422,
    "NOT_PAYMENT_PHASE": 409,
    "NOT_NEXT_IN_QUEUE": 409,
    "NO_PENDING_REQUEST": 409,
    "TRANSFER_FAILURE": 502,
}


def raise_http_from_pool_error(exc: Exception) -> None:
    """
    Convert ledger rejections into HTTP responses; anything else fails closed.
    """
    code = getattr(exc, "code", None) if isinstance(exc, PoolError) else None
    if code and code in POOL_ERROR_HTTP_MAP:
        raise HTTPException(status_code=POOL_ERROR_HTTP_MAP[code], detail=code)

    raise HTTPException(status_code=500, detail="Internal server error")
