# app/pool/errors.py
from __future__ import annotations


class PoolError(Exception):
    """Base for every rejection the ledger can report. State is untouched when raised."""

    code = "POOL_ERROR"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.code)


class NotOperator(PoolError):
    code = "NOT_OPERATOR"


class InvalidQuota(PoolError):
    code = "INVALID_QUOTA"


class AlreadyContributed(PoolError):
    code = "ALREADY_CONTRIBUTED"


class AmountTooLow(PoolError):
    code = "AMOUNT_TOO_LOW"


class NotPaymentPhase(PoolError):
    code = "NOT_PAYMENT_PHASE"


class NotNextInQueue(PoolError):
    code = "NOT_NEXT_IN_QUEUE"


class NoPendingRequest(PoolError):
    code = "NO_PENDING_REQUEST"


class TransferFailure(PoolError):
    code = "TRANSFER_FAILURE"
