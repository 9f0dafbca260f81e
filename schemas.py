# schemas.py
from __future__ import annotations

from pydantic import BaseModel, Field, ConfigDict
from uuid import UUID
from typing import Optional, List

from app.pool.model import PayoutRecord, PayoutRequest, PoolSnapshot


# -------- CONTRIBUTIONS --------
class ContributionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    amount_cents: int = Field(ge=0)


class ContributorItem(BaseModel):
    contributor_id: UUID
    funded_cents: int


class ContributorListResponse(BaseModel):
    cycle: int
    contributors: List[ContributorItem]


class BalanceResponse(BaseModel):
    contributor_id: UUID
    funded_cents: int


# -------- PAYOUTS --------
class PayoutRequestItem(BaseModel):
    requester_id: UUID
    amount_cents: int

    @classmethod
    def from_request(cls, req: PayoutRequest) -> "PayoutRequestItem":
        return cls(requester_id=req.requester, amount_cents=req.amount)


class PayoutHistoryItem(BaseModel):
    recipient_id: UUID
    amount_cents: int

    @classmethod
    def from_record(cls, rec: PayoutRecord) -> "PayoutHistoryItem":
        return cls(recipient_id=rec.recipient, amount_cents=rec.amount)


class PayoutHistoryResponse(BaseModel):
    cycle: int
    completed_payouts: int
    payouts: List[PayoutHistoryItem]


class NextRequesterResponse(BaseModel):
    requester_id: Optional[UUID] = None


class ApprovePayoutRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    requester_id: Optional[UUID] = None


class ApprovePayoutResponse(BaseModel):
    payout: PayoutHistoryItem
    cycle: int
    cycle_advanced: bool


class NextCycleResponse(BaseModel):
    cycle: int
    advanced: bool


# -------- OPERATOR --------
class SetQuotaRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    quota: int


class QuotaResponse(BaseModel):
    quota: int


# -------- POOL --------
class PoolStateResponse(BaseModel):
    operator_id: UUID
    quota: int
    min_contribution_cents: int
    total_supply_cents: int
    total_contributors: int
    completed_payouts: int
    cycle: int
    all_paid: bool
    queue: List[UUID]
    pending_request: Optional[PayoutRequestItem] = None
    payout_history: List[PayoutHistoryItem]

    @classmethod
    def from_snapshot(cls, snap: PoolSnapshot, *, all_paid: bool) -> "PoolStateResponse":
        return cls(
            operator_id=snap.operator,
            quota=snap.quota,
            min_contribution_cents=snap.min_contribution,
            total_supply_cents=snap.total_supply,
            total_contributors=snap.total_contributors,
            completed_payouts=snap.completed_payouts,
            cycle=snap.cycle,
            all_paid=all_paid,
            queue=list(snap.queue),
            pending_request=(
                PayoutRequestItem.from_request(snap.pending_request) if snap.pending_request else None
            ),
            payout_history=[PayoutHistoryItem.from_record(r) for r in snap.payout_history],
        )


# -------- DEBUG --------
class DebugTokenRequest(BaseModel):
    caller_id: UUID
    minutes: Optional[int] = Field(default=None, gt=0)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
