# routes/debug.py
from fastapi import APIRouter

from schemas import DebugTokenRequest, TokenResponse
from security import create_access_token

router = APIRouter(prefix="/v1/debug", tags=["debug"])


@router.post("/token", response_model=TokenResponse)
def mint_token(body: DebugTokenRequest):
    # dev only: mounted when DEBUG_TOKENS_ENABLED is set
    return TokenResponse(access_token=create_access_token(str(body.caller_id), minutes=body.minutes))
