from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from uuid import UUID

from security import decode_token

bearer = HTTPBearer(auto_error=False)

class CurrentCaller:
    def __init__(self, caller_id: UUID):
        self.caller_id = caller_id

def get_current_caller(
    creds: HTTPAuthorizationCredentials = Depends(bearer),
) -> CurrentCaller:
    if not creds:
        raise HTTPException(status_code=401, detail="UNAUTHORIZED")

    # must be "Bearer"
    if (creds.scheme or "").lower() != "bearer":
        raise HTTPException(status_code=401, detail="UNAUTHORIZED")

    payload = decode_token(creds.credentials)
    sub = payload.get("sub")
    if not sub:
        raise HTTPException(status_code=401, detail="UNAUTHORIZED")
    try:
        return CurrentCaller(caller_id=UUID(sub))
    except ValueError:
        raise HTTPException(status_code=401, detail="UNAUTHORIZED")
