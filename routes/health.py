from __future__ import annotations

import os

from fastapi import APIRouter

from settings import settings

router = APIRouter(tags=["health"])


def _resolve_git_sha() -> str | None:
    return (
        (os.getenv("GIT_SHA") or "").strip()
        or (os.getenv("FLY_IMAGE_REF") or "").strip()
        or None
    )


@router.get("/health")
def health():
    return {
        "ok": True,
        "env": (settings.ENV or "").strip(),
        "transfer_provider": settings.TRANSFER_PROVIDER,
        "version": os.getenv("APP_VERSION", "1.0.0"),
        "git_sha": _resolve_git_sha(),
    }
