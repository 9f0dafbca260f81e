# app/providers/factory.py
from __future__ import annotations

import logging
from uuid import UUID

from settings import settings

logger = logging.getLogger("poolpay")


def _rejected_ids(raw: str) -> set[UUID]:
    ids: set[UUID] = set()
    for part in (raw or "").split(","):
        part = part.strip()
        if not part:
            continue
        try:
            ids.add(UUID(part))
        except ValueError:
            logger.warning("ignoring malformed TREASURY_REJECTED_IDS entry=%s", part)
    return ids


def get_transfer_provider(name: str | None = None):
    key = (name or settings.TRANSFER_PROVIDER or "").strip().lower()

    if key == "treasury":
        from app.providers.treasury import InMemoryTreasury
        return InMemoryTreasury(rejected=_rejected_ids(settings.TREASURY_REJECTED_IDS))

    if key == "mock":
        from app.providers.mock import MockTransferProvider
        return MockTransferProvider(succeed=True)

    raise ValueError(f"Unknown transfer provider: {name!r}")
