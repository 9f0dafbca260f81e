# app/pool/events.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Hashable, List, Literal, Optional, Protocol

logger = logging.getLogger("poolpay.events")

EventKind = Literal["FUNDS_RECEIVED", "PAYOUT_MADE"]


@dataclass(frozen=True)
class TransferEvent:
    kind: EventKind
    sender: Optional[Hashable]
    recipient: Optional[Hashable]
    value: int


class EventSink(Protocol):
    def emit(self, event: TransferEvent) -> None: ...


class LoggingEventSink:
    def emit(self, event: TransferEvent) -> None:
        logger.info(
            "pool_event kind=%s from=%s to=%s value=%s",
            event.kind,
            event.sender,
            event.recipient,
            event.value,
        )


class RecordingEventSink:
    """Keeps every emitted event in order; used by tests and the debug surface."""

    def __init__(self) -> None:
        self.events: List[TransferEvent] = []

    def emit(self, event: TransferEvent) -> None:
        self.events.append(event)

    def kinds(self) -> List[str]:
        return [e.kind for e in self.events]
