# tests/conftest.py

import uuid
from dataclasses import dataclass
from typing import Dict

import pytest
from fastapi.testclient import TestClient

from app.pool.events import RecordingEventSink
from app.pool.ledger import Ledger
from app.pool.service import PoolService
from app.providers.mock import MockTransferProvider
from main import create_app
from security import create_access_token
from services import metrics


OPERATOR_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")


@dataclass
class Caller:
    caller_id: uuid.UUID
    token: str

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


def _caller(caller_id: uuid.UUID) -> Caller:
    return Caller(caller_id=caller_id, token=create_access_token(str(caller_id)))


@pytest.fixture(autouse=True)
def _reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


# ---------------------------
# Ledger (unit) fixtures
# ---------------------------

@pytest.fixture
def operator() -> uuid.UUID:
    return OPERATOR_ID


@pytest.fixture
def alice() -> uuid.UUID:
    return uuid.UUID("00000000-0000-0000-0000-00000000a11c")


@pytest.fixture
def bob() -> uuid.UUID:
    return uuid.UUID("00000000-0000-0000-0000-000000000b0b")


@pytest.fixture
def carol() -> uuid.UUID:
    return uuid.UUID("00000000-0000-0000-0000-00000000ca01")


@pytest.fixture
def provider() -> MockTransferProvider:
    return MockTransferProvider(succeed=True)


@pytest.fixture
def events() -> RecordingEventSink:
    return RecordingEventSink()


@pytest.fixture
def ledger(operator, provider, events) -> Ledger:
    return Ledger(operator=operator, transfer=provider, min_contribution=50, events=events)


# ---------------------------
# API fixtures
# ---------------------------

@pytest.fixture
def pool(operator, provider, events) -> PoolService:
    return PoolService(operator=operator, provider=provider, min_contribution=50, events=events)


@pytest.fixture
def client(pool) -> TestClient:
    # Needed so tests can assert 500s instead of pytest re-raising server exceptions
    return TestClient(create_app(pool=pool), raise_server_exceptions=False)


@pytest.fixture
def operator_caller(operator) -> Caller:
    return _caller(operator)


@pytest.fixture
def alice_caller(alice) -> Caller:
    return _caller(alice)


@pytest.fixture
def bob_caller(bob) -> Caller:
    return _caller(bob)
