from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add backend folder to sys.path so `import receipt_rewards...` works without an install
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from fastapi.testclient import TestClient  # noqa: E402

from receipt_rewards.api.dependencies import get_store  # noqa: E402
from receipt_rewards.api.main import app  # noqa: E402
from receipt_rewards.services.receipt_store import InMemoryReceiptStore  # noqa: E402


@pytest.fixture
def store():
    return InMemoryReceiptStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.pop(get_store, None)
