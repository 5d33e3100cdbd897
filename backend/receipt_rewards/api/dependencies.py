"""Shared FastAPI dependencies."""

from __future__ import annotations

from receipt_rewards.services.receipt_store import ReceiptStore, get_receipt_store


def get_store() -> ReceiptStore:
    """Return the receipt store used by request handlers.

    Tests override this dependency to run against an isolated store.
    """
    return get_receipt_store()
