"""Receipt store abstraction.

Scored receipts are kept behind the ``ReceiptStore`` interface so the
backing storage can change without touching the rule engine or the
routes. The backend is selected via ``settings.RECEIPT_STORE_BACKEND``:

1. **memory** (default): A dict guarded by a lock. Receipts live for the
   lifetime of the process.

The store does not check identifier uniqueness; callers generate ids
with :func:`receipt_rewards.utils.identifiers.new_receipt_id`.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

from receipt_rewards.core.config import settings
from receipt_rewards.models.enums import StoreBackend
from receipt_rewards.models.schemas import ScoredReceipt

logger = logging.getLogger(__name__)


class ReceiptStore(ABC):
    """Mapping from receipt identifier to scored receipt."""

    @abstractmethod
    def put(self, receipt_id: str, scored: ScoredReceipt) -> None:
        """Insert or overwrite the scored receipt under ``receipt_id``."""

    @abstractmethod
    def find(self, receipt_id: str) -> Optional[ScoredReceipt]:
        """Return the scored receipt for ``receipt_id`` or ``None`` if unknown."""

    @abstractmethod
    def __len__(self) -> int: ...

    def get(self, receipt_id: str) -> int:
        """Return the points stored under ``receipt_id``; 0 when unknown.

        Use :meth:`find` when a never-issued id must be told apart from a
        receipt that genuinely scored zero.
        """
        scored = self.find(receipt_id)
        return scored.points if scored is not None else 0

    def __contains__(self, receipt_id: object) -> bool:
        return isinstance(receipt_id, str) and self.find(receipt_id) is not None


class InMemoryReceiptStore(ReceiptStore):
    """Process-local store safe for concurrent use from request threads."""

    def __init__(self) -> None:
        self._receipts: Dict[str, ScoredReceipt] = {}
        self._lock = threading.Lock()

    def put(self, receipt_id: str, scored: ScoredReceipt) -> None:
        with self._lock:
            self._receipts[receipt_id] = scored

    def find(self, receipt_id: str) -> Optional[ScoredReceipt]:
        with self._lock:
            return self._receipts.get(receipt_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._receipts)


_store: Optional[ReceiptStore] = None
_store_lock = threading.Lock()


def create_receipt_store(backend: str | None = None) -> ReceiptStore:
    """Build a new store for ``backend`` (defaults to the configured one).

    Raises ``ValueError`` for an unknown backend name.
    """
    name = (backend or settings.RECEIPT_STORE_BACKEND or StoreBackend.MEMORY.value).lower()
    kind = StoreBackend(name)
    if kind is StoreBackend.MEMORY:
        return InMemoryReceiptStore()
    raise ValueError(f"unsupported receipt store backend {name!r}")


def get_receipt_store() -> ReceiptStore:
    """Return the process-wide receipt store, creating it on first use."""
    global _store
    if _store is not None:
        return _store
    with _store_lock:
        if _store is None:
            _store = create_receipt_store()
            logger.info("Receipt store initialised (backend=%s)", settings.RECEIPT_STORE_BACKEND)
    return _store
