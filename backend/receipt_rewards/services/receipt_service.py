"""Receipt processing service.

Ties the rule engine, identifier generation and the receipt store
together so routes stay thin and the flow can be exercised without HTTP.
"""

from __future__ import annotations

import logging
from typing import Optional

from receipt_rewards.core.observability import sentry_breadcrumb
from receipt_rewards.models.schemas import Receipt, ScoredReceipt
from receipt_rewards.services.receipt_store import ReceiptStore
from receipt_rewards.services.rule_engine import evaluate_rules
from receipt_rewards.utils.identifiers import new_receipt_id

logger = logging.getLogger(__name__)


def process_receipt(receipt: Receipt, store: ReceiptStore) -> ScoredReceipt:
    """Score ``receipt``, store the result under a fresh id and return it."""
    contributions, reasons, total = evaluate_rules(receipt)
    scored = ScoredReceipt(id=new_receipt_id(), points=total, breakdown=contributions)
    store.put(scored.id, scored)
    logger.info("Scored receipt %s from %r: %d points", scored.id, receipt.retailer, total)
    for reason in reasons:
        logger.debug("receipt %s %s", scored.id, reason)
    sentry_breadcrumb("receipts", "receipt scored", data={"receipt_id": scored.id, "points": total})
    return scored


def lookup_points(receipt_id: str, store: ReceiptStore) -> Optional[int]:
    """Return the points for ``receipt_id`` or ``None`` if it was never issued."""
    scored = store.find(receipt_id)
    if scored is None:
        logger.info("Points requested for unknown receipt %s", receipt_id)
        return None
    return scored.points
