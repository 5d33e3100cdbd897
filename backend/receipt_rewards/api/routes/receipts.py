"""API routes for receipt processing and points lookup."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from receipt_rewards.api.dependencies import get_store
from receipt_rewards.core.config import settings
from receipt_rewards.core.observability import sentry_set_tags
from receipt_rewards.models.schemas import PointsResponse, ProcessReceiptResponse, Receipt
from receipt_rewards.services.receipt_service import lookup_points, process_receipt
from receipt_rewards.services.receipt_store import ReceiptStore
from receipt_rewards.services.rule_engine import find_invalid_fields

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/receipts", tags=["receipts"])


@router.post(
    "/process",
    response_model=ProcessReceiptResponse,
    status_code=status.HTTP_201_CREATED,
)
async def process(receipt: Receipt, store: ReceiptStore = Depends(get_store)):
    """Score a receipt and return the identifier its points are stored under.

    Unparseable total/price/date/time values score zero for the rules
    that need them unless ``STRICT_FIELD_VALIDATION`` is enabled, in
    which case the receipt is rejected with 400.
    """
    if settings.STRICT_FIELD_VALIDATION:
        invalid = find_invalid_fields(receipt)
        if invalid:
            logger.warning("Rejecting receipt with invalid fields: %s", invalid)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error": "Invalid receipt fields", "fields": invalid},
            )
    scored = process_receipt(receipt, store)
    sentry_set_tags({"receipt_id": scored.id})
    return ProcessReceiptResponse(id=scored.id)


@router.get("/{receipt_id}/points", response_model=PointsResponse)
async def get_points(receipt_id: str, store: ReceiptStore = Depends(get_store)):
    """Return the points awarded to a previously processed receipt.

    Unknown ids yield 404, or ``{"points": 0}`` when
    ``UNKNOWN_RECEIPT_RETURNS_ZERO`` is enabled for legacy clients.
    """
    points = lookup_points(receipt_id, store)
    if points is None:
        if settings.UNKNOWN_RECEIPT_RETURNS_ZERO:
            return PointsResponse(points=0)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Receipt not found")
    return PointsResponse(points=points)
