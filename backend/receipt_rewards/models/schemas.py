"""Pydantic schemas for request and response models.

Pydantic models validate and serialise data that crosses the boundary
of the API. The wire format uses camelCase field names
(``purchaseDate``, ``shortDescription``); the Python attributes use
snake_case and the models accept either on input.

Field *values* are kept as the literal strings the client sent. The
rule engine parses them itself so that an unparseable total or date
only affects the rule that needs it.
"""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from .enums import RuleName


# ---------------------------------------------------------------------------
# Domain schemas


class Item(BaseModel):
    """A single line item on a receipt."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    short_description: str = Field(alias="shortDescription")
    price: str


class Receipt(BaseModel):
    """A purchase receipt submitted for scoring."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    retailer: str
    purchase_date: str = Field(alias="purchaseDate", description="Purchase date as YYYY-MM-DD")
    purchase_time: str = Field(alias="purchaseTime", description="Purchase time as HH:MM, 24-hour clock")
    total: str = Field(description="Total amount paid as a decimal string")
    items: List[Item]


class ScoredReceipt(BaseModel):
    """Result of scoring a receipt, as kept by the receipt store."""

    model_config = ConfigDict(frozen=True)

    id: str
    points: int = Field(ge=0)
    breakdown: Dict[RuleName, int] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# API request/response schemas


class ProcessReceiptResponse(BaseModel):
    id: str


class PointsResponse(BaseModel):
    points: int
