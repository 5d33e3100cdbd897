"""Receipt builders shared by the test modules."""

from __future__ import annotations

from receipt_rewards.models.schemas import Item, Receipt


def make_receipt(
    retailer: str = "",
    purchase_date: str = "2022-01-02",
    purchase_time: str = "10:00",
    total: str = "1.01",
    items: list[tuple[str, str]] | None = None,
) -> Receipt:
    """Build a receipt that scores zero except for the fields given."""
    return Receipt(
        retailer=retailer,
        purchase_date=purchase_date,
        purchase_time=purchase_time,
        total=total,
        items=[Item(short_description=d, price=p) for d, p in (items or [])],
    )


TARGET_RECEIPT = {
    "retailer": "Target",
    "purchaseDate": "2022-01-01",
    "purchaseTime": "13:01",
    "items": [
        {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
        {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
        {"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
        {"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
        {"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
    ],
    "total": "35.35",
}

CORNER_MARKET_RECEIPT = {
    "retailer": "M&M Corner Market",
    "purchaseDate": "2022-03-20",
    "purchaseTime": "14:33",
    "items": [
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
    ],
    "total": "9.00",
}
