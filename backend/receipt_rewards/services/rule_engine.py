"""Rewards rule engine for scoring receipts.

The rule engine applies a fixed set of rules to a ``Receipt`` and sums
their point contributions. Each rule is a pure function taking the
receipt and returning a tuple of ``(points, reasoning)``. Rules are
registered in ``RULES`` keyed by :class:`RuleName`.

Rules:

* ``retailer_name`` – One point for every letter or decimal digit in
  the retailer name.
* ``round_dollar`` – 50 points if the total has no cents.
* ``quarter_multiple`` – 25 points if the total is a multiple of
  ``0.25``. Independent of ``round_dollar``; both can fire.
* ``item_description`` – For each item whose trimmed description
  length is a multiple of 3, ``ceil(0.2 * price)`` points.
* ``item_pairs`` – 5 points for every two items on the receipt.
* ``odd_day`` – 6 points if the purchase day of month is odd.
* ``afternoon_window`` – 10 points if the purchase time is after
  14:00 and before 16:00.

Field values that cannot be parsed (a total of ``"abc"``, a date of
``"2022-13-45"``) make the affected rule contribute zero; scoring of the
other rules continues. ``find_invalid_fields`` reports those values for
callers that prefer to reject such receipts instead.
"""

from __future__ import annotations

from decimal import ROUND_CEILING, Decimal, localcontext
from typing import Callable, Dict, List, Tuple

from receipt_rewards.models.enums import RuleName
from receipt_rewards.models.schemas import Receipt
from receipt_rewards.utils.helpers import (
    amount_context,
    parse_amount,
    parse_purchase_date,
    parse_purchase_time,
)

ROUND_DOLLAR_POINTS = 50
QUARTER_MULTIPLE_POINTS = 25
QUARTER = Decimal("0.25")
DESCRIPTION_LENGTH_DIVISOR = 3
DESCRIPTION_PRICE_MULTIPLIER = Decimal("0.2")
POINTS_PER_ITEM_PAIR = 5
ODD_DAY_POINTS = 6
AFTERNOON_POINTS = 10
AFTERNOON_START_HOUR = 14
AFTERNOON_END_HOUR = 16

RuleResult = Tuple[int, str]


def _score_retailer_name(receipt: Receipt) -> RuleResult:
    """One point per alphanumeric character in the retailer name.

    Letters are any Unicode letter; digits are Unicode decimal digits, so
    superscripts and vulgar fractions do not count.
    """
    points = sum(1 for ch in receipt.retailer if ch.isalpha() or ch.isdecimal())
    return points, f"{points} alphanumeric characters in {receipt.retailer!r}"


def _score_round_dollar(receipt: Receipt) -> RuleResult:
    total = parse_amount(receipt.total)
    if total is None:
        return 0, f"unparseable total {receipt.total!r}"
    if total == total.to_integral_value():
        return ROUND_DOLLAR_POINTS, f"total {total} is a round dollar amount"
    return 0, f"total {total} has cents"


def _score_quarter_multiple(receipt: Receipt) -> RuleResult:
    total = parse_amount(receipt.total)
    if total is None:
        return 0, f"unparseable total {receipt.total!r}"
    with localcontext(amount_context()):
        remainder = total % QUARTER
    if remainder == 0:
        return QUARTER_MULTIPLE_POINTS, f"total {total} is a multiple of {QUARTER}"
    return 0, f"total {total} is not a multiple of {QUARTER}"


def _score_item_descriptions(receipt: Receipt) -> RuleResult:
    """Reward items whose trimmed description length is a multiple of 3.

    An empty description has length zero and therefore qualifies. Items
    with an unparseable price contribute nothing.
    """
    points = 0
    matched: List[str] = []
    for item in receipt.items:
        description = item.short_description.strip()
        if len(description) % DESCRIPTION_LENGTH_DIVISOR != 0:
            continue
        price = parse_amount(item.price)
        if price is None:
            continue
        with localcontext(amount_context()):
            scaled = price * DESCRIPTION_PRICE_MULTIPLIER
        bonus = int(scaled.to_integral_value(rounding=ROUND_CEILING))
        points += bonus
        matched.append(f"{description!r}={bonus}")
    return points, f"qualifying items {matched}"


def _score_item_pairs(receipt: Receipt) -> RuleResult:
    pairs = len(receipt.items) // 2
    return pairs * POINTS_PER_ITEM_PAIR, f"{len(receipt.items)} items form {pairs} pairs"


def _score_odd_day(receipt: Receipt) -> RuleResult:
    purchase_date = parse_purchase_date(receipt.purchase_date)
    if purchase_date is None:
        return 0, f"unparseable purchase date {receipt.purchase_date!r}"
    if purchase_date.day % 2 == 1:
        return ODD_DAY_POINTS, f"day {purchase_date.day} is odd"
    return 0, f"day {purchase_date.day} is even"


def _score_afternoon_window(receipt: Receipt) -> RuleResult:
    """Reward purchases made from 14:00 up to, but excluding, 16:00."""
    purchase_time = parse_purchase_time(receipt.purchase_time)
    if purchase_time is None:
        return 0, f"unparseable purchase time {receipt.purchase_time!r}"
    if AFTERNOON_START_HOUR <= purchase_time.hour < AFTERNOON_END_HOUR:
        return AFTERNOON_POINTS, f"{purchase_time:%H:%M} is within the afternoon window"
    return 0, f"{purchase_time:%H:%M} is outside the afternoon window"


RULES: Dict[RuleName, Callable[[Receipt], RuleResult]] = {
    RuleName.RETAILER_NAME: _score_retailer_name,
    RuleName.ROUND_DOLLAR: _score_round_dollar,
    RuleName.QUARTER_MULTIPLE: _score_quarter_multiple,
    RuleName.ITEM_DESCRIPTION: _score_item_descriptions,
    RuleName.ITEM_PAIRS: _score_item_pairs,
    RuleName.ODD_DAY: _score_odd_day,
    RuleName.AFTERNOON_WINDOW: _score_afternoon_window,
}


def evaluate_rules(receipt: Receipt) -> Tuple[Dict[RuleName, int], List[str], int]:
    """Apply every rule to a receipt.

    :param receipt: The receipt to score.
    :returns: A tuple of (contributions, reasons, total) where
        ``contributions`` maps each rule to the points it awarded,
        ``reasons`` is a list of reasoning strings and ``total`` is the
        sum of all contributions. The total is never negative: a receipt
        with negative prices scores zero rather than a negative value.
    """
    contributions: Dict[RuleName, int] = {}
    reasons: List[str] = []
    for rule_name, rule in RULES.items():
        points, reason = rule(receipt)
        contributions[rule_name] = points
        reasons.append(f"{rule_name.value}: {reason} -> {points}")
    total = max(0, sum(contributions.values()))
    return contributions, reasons, total


def compute_points(receipt: Receipt) -> int:
    """Return the rewards points for a receipt."""
    _, _, total = evaluate_rules(receipt)
    return total


def find_invalid_fields(receipt: Receipt) -> List[str]:
    """Return the wire names of fields whose values cannot be parsed.

    Item prices are reported as ``items[<index>].price``.
    """
    invalid: List[str] = []
    if parse_purchase_date(receipt.purchase_date) is None:
        invalid.append("purchaseDate")
    if parse_purchase_time(receipt.purchase_time) is None:
        invalid.append("purchaseTime")
    if parse_amount(receipt.total) is None:
        invalid.append("total")
    for index, item in enumerate(receipt.items):
        if parse_amount(item.price) is None:
            invalid.append(f"items[{index}].price")
    return invalid
