"""Enumeration types used throughout the receipt rewards API.

Each member of ``RuleName`` identifies one scoring rule. The values are
used as keys in the per-rule breakdown stored alongside a receipt's
points and in log output, so renaming a value changes what operators
see in logs.
"""

from enum import Enum


class RuleName(str, Enum):
    """The fixed set of rewards rules applied to every receipt."""

    RETAILER_NAME = "retailer_name"
    ROUND_DOLLAR = "round_dollar"
    QUARTER_MULTIPLE = "quarter_multiple"
    ITEM_DESCRIPTION = "item_description"
    ITEM_PAIRS = "item_pairs"
    ODD_DAY = "odd_day"
    AFTERNOON_WINDOW = "afternoon_window"


class StoreBackend(str, Enum):
    """Backends available for the receipt store."""

    MEMORY = "memory"
