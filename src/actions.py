"""Discount actions and how a repeat multiplier scales them."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

PERCENTAGE_DISCOUNT = "percentage_discount"
FLAT_DISCOUNT = "flat_discount"
FREE_ITEM = "free_item"

ACTION_TYPES = frozenset({PERCENTAGE_DISCOUNT, FLAT_DISCOUNT, FREE_ITEM})


@dataclass(frozen=True)
class Action:
    type: str
    value: Optional[float] = None
    product_id: Optional[str] = None
    quantity: Optional[int] = None


def materialize(action: Action, multiplier: int) -> Optional[Action]:
    """Return a new action scaled by ``multiplier``.

    Percentage discounts are never scaled. A multiplier of 0 yields a
    zero-valued action rather than no action. Unknown action types yield None.
    """
    if action.type == PERCENTAGE_DISCOUNT:
        return replace(action)
    if action.type == FLAT_DISCOUNT:
        return replace(action, value=(action.value or 0) * multiplier)
    if action.type == FREE_ITEM:
        return replace(action, quantity=(action.quantity or 0) * multiplier)
    return None
