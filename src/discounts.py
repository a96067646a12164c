"""Discount definitions and the engine that decides which of them apply to a cart."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from actions import Action, materialize
from cart import CartItem, CartSummary
from rules import Rule, multiplier_for


@dataclass(frozen=True)
class Discount:
    id: Union[str, int]
    code: str
    rules: Tuple[Rule, ...]
    action: Action
    name: Optional[str] = None

    def validate(self) -> None:
        for rule in self.rules:
            rule.validate()


@dataclass(frozen=True)
class Order:
    cart: Tuple[CartItem, ...]
    discounts: Tuple[Discount, ...] = field(default_factory=tuple)


class DiscountEngine:
    """Evaluates discount rule groups against one cart snapshot."""

    def __init__(self, cart: Iterable[CartItem]) -> None:
        self._cart: Tuple[CartItem, ...] = tuple(cart)

    @property
    def cart(self) -> Tuple[CartItem, ...]:
        return self._cart

    def apply_discounts(self, discounts: Sequence[Discount]) -> List[Action]:
        """Return the actions of every discount whose rules all hold, in input order.

        A malformed rule raises ConfigurationError and no actions are returned.
        """
        summary = CartSummary.from_items(self._cart)
        applied: List[Action] = []
        for discount in discounts:
            if not self._rules_hold(discount.rules, summary):
                continue
            action = materialize(discount.action, multiplier_for(discount.rules, summary))
            if action is not None:
                applied.append(action)
        return applied

    def _rules_hold(self, rules: Sequence[Rule], summary: CartSummary) -> bool:
        return all(rule.evaluate(summary) for rule in rules)


def apply_discounts(cart: Iterable[CartItem], discounts: Sequence[Discount]) -> List[Action]:
    return DiscountEngine(cart).apply_discounts(discounts)
