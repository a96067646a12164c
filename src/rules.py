"""Discount rule conditions evaluated against cart totals."""
from __future__ import annotations

import math
from dataclasses import dataclass
from operator import eq, ge, gt, le
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from cart import CartSummary

PRODUCT_QUANTITY = "product_quantity"
SUPPLIER_QUANTITY = "supplier_quantity"
TOTAL_QUANTITY = "total_quantity"
CART_VALUE = "cart_value"

QUANTITY_RULE_TYPES = frozenset({PRODUCT_QUANTITY, SUPPLIER_QUANTITY, TOTAL_QUANTITY})

# Fields each rule type must carry; order is the order they are checked in.
REQUIRED_FIELDS: Dict[str, Tuple[str, ...]] = {
    PRODUCT_QUANTITY: ("product_id", "quantity"),
    SUPPLIER_QUANTITY: ("supplier_id", "quantity"),
    TOTAL_QUANTITY: ("quantity",),
    CART_VALUE: ("cart_value",),
}

COMPARISONS: Dict[str, Callable[[Any, Any], bool]] = {
    "eq": eq,
    "gt": gt,
    "gte": ge,
    "lte": le,
}

_COLLECTIONS = (list, tuple, set, frozenset)


class DiscountError(Exception):
    """Base class for discount engine failures."""


class ConfigurationError(DiscountError, ValueError):
    """A discount definition is malformed and cannot be evaluated."""

    def __init__(self, message: str, rule_type: Optional[str] = None, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.rule_type = rule_type
        self.field = field


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_positive(value: Any) -> bool:
    return _is_number(value) and value > 0


def compare(fact: float, operator: str, threshold: Any) -> bool:
    """Apply a rule operator; unknown operators never match."""
    if operator == "in":
        return isinstance(threshold, _COLLECTIONS) and fact in threshold
    check = COMPARISONS.get(operator)
    if check is None or isinstance(threshold, _COLLECTIONS):
        return False
    return check(fact, threshold)


@dataclass(frozen=True)
class Rule:
    type: str
    operator: str
    quantity: Any = None
    cart_value: Any = None
    product_id: Optional[str] = None
    supplier_id: Optional[str] = None
    multiply: bool = False
    multiplier_ratio: Optional[float] = None

    def validate(self) -> None:
        for field in REQUIRED_FIELDS.get(self.type, ()):
            value = getattr(self, field)
            if value is None or value == "" or (isinstance(value, _COLLECTIONS) and not value):
                raise ConfigurationError(
                    f"'{field}' is not defined for '{self.type}' rule",
                    rule_type=self.type,
                    field=field,
                )
            if field == "quantity" and not isinstance(value, _COLLECTIONS) and not _is_positive(value):
                raise ConfigurationError(
                    f"'quantity' must be positive for '{self.type}' rule, got {value!r}",
                    rule_type=self.type,
                    field=field,
                )
            if field == "cart_value" and not isinstance(value, _COLLECTIONS) and not _is_number(value):
                raise ConfigurationError(
                    f"'cart_value' must be a number for '{self.type}' rule, got {value!r}",
                    rule_type=self.type,
                    field=field,
                )
        if self.type in REQUIRED_FIELDS and self.multiplier_ratio is not None and not _is_number(self.multiplier_ratio):
            raise ConfigurationError(
                f"'multiplierRatio' must be a number for '{self.type}' rule, got {self.multiplier_ratio!r}",
                rule_type=self.type,
                field="multiplier_ratio",
            )

    @property
    def threshold(self) -> Any:
        return self.cart_value if self.type == CART_VALUE else self.quantity

    def fact(self, summary: CartSummary) -> float:
        if self.type == PRODUCT_QUANTITY:
            return summary.product_quantity(self.product_id)
        if self.type == SUPPLIER_QUANTITY:
            return summary.supplier_quantity(self.supplier_id)
        if self.type == TOTAL_QUANTITY:
            return summary.total_quantity
        if self.type == CART_VALUE:
            return summary.total_value
        raise KeyError(f"Unknown rule type: {self.type}")

    def evaluate(self, summary: CartSummary) -> bool:
        """Return whether the cart satisfies this rule.

        Raises ConfigurationError when a known rule type is missing one of its
        required fields. Unknown rule types are simply not satisfied.
        """
        if self.type not in REQUIRED_FIELDS:
            return False
        self.validate()
        return compare(self.fact(summary), self.operator, self.threshold)

    @property
    def is_repeatable(self) -> bool:
        return bool(self.multiply) and self.type in QUANTITY_RULE_TYPES and _is_positive(self.quantity)

    def repeat_count(self, summary: CartSummary) -> int:
        """How many times the threshold fits into the cart, divided by the ratio."""
        base = math.floor(self.fact(summary) / self.quantity)
        ratio = self.multiplier_ratio if self.multiplier_ratio and self.multiplier_ratio >= 1 else 1
        return math.floor(base / ratio)


def multiplier_for(rules: Iterable[Rule], summary: CartSummary) -> int:
    for rule in rules:
        if rule.is_repeatable:
            return rule.repeat_count(summary)
    return 1
