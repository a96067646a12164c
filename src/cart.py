"""Cart line items and the aggregate facts discount rules are checked against."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable


@dataclass(frozen=True)
class CartItem:
    id: str
    supplier_id: str
    quantity: int
    price: float

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValueError(f"Quantity cannot be negative: {self.quantity}")
        if self.price < 0:
            raise ValueError(f"Price cannot be negative: {self.price}")

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


@dataclass(frozen=True)
class CartSummary:
    """Per-product, per-supplier and whole-cart totals for one cart snapshot."""

    product_quantities: Dict[str, int]
    supplier_quantities: Dict[str, int]
    total_quantity: int
    total_value: float

    @classmethod
    def from_items(cls, items: Iterable[CartItem]) -> "CartSummary":
        products: Dict[str, int] = {}
        suppliers: Dict[str, int] = {}
        total_quantity = 0
        total_value = 0.0
        for item in items:
            # Only the first line for a product id counts towards its quantity.
            products.setdefault(item.id, item.quantity)
            suppliers[item.supplier_id] = suppliers.get(item.supplier_id, 0) + item.quantity
            total_quantity += item.quantity
            total_value += item.line_total
        return cls(
            product_quantities=products,
            supplier_quantities=suppliers,
            total_quantity=total_quantity,
            total_value=total_value,
        )

    def product_quantity(self, product_id: str) -> int:
        return self.product_quantities.get(product_id, 0)

    def supplier_quantity(self, supplier_id: str) -> int:
        return self.supplier_quantities.get(supplier_id, 0)

