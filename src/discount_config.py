"""Build carts and discount definitions from JSON-shaped records."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

from actions import Action
from cart import CartItem
from discounts import Discount, Order
from rules import ConfigurationError, Rule

logger = logging.getLogger(__name__)

CART_ITEM_KEYS = ("id", "supplier_id", "quantity", "price")
DISCOUNT_KEYS = ("id", "code", "rules", "action")


def _require(record: Mapping[str, Any], keys: Iterable[str], kind: str) -> None:
    if not isinstance(record, Mapping):
        raise ConfigurationError(f"{kind} must be an object, got {type(record).__name__}")
    for key in keys:
        if key not in record:
            raise ConfigurationError(f"{kind} is missing '{key}'", field=key)


def cart_item_from_record(record: Mapping[str, Any]) -> CartItem:
    _require(record, CART_ITEM_KEYS, "cart item")
    for key in ("quantity", "price"):
        value = record[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigurationError(f"cart item '{key}' must be a number, got {value!r}", field=key)
    return CartItem(
        id=str(record["id"]),
        supplier_id=str(record["supplier_id"]),
        quantity=record["quantity"],
        price=record["price"],
    )


def cart_from_records(records: Iterable[Mapping[str, Any]]) -> List[CartItem]:
    return [cart_item_from_record(record) for record in records]


def rule_from_record(record: Mapping[str, Any]) -> Rule:
    _require(record, ("type", "operator"), "rule")
    return Rule(
        type=record["type"],
        operator=record["operator"],
        quantity=record.get("quantity"),
        cart_value=record.get("cart_value"),
        product_id=record.get("product_id"),
        supplier_id=record.get("supplier_id"),
        multiply=bool(record.get("multiply", False)),
        multiplier_ratio=record.get("multiplierRatio"),
    )


def action_from_record(record: Mapping[str, Any]) -> Action:
    _require(record, ("type",), "action")
    return Action(
        type=record["type"],
        value=record.get("value"),
        product_id=record.get("product_id"),
        quantity=record.get("quantity"),
    )


def discount_from_record(record: Mapping[str, Any]) -> Discount:
    _require(record, DISCOUNT_KEYS, "discount")
    return Discount(
        id=record["id"],
        code=record["code"],
        name=record.get("name"),
        rules=tuple(rule_from_record(rule) for rule in record["rules"]),
        action=action_from_record(record["action"]),
    )


def discounts_from_records(records: Iterable[Mapping[str, Any]]) -> List[Discount]:
    """Build and validate every discount so a bad definition is reported before evaluation."""
    discounts = [discount_from_record(record) for record in records]
    for discount in discounts:
        try:
            discount.validate()
        except ConfigurationError as exc:
            logger.error("Discount %s (%s) is misconfigured: %s", discount.code, discount.id, exc)
            raise
    logger.debug("Loaded %d discount definitions", len(discounts))
    return discounts


def action_to_record(action: Action) -> Dict[str, Any]:
    record: Dict[str, Any] = {"type": action.type}
    for key in ("value", "product_id", "quantity"):
        value = getattr(action, key)
        if value is not None:
            record[key] = value
    return record


def _read_json(path: Path) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"{path} is not valid JSON: {exc}") from exc


def load_discounts(path: Path) -> List[Discount]:
    records = _read_json(path)
    if not isinstance(records, list):
        raise ConfigurationError(f"{path} must contain a list of discounts")
    return discounts_from_records(records)


def load_order(path: Path) -> Order:
    """Read an order file of the form ``{"cart": [...], "discounts": [...]}``."""
    data = _read_json(path)
    _require(data, ("cart",), "order")
    order = Order(
        cart=tuple(cart_from_records(data["cart"])),
        discounts=tuple(discounts_from_records(data.get("discounts", []))),
    )
    logger.info("Loaded order from %s: %d cart items, %d discounts", path, len(order.cart), len(order.discounts))
    return order
