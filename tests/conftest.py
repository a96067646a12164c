import pytest

from actions import Action
from cart import CartItem
from discounts import Discount
from rules import Rule


@pytest.fixture
def jeans_cart():
    def build(quantity, price=50):
        return [CartItem(id="jeans", supplier_id="supplierA", quantity=quantity, price=price)]

    return build


@pytest.fixture
def mixed_cart():
    return [
        CartItem(id="jeans", supplier_id="supplierA", quantity=4, price=50),
        CartItem(id="shirt", supplier_id="supplierB", quantity=4, price=20),
        CartItem(id="socks", supplier_id="supplierA", quantity=2, price=5),
    ]


@pytest.fixture
def buy3get1():
    return Discount(
        id=1,
        code="BUY3GET1",
        rules=(Rule(type="total_quantity", operator="gte", quantity=3),),
        action=Action(type="free_item", product_id="jeans", quantity=1),
    )
