import pytest

from models.products import add_product, new_product, search_products
from models.state import empty_state

def test_add_product_appends_in_call_order():
    state = empty_state()
    for i in range(4):
        state = add_product(state, new_product(f"Item {i}", 10))
    assert [p["name"] for p in state["products"]] == ["Item 0", "Item 1", "Item 2", "Item 3"]

def test_new_product_defaults():
    p = new_product("Widget", "19.5")
    assert p["category"] == "General"
    assert p["stock"] == 0
    assert p["price"] == 19.5
    assert p["sku"].startswith("SKU-")
    assert 0 <= int(p["sku"][4:]) <= 999

def test_new_product_keeps_given_fields():
    p = new_product("Widget", 5, category="Hardware", stock="7", sku="WDG-1")
    assert (p["category"], p["stock"], p["sku"]) == ("Hardware", 7, "WDG-1")

@pytest.mark.parametrize("name,price", [
    ("", 5), ("Widget", None), ("Widget", "abc"), ("Widget", -1),
    ("Widget", "nan"), ("Widget", float("inf")),
])
def test_new_product_rejects_bad_input(name, price):
    with pytest.raises(ValueError):
        new_product(name, price)

def test_search_products_by_name_or_sku():
    products = [new_product("Premium Widget", 1, sku="WDG-001"), new_product("Gadget", 1, sku="GDG-002")]
    assert [p["name"] for p in search_products(products, "gdg")] == ["Gadget"]
    assert [p["name"] for p in search_products(products, "widget")] == ["Premium Widget"]

def test_new_product_rejects_infinite_stock():
    with pytest.raises(ValueError):
        new_product("Widget", 1, stock=float("inf"))
