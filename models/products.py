import random
from typing import Dict, List, Optional

from models.state import finite_number, new_id, required_text

DEFAULT_CATEGORY = "General"

def placeholder_sku() -> str:
    return f"SKU-{random.randint(0, 999)}"

def new_product(name: str, price, category: Optional[str] = None, stock=None,
                sku: Optional[str] = None, product_id: Optional[str] = None) -> Dict:
    name = required_text(name, "Product name")
    if price is None or price == "":
        raise ValueError("Product price is required")
    price = finite_number(price, "price")
    if price < 0:
        raise ValueError("Product price must not be negative")
    try:
        stock = int(stock or 0)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"Invalid stock: {stock!r}")
    return {
        "id": product_id or new_id("p"),
        "name": name,
        "category": category or DEFAULT_CATEGORY,
        "price": price,
        "stock": stock,
        "sku": sku or placeholder_sku(),
    }

def add_product(state: Dict, product: Dict) -> Dict:
    return {**state, "products": [*state["products"], product]}

def find_product(products: List[Dict], product_id: str) -> Optional[Dict]:
    return next((p for p in products if p["id"] == product_id), None)

def search_products(products: List[Dict], term: str) -> List[Dict]:
    term = (term or "").lower()
    return [
        p for p in products
        if term in p["name"].lower() or term in p.get("sku", "").lower()
    ]
