from typing import Dict, List, Optional

from models.state import GOAL_REVENUE, GOAL_SALES_COUNT, STATUS_COMPLETED, finite_number, new_id, utc_now

def new_sale_item(product: Dict, quantity: int = 1) -> Dict:
    try:
        quantity = int(quantity)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"Invalid quantity: {quantity!r}")
    if quantity < 1:
        raise ValueError("Quantity must be a positive integer")
    price = finite_number(product["price"], "price")
    if price < 0:
        raise ValueError("Price must not be negative")
    return {
        "productId": product["id"],
        "productName": product["name"],
        "quantity": quantity,
        "priceAtSale": price,
        "total": quantity * price,
    }

def new_sale(customer: Optional[Dict], items: List[Dict], date: Optional[str] = None,
             sale_id: Optional[str] = None) -> Dict:
    if not customer:
        raise ValueError("A customer is required to complete a sale")
    if not items:
        raise ValueError("A sale needs at least one item")
    return {
        "id": sale_id or new_id("s"),
        "customerId": customer["id"],
        "customerName": customer["name"],
        "items": list(items),
        "totalAmount": sum(i["total"] for i in items),
        "date": date or utc_now().isoformat(),
        "status": STATUS_COMPLETED,
    }

# -------- Cart --------
def add_to_cart(cart: List[Dict], product: Dict) -> List[Dict]:
    """Add one unit of product, merging into an existing line."""
    for line in cart:
        if line["productId"] == product["id"]:
            return update_cart_quantity(cart, product["id"], line["quantity"] + 1)
    return [*cart, new_sale_item(product, 1)]

def update_cart_quantity(cart: List[Dict], product_id: str, quantity: int) -> List[Dict]:
    if quantity < 1:
        return cart
    return [
        {**line, "quantity": quantity, "total": quantity * line["priceAtSale"]}
        if line["productId"] == product_id else line
        for line in cart
    ]

def remove_from_cart(cart: List[Dict], product_id: str) -> List[Dict]:
    return [line for line in cart if line["productId"] != product_id]

# -------- Recording --------
def _sold_quantities(sale: Dict) -> Dict[str, int]:
    sold = {}
    for item in sale["items"]:
        sold[item["productId"]] = sold.get(item["productId"], 0) + int(item["quantity"])
    return sold

def _advance_goal(goal: Dict, sale: Dict) -> Dict:
    if goal["type"] == GOAL_REVENUE:
        return {**goal, "currentAmount": goal["currentAmount"] + sale["totalAmount"]}
    if goal["type"] == GOAL_SALES_COUNT:
        return {**goal, "currentAmount": goal["currentAmount"] + 1}
    return goal

def record_sale(state: Dict, sale: Dict) -> Dict:
    """Return the state after a sale: stock decremented, sale prepended, goals advanced.

    Stock is not checked and may go negative. Items referencing unknown
    products are ignored for the stock adjustment.
    """
    sold = _sold_quantities(sale)
    products = [
        {**p, "stock": p["stock"] - sold[p["id"]]} if p["id"] in sold else p
        for p in state["products"]
    ]
    goals = [_advance_goal(g, sale) for g in state["goals"]]
    return {
        **state,
        "products": products,
        "sales": [sale, *state["sales"]],
        "goals": goals,
    }
