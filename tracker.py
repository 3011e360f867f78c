import logging
from typing import Dict, List, Optional

from insights import generate_insights
from models.analytics import analytics_report, dashboard_metrics
from models.customers import (
    add_customer,
    edited_fields,
    find_customer,
    new_customer,
    search_customers,
    update_customer,
)
from models.goals import add_goal, goal_progress, new_goal
from models.products import add_product, find_product, new_product, search_products
from models.sales import new_sale, new_sale_item, record_sale
from utils.file_manager import clear_state, load_state, read_config, save_state

LOG = logging.getLogger(__name__)

class SalesTracker:
    """Owns the single in-memory state; every mutation is persisted immediately."""

    def __init__(self):
        self._state: Optional[Dict] = None

    @property
    def state(self) -> Dict:
        if self._state is None:
            self._state = load_state()
        return self._state

    def _commit(self, new_state: Dict) -> Dict:
        self._state = new_state
        save_state(new_state)
        return new_state

    def reset(self) -> Dict:
        clear_state()
        self._state = None
        return self.state

    # -------- Customers --------
    def customers(self, term: str = "") -> List[Dict]:
        return search_customers(self.state["customers"], term) if term else self.state["customers"]

    def create_customer(self, data: Dict) -> Dict:
        customer = new_customer(
            data.get("name"), data.get("email"), data.get("phone", ""), data.get("company", "")
        )
        self._commit(add_customer(self.state, customer))
        return customer

    def edit_customer(self, customer_id: str, data: Dict) -> Optional[Dict]:
        if find_customer(self.state["customers"], customer_id) is None:
            LOG.warning("Ignoring update for unknown customer %s", customer_id)
            return None
        fields = edited_fields(data)
        self._commit(update_customer(self.state, {**fields, "id": customer_id}))
        return find_customer(self.state["customers"], customer_id)

    # -------- Products --------
    def products(self, term: str = "") -> List[Dict]:
        return search_products(self.state["products"], term) if term else self.state["products"]

    def create_product(self, data: Dict) -> Dict:
        product = new_product(
            data.get("name"), data.get("price"), data.get("category"), data.get("stock"), data.get("sku")
        )
        self._commit(add_product(self.state, product))
        return product

    # -------- Sales --------
    def record_sale(self, sale: Dict) -> Dict:
        new_state = self._commit(record_sale(self.state, sale))
        for product_id in dict.fromkeys(item["productId"] for item in sale["items"]):
            product = find_product(new_state["products"], product_id)
            if product is not None and product["stock"] < 0:
                LOG.warning("Product %s oversold, stock now %d", product["id"], product["stock"])
        return sale

    def record_sale_from_cart(self, customer_id: str, lines: List[Dict]) -> Dict:
        """Build a sale from [{productId, quantity}] lines and record it."""
        customer = find_customer(self.state["customers"], customer_id)
        if customer is None:
            raise ValueError(f"Unknown customer: {customer_id}")
        if not isinstance(lines, list):
            raise ValueError("Items must be a list")
        items = []
        for line in lines:
            if not isinstance(line, dict):
                raise ValueError("Each item must be an object with productId and quantity")
            product = find_product(self.state["products"], line.get("productId"))
            if product is None:
                raise ValueError(f"Unknown product: {line.get('productId')}")
            items.append(new_sale_item(product, line.get("quantity", 1)))
        return self.record_sale(new_sale(customer, items))

    # -------- Goals --------
    def goals(self) -> List[Dict]:
        return goal_progress(self.state["goals"])

    def create_goal(self, data: Dict) -> Dict:
        goal = new_goal(
            data.get("title"), data.get("targetAmount"), data.get("deadline"), data.get("type", "revenue")
        )
        self._commit(add_goal(self.state, goal))
        return goal

    # -------- Reporting --------
    def dashboard(self) -> Dict:
        cfg = read_config()["reporting"]
        return dashboard_metrics(
            self.state, days=int(cfg["trailing_days"]), recent=int(cfg["recent_sales"])
        )

    def analytics(self) -> Dict:
        cfg = read_config()["reporting"]
        return analytics_report(
            self.state, top_n=int(cfg["top_n"]), days=int(cfg["daily_series_days"])
        )

    def insights(self, query: Optional[str] = None, client=None) -> str:
        return generate_insights(self.state, query, client=client)
