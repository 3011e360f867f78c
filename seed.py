import random
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from models.sales import new_sale, new_sale_item
from models.state import GOAL_REVENUE, GOAL_SALES_COUNT, utc_now

SEED_CUSTOMERS = [
    {"id": "c1", "name": "Acme Corp", "email": "contact@acme.com", "phone": "555-0101", "company": "Acme Inc.", "joinedAt": "2023-01-15"},
    {"id": "c2", "name": "Globex", "email": "procurement@globex.com", "phone": "555-0102", "company": "Globex Corp", "joinedAt": "2023-03-22"},
    {"id": "c3", "name": "Soylent Corp", "email": "info@soylent.com", "phone": "555-0103", "company": "Soylent", "joinedAt": "2023-05-10"},
    {"id": "c4", "name": "Initech", "email": "sales@initech.com", "phone": "555-0104", "company": "Initech", "joinedAt": "2023-06-05"},
]

SEED_PRODUCTS = [
    {"id": "p1", "name": "Premium Widget", "category": "Hardware", "price": 199.99, "stock": 45, "sku": "WDG-001"},
    {"id": "p2", "name": "Service Plan Basic", "category": "Services", "price": 49.99, "stock": 9999, "sku": "SVC-BSC"},
    {"id": "p3", "name": "Service Plan Pro", "category": "Services", "price": 149.99, "stock": 9999, "sku": "SVC-PRO"},
    {"id": "p4", "name": "Super Gadget", "category": "Hardware", "price": 299.50, "stock": 12, "sku": "GDG-002"},
    {"id": "p5", "name": "Consulting Hour", "category": "Services", "price": 150.00, "stock": 500, "sku": "CNS-001"},
]

SEED_SALES_COUNT = 25
SEED_HISTORY_DAYS = 90

def seed_goals(now: Optional[datetime] = None) -> List[Dict]:
    deadline = f"{(now or utc_now()).year}-12-31"
    return [
        {"id": "g1", "title": "Q4 Revenue Target", "targetAmount": 50000, "currentAmount": 32450, "deadline": deadline, "type": GOAL_REVENUE},
        {"id": "g2", "title": "New Customer Acquisition", "targetAmount": 100, "currentAmount": 65, "deadline": deadline, "type": GOAL_SALES_COUNT},
    ]

def generate_past_sales(count: int = SEED_SALES_COUNT, now: Optional[datetime] = None,
                        rng: Optional[random.Random] = None) -> List[Dict]:
    """Random historical sales over the past 90 days, newest first."""
    rng = rng or random.Random()
    now = now or utc_now()
    sales = []
    for i in range(count):
        date = now - timedelta(days=rng.randint(0, SEED_HISTORY_DAYS - 1))
        customer = rng.choice(SEED_CUSTOMERS)
        items = [
            new_sale_item(rng.choice(SEED_PRODUCTS), rng.randint(1, 5))
            for _ in range(rng.randint(1, 3))
        ]
        sales.append(new_sale(customer, items, date=date.isoformat(), sale_id=f"s{i}"))
    sales.sort(key=lambda s: s["date"], reverse=True)
    return sales

def seed_state(now: Optional[datetime] = None, rng: Optional[random.Random] = None) -> Dict:
    return {
        "customers": [dict(c) for c in SEED_CUSTOMERS],
        "products": [dict(p) for p in SEED_PRODUCTS],
        "sales": generate_past_sales(now=now, rng=rng),
        "goals": seed_goals(now),
    }
