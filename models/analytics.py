from datetime import datetime, timedelta
from typing import Dict, List, Optional

from models.goals import goal_progress
from models.state import as_utc, date_key, parse_timestamp, utc_now

def total_revenue(sales: List[Dict]) -> float:
    return sum(float(s["totalAmount"]) for s in sales)

def sales_in_window(sales: List[Dict], now: Optional[datetime] = None, days: int = 30) -> List[Dict]:
    """Sales dated within [now - days, now], both ends inclusive."""
    now = as_utc(now) if now else utc_now()
    start = now - timedelta(days=days)
    return [s for s in sales if start <= parse_timestamp(s["date"]) <= now]

def trailing_revenue(sales: List[Dict], now: Optional[datetime] = None, days: int = 30) -> float:
    return total_revenue(sales_in_window(sales, now, days))

def _top(entries: List[Dict], n: int) -> List[Dict]:
    # sorted() is stable, ties keep list order
    return sorted(entries, key=lambda e: e["value"], reverse=True)[:n]

def top_products(state: Dict, n: int = 5) -> List[Dict]:
    per_product = {}
    for sale in state["sales"]:
        for item in sale["items"]:
            per_product[item["productId"]] = per_product.get(item["productId"], 0.0) + float(item["total"])
    entries = [
        {"id": p["id"], "name": p["name"], "value": per_product.get(p["id"], 0.0)}
        for p in state["products"]
    ]
    return _top(entries, n)

def top_customers(state: Dict, n: int = 5) -> List[Dict]:
    per_customer = {}
    for sale in state["sales"]:
        per_customer[sale["customerId"]] = per_customer.get(sale["customerId"], 0.0) + float(sale["totalAmount"])
    entries = [
        {"id": c["id"], "name": c["name"], "value": per_customer.get(c["id"], 0.0)}
        for c in state["customers"]
    ]
    return _top(entries, n)

def daily_revenue(sales: List[Dict], days: int = 14) -> List[Dict]:
    """Revenue per calendar date for the most recent `days` dates that have sales.

    Dates without sales are absent, not zero-filled.
    """
    by_date = {}
    for s in sales:
        key = date_key(s["date"])
        by_date[key] = by_date.get(key, 0.0) + float(s["totalAmount"])
    keys = sorted(by_date.keys())[-days:] if days > 0 else []
    return [{"date": k, "amount": by_date[k]} for k in keys]

def revenue_timeline(sales: List[Dict]) -> List[Dict]:
    ordered = sorted(sales, key=lambda s: parse_timestamp(s["date"]))
    return [{"date": s["date"], "amount": float(s["totalAmount"])} for s in ordered]

def dashboard_metrics(state: Dict, now: Optional[datetime] = None, days: int = 30,
                      recent: int = 5) -> Dict:
    sales = state["sales"]
    return {
        "totalRevenue": total_revenue(sales),
        "totalSales": len(sales),
        "totalCustomers": len(state["customers"]),
        "recentRevenue": trailing_revenue(sales, now, days),
        "recentSales": sales[:recent],
        "timeline": revenue_timeline(sales),
    }

def analytics_report(state: Dict, top_n: int = 5, days: int = 14) -> Dict:
    return {
        "topProducts": top_products(state, top_n),
        "topCustomers": top_customers(state, top_n),
        "dailyRevenue": daily_revenue(state["sales"], days),
        "goals": goal_progress(state["goals"]),
    }
