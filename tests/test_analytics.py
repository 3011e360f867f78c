from datetime import datetime, timedelta, timezone

from models.analytics import (
    analytics_report,
    daily_revenue,
    dashboard_metrics,
    revenue_timeline,
    top_customers,
    top_products,
    total_revenue,
    trailing_revenue,
)
from models.state import empty_state

NOW = datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)

def _sale(sid, amount, when, customer_id="c1", items=None):
    return {
        "id": sid,
        "customerId": customer_id,
        "customerName": customer_id,
        "items": items or [],
        "totalAmount": amount,
        "date": when.isoformat(),
        "status": "completed",
    }

def test_total_revenue():
    sales = [_sale("a", 10.0, NOW), _sale("b", 32.5, NOW)]
    assert total_revenue(sales) == 42.5
    assert total_revenue([]) == 0

def test_trailing_revenue_window_inclusive():
    sales = [
        _sale("in", 10.0, NOW - timedelta(days=5)),
        _sale("edge", 1.0, NOW - timedelta(days=30)),
        _sale("old", 100.0, NOW - timedelta(days=31)),
        _sale("future", 1000.0, NOW + timedelta(days=1)),
    ]
    assert trailing_revenue(sales, now=NOW) == 11.0

def test_trailing_revenue_reads_z_suffix():
    sale = _sale("z", 7.0, NOW)
    sale["date"] = "2025-09-29T08:00:00.000Z"
    assert trailing_revenue([sale], now=NOW) == 7.0

def test_top_products_top_five_stable():
    state = empty_state()
    values = [50, 10, 90, 30, 90, 70, 20, 30, 60, 5]
    state["products"] = [{"id": f"p{i}", "name": f"P{i}"} for i in range(10)]
    state["sales"] = [
        _sale(f"s{i}", v, NOW, items=[{"productId": f"p{i}", "total": v - 1}, {"productId": f"p{i}", "total": 1}])
        for i, v in enumerate(values)
    ]
    top = top_products(state)
    assert [t["value"] for t in top] == [90, 90, 70, 60, 50]
    assert [t["id"] for t in top] == ["p2", "p4", "p5", "p8", "p0"]

def test_top_products_ignores_unknown_ids():
    state = empty_state()
    state["products"] = [{"id": "p1", "name": "Widget"}]
    state["sales"] = [_sale("s1", 40, NOW, items=[{"productId": "gone", "total": 40}])]
    assert top_products(state) == [{"id": "p1", "name": "Widget", "value": 0.0}]

def test_top_customers():
    state = empty_state()
    state["customers"] = [{"id": f"c{i}", "name": f"C{i}"} for i in range(7)]
    state["sales"] = [_sale(f"s{i}", 10.0 * i, NOW, customer_id=f"c{i}") for i in range(7)]
    state["sales"].append(_sale("extra", 100.0, NOW, customer_id="c1"))
    top = top_customers(state)
    assert [t["id"] for t in top] == ["c1", "c6", "c5", "c4", "c3"]
    assert top[0]["value"] == 110.0

def test_daily_revenue_keeps_last_14_dates_ascending():
    start = datetime(2025, 8, 1, 9, 0, tzinfo=timezone.utc)
    sales = []
    for d in range(20):
        sales.append(_sale(f"a{d}", 10.0, start + timedelta(days=d)))
        sales.append(_sale(f"b{d}", 5.0, start + timedelta(days=d, hours=8)))
    series = daily_revenue(sales)
    assert len(series) == 14
    assert series[0]["date"] == "2025-08-07"
    assert series[-1]["date"] == "2025-08-20"
    assert [s["date"] for s in series] == sorted(s["date"] for s in series)
    assert all(s["amount"] == 15.0 for s in series)

def test_daily_revenue_skips_empty_days():
    sales = [_sale("a", 1.0, NOW), _sale("b", 2.0, NOW - timedelta(days=3))]
    assert daily_revenue(sales) == [
        {"date": "2025-09-27", "amount": 2.0},
        {"date": "2025-09-30", "amount": 1.0},
    ]

def test_revenue_timeline_oldest_first():
    sales = [_sale("new", 1.0, NOW), _sale("old", 2.0, NOW - timedelta(days=2))]
    assert [p["amount"] for p in revenue_timeline(sales)] == [2.0, 1.0]

def test_dashboard_metrics():
    state = empty_state()
    state["customers"] = [{"id": "c1", "name": "A"}, {"id": "c2", "name": "B"}]
    state["sales"] = [_sale(f"s{i}", 10.0, NOW - timedelta(days=10 * i)) for i in range(7)]
    m = dashboard_metrics(state, now=NOW)
    assert m["totalRevenue"] == 70.0
    assert m["totalSales"] == 7
    assert m["totalCustomers"] == 2
    assert m["recentRevenue"] == 40.0
    assert [s["id"] for s in m["recentSales"]] == ["s0", "s1", "s2", "s3", "s4"]

def test_analytics_report_shape():
    report = analytics_report(empty_state())
    assert report == {"topProducts": [], "topCustomers": [], "dailyRevenue": [], "goals": []}

def test_trailing_revenue_accepts_naive_now():
    sales = [_sale("in", 10.0, NOW - timedelta(days=1))]
    assert trailing_revenue(sales, now=NOW.replace(tzinfo=None)) == 10.0
