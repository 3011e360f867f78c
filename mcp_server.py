"""
Local MCP server for the sales tracker.

Exposes the tracker's read-only views (dashboard, analytics, customers,
products, goals, recent sales), sale recording and the insights call as
FastMCP tools. Every tool returns an MCP content array with a single JSON
text item.
"""
import json
import logging
from typing import Any, Dict, Optional

from fastmcp import FastMCP

from tracker import SalesTracker

LOG = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)

server_instructions = """
This MCP server provides access to a small-business sales tracker: customers,
products, sales, revenue/volume goals and derived dashboard and analytics views.
"""

def _content(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {"content": [{"type": "text", "text": json.dumps(payload)}]}

def recent_sales_payload(tracker: SalesTracker, limit: int = 10) -> Dict[str, Any]:
    limit = max(int(limit), 1)
    return _content({"sales": tracker.state["sales"][:limit]})

def record_sale_payload(tracker: SalesTracker, arg: str) -> Dict[str, Any]:
    try:
        data = json.loads(arg) if arg else {}
    except json.JSONDecodeError:
        return _content({"error": "Invalid JSON argument"})
    if not isinstance(data, dict):
        return _content({"error": "Expected a JSON object"})

    items = data.get("items")
    if not data.get("customerId") or not isinstance(items, list) or not items:
        return _content({"error": "Provide customerId and a non-empty items list"})
    try:
        sale = tracker.record_sale_from_cart(data["customerId"], items)
    except ValueError as e:
        return _content({"error": str(e)})
    return _content({"sale": sale})

def insights_payload(tracker: SalesTracker, query: str = "") -> Dict[str, Any]:
    return _content({"insights": tracker.insights(query or None)})

def create_server(tracker: Optional[SalesTracker] = None) -> FastMCP:
    mcp = FastMCP(name="Sales Pulse MCP", instructions=server_instructions)
    tracker = tracker or SalesTracker()

    @mcp.tool()
    async def dashboard() -> Dict[str, Any]:
        """
        Return headline metrics: total revenue, sale count, customer count,
        revenue over the trailing window and the most recent sales.

        Returns:
            MCP content array with JSON: {"dashboard": {...}}
        """
        return _content({"dashboard": tracker.dashboard()})

    @mcp.tool()
    async def analytics() -> Dict[str, Any]:
        """
        Return top products and customers by revenue, the daily revenue series
        and goal progress.

        Edge cases:
            - Dates without sales are absent from `dailyRevenue`.
        """
        return _content({"analytics": tracker.analytics()})

    @mcp.tool()
    async def list_customers(term: str = "") -> Dict[str, Any]:
        """List customers, optionally filtered by a name/company search term."""
        return _content({"customers": tracker.customers(term)})

    @mcp.tool()
    async def list_products(term: str = "") -> Dict[str, Any]:
        """List products, optionally filtered by a name/SKU search term."""
        return _content({"products": tracker.products(term)})

    @mcp.tool()
    async def goals_progress() -> Dict[str, Any]:
        """Return every goal with its completion percentage (clamped to 100)."""
        return _content({"goals": tracker.goals()})

    @mcp.tool()
    async def recent_sales(limit: int = 10) -> Dict[str, Any]:
        """
        Return the most recent sales, newest first.

        Args:
            limit: number of sales to return, at least 1.
        """
        return recent_sales_payload(tracker, limit)

    @mcp.tool()
    async def record_sale_tool(arg: str) -> Dict[str, Any]:
        """
        Record a completed sale.

        The `arg` parameter is a JSON object:
            {"customerId": "c1", "items": [{"productId": "p1", "quantity": 2}]}

        Stock is decremented (and may go negative) and every goal advances.

        Returns:
            MCP content array with JSON {"sale": {...}} or {"error": "..."}.
        """
        return record_sale_payload(tracker, arg)

    @mcp.tool()
    async def insights(query: str = "") -> Dict[str, Any]:
        """
        Ask the text-generation service for insights on the current data.

        Without a query it asks for 3 actionable insights. On any failure the
        text is a fixed fallback message rather than an error.
        """
        return insights_payload(tracker, query)

    return mcp


def main():
    server = create_server()
    LOG.info("Starting local MCP server on 0.0.0.0:8000 (HTTP)")
    server.run(transport="http", host="0.0.0.0", port=8000, path="/mcp")


if __name__ == "__main__":
    main()
