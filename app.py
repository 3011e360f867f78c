from typing import Optional

from flask import Flask, jsonify, request

from tracker import SalesTracker

def create_app(tracker: Optional[SalesTracker] = None) -> Flask:
    app = Flask(__name__)
    tracker = tracker or SalesTracker()
    app.config["TRACKER"] = tracker

    @app.errorhandler(ValueError)
    def bad_request(e):
        return jsonify({"ok": False, "error": str(e)}), 400

    @app.get("/state")
    def state_get():
        return jsonify(tracker.state)

    # -------- Customers --------
    @app.get("/customers")
    def customers_get():
        return jsonify({"ok": True, "customers": tracker.customers(request.args.get("q", ""))})

    @app.post("/customers")
    def customers_post():
        data = request.get_json(force=True, silent=True) or {}
        return jsonify({"ok": True, "customer": tracker.create_customer(data)}), 201

    @app.put("/customers/<customer_id>")
    def customers_put(customer_id):
        data = request.get_json(force=True, silent=True) or {}
        customer = tracker.edit_customer(customer_id, data)
        if customer is None:
            return jsonify({"ok": False, "error": f"Unknown customer: {customer_id}"}), 404
        return jsonify({"ok": True, "customer": customer})

    # -------- Products --------
    @app.get("/products")
    def products_get():
        return jsonify({"ok": True, "products": tracker.products(request.args.get("q", ""))})

    @app.post("/products")
    def products_post():
        data = request.get_json(force=True, silent=True) or {}
        return jsonify({"ok": True, "product": tracker.create_product(data)}), 201

    # -------- Sales --------
    @app.get("/sales")
    def sales_get():
        return jsonify({"ok": True, "sales": tracker.state["sales"]})

    @app.post("/sales")
    def sales_post():
        data = request.get_json(force=True, silent=True) or {}
        items = data.get("items")
        if not data.get("customerId") or not isinstance(items, list) or not items:
            return jsonify({"ok": False, "error": "Provide customerId and a non-empty items list."}), 400
        sale = tracker.record_sale_from_cart(data["customerId"], items)
        return jsonify({"ok": True, "sale": sale}), 201

    # -------- Goals --------
    @app.get("/goals")
    def goals_get():
        return jsonify({"ok": True, "goals": tracker.goals()})

    @app.post("/goals")
    def goals_post():
        data = request.get_json(force=True, silent=True) or {}
        return jsonify({"ok": True, "goal": tracker.create_goal(data)}), 201

    # -------- Reports --------
    @app.get("/dashboard")
    def dashboard_get():
        return jsonify({"ok": True, "dashboard": tracker.dashboard()})

    @app.get("/analytics")
    def analytics_get():
        return jsonify({"ok": True, "analytics": tracker.analytics()})

    @app.post("/insights")
    def insights_post():
        data = request.get_json(force=True, silent=True) or {}
        return jsonify({"ok": True, "insights": tracker.insights(data.get("query"))})

    # -------- Admin --------
    @app.post("/reset")
    def reset_all():
        state = tracker.reset()
        return jsonify({"ok": True, "sales": len(state["sales"])})

    return app

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=True)
