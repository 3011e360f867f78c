from typing import Dict, List, Optional

from models.state import new_id, required_text, today_iso

EDITABLE_FIELDS = ("name", "email", "phone", "company")

def new_customer(name: str, email: str, phone: str = "", company: str = "",
                 joined_at: Optional[str] = None, customer_id: Optional[str] = None) -> Dict:
    name = required_text(name, "Customer name")
    email = required_text(email, "Customer email")
    return {
        "id": customer_id or new_id("c"),
        "name": name,
        "email": email,
        "phone": phone or "",
        "company": company or "",
        "joinedAt": joined_at or today_iso(),
    }

def edited_fields(data: Dict) -> Dict:
    """Editable fields present in data, held to the same rules as new_customer."""
    fields = {}
    for key in ("name", "email"):
        if key in data:
            fields[key] = required_text(data[key], f"Customer {key}")
    for key in ("phone", "company"):
        if key in data:
            fields[key] = data[key] or ""
    return fields

def add_customer(state: Dict, customer: Dict) -> Dict:
    return {**state, "customers": [*state["customers"], customer]}

def update_customer(state: Dict, customer: Dict) -> Dict:
    """Replace the customer with the same id. Unknown ids leave state unchanged."""
    if not any(c["id"] == customer["id"] for c in state["customers"]):
        return state
    customers = []
    for c in state["customers"]:
        if c["id"] == customer["id"]:
            # id and joinedAt are fixed at creation
            c = {**c, **{k: customer[k] for k in EDITABLE_FIELDS if k in customer}}
        customers.append(c)
    return {**state, "customers": customers}

def find_customer(customers: List[Dict], customer_id: str) -> Optional[Dict]:
    return next((c for c in customers if c["id"] == customer_id), None)

def search_customers(customers: List[Dict], term: str) -> List[Dict]:
    term = (term or "").lower()
    return [
        c for c in customers
        if term in c["name"].lower() or term in c.get("company", "").lower()
    ]
