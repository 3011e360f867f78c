import math
import uuid
from datetime import datetime, timezone
from typing import Dict, List

STATUS_COMPLETED = "completed"
STATUS_PENDING = "pending"
STATUS_CANCELLED = "cancelled"
SALE_STATUSES = (STATUS_COMPLETED, STATUS_PENDING, STATUS_CANCELLED)

GOAL_REVENUE = "revenue"
GOAL_SALES_COUNT = "sales_count"
GOAL_TYPES = (GOAL_REVENUE, GOAL_SALES_COUNT)

COLLECTIONS = ("customers", "products", "sales", "goals")

def empty_state() -> Dict[str, List[Dict]]:
    return {name: [] for name in COLLECTIONS}

def new_id(prefix: str) -> str:
    return f"{prefix}{uuid.uuid4().hex[:12]}"

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

def today_iso() -> str:
    return utc_now().date().isoformat()

def parse_timestamp(value: str) -> datetime:
    """Parse an ISO timestamp; a trailing 'Z' and naive values are read as UTC."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(value))

def as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt

def date_key(value: str) -> str:
    # YYYY-MM-DD prefix, sorts lexicographically
    return value.split("T")[0]

def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))

# -------- Input checks --------
def required_text(value, label: str) -> str:
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise ValueError(f"{label} is required")
    return text

def finite_number(value, label: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"Invalid {label}: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {label}: {value!r}")
    if not math.isfinite(number):
        raise ValueError(f"{label.capitalize()} must be a finite number")
    return number
