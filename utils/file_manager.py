import json
import logging
import os
import tempfile
import threading
from typing import Dict

from seed import seed_state

LOG = logging.getLogger(__name__)

_DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "data")
_FILE_LOCK = threading.Lock()

STORAGE_KEY = "sales_pulse_data_v1"

DEFAULTS = {
    "config.json": {
        "reporting": {
            "trailing_days": 30,
            "top_n": 5,
            "daily_series_days": 14,
            "recent_sales": 5,
        },
        "insights": {
            "model_id": "us.amazon.nova-lite-v1:0",
            "region_name": "us-east-1",
            "max_tokens": 1000,
            "temperature": 0.7,
            "max_sales": 50,
        },
    }
}

def data_path(filename: str) -> str:
    os.makedirs(_DATA_DIR, exist_ok=True)
    return os.path.join(_DATA_DIR, filename)

def _atomic_write(path: str, data_obj):
    tmp_fd, tmp_path = tempfile.mkstemp(prefix=".tmp_", dir=_DATA_DIR)
    try:
        with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
            json.dump(data_obj, f, indent=2)
        os.replace(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)

def ensure_defaults():
    os.makedirs(_DATA_DIR, exist_ok=True)
    for fname, default in DEFAULTS.items():
        path = data_path(fname)
        if not os.path.exists(path):
            with _FILE_LOCK:
                _atomic_write(path, default)

def exists(filename: str) -> bool:
    return os.path.exists(data_path(filename))

def read_json(filename: str):
    path = data_path(filename)
    with _FILE_LOCK:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

def write_json(filename: str, obj):
    path = data_path(filename)
    with _FILE_LOCK:
        _atomic_write(path, obj)

def read_config() -> Dict:
    """Config file merged over DEFAULTS, so a partial config.json still works."""
    ensure_defaults()
    cfg = read_json("config.json")
    merged = {}
    for section, values in DEFAULTS["config.json"].items():
        merged[section] = {**values, **cfg.get(section, {})}
    return merged

# -------- Application state blob --------
def _state_file() -> str:
    return f"{STORAGE_KEY}.json"

def save_state(state: Dict):
    """Overwrite the stored blob with the whole state."""
    write_json(_state_file(), state)

def load_state() -> Dict:
    """Return the stored state, seeding and persisting demo data on first run."""
    if exists(_state_file()):
        return read_json(_state_file())

    state = seed_state()
    LOG.info("No stored state under %s, seeded %d sales", STORAGE_KEY, len(state["sales"]))
    save_state(state)
    return state

def clear_state():
    path = data_path(_state_file())
    with _FILE_LOCK:
        if os.path.exists(path):
            os.remove(path)
