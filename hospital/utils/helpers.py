import json
import random
import string
import time


def safe_load_json(text, default=None):
    """Parse a JSON column, falling back to ``default`` on empty or broken values."""
    if not text:
        return default
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        return default


def new_receipt_id() -> str:
    """Receipt reference for payment orders, e.g. ``rcpt_1718000000000_k3x9qa``."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=6))
    return f"rcpt_{int(time.time() * 1000)}_{suffix}"
