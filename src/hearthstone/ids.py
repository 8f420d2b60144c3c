"""
Hearthstone - Identifier generation.

Prefixed ids ("inv_", "plan_", "prep_") keep store dumps readable.
"""

import itertools
import time
import uuid

_counter = itertools.count(1)


def generate_id(prefix: str = "") -> str:
    """
    Generate a collision-safe id: base36 timestamp + counter + random suffix.

    Args:
        prefix: Optional prefix joined with an underscore

    Returns:
        Id string, e.g. "inv_m1x2c3d40001a9f3e2"
    """
    timestamp = _to_base36(int(time.time() * 1000))
    count = _to_base36(next(_counter) % 1_000_000).rjust(4, "0")
    random_part = uuid.uuid4().hex[:6]
    body = f"{timestamp}{count}{random_part}"
    return f"{prefix}_{body}" if prefix else body


def _to_base36(value: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    if value == 0:
        return "0"
    out = []
    while value:
        value, rem = divmod(value, 36)
        out.append(digits[rem])
    return "".join(reversed(out))
