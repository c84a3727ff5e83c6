"""Application cache – approximate memory cost of an entry."""
from __future__ import annotations

import json
from typing import Any

__all__ = ["estimate_size"]

# Keys are costed at two bytes per character (UTF-16 code units).
KEY_CHAR_BYTES = 2


def estimate_size(key: str, value: Any) -> int:
    """Return the approximate byte cost of storing *value* under *key*.

    The value is costed by the length of its compact JSON encoding; objects
    JSON cannot encode natively are rendered with ``str``. Values JSON
    cannot encode at all (non-string dict keys, self-referencing
    containers) fall back to the length of their ``repr``.
    """
    try:
        encoded = json.dumps(value, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        encoded = repr(value)
    return len(key) * KEY_CHAR_BYTES + len(encoded)
