"""Application cache – CacheKey builder."""
from __future__ import annotations

import hashlib
import json

__all__ = ["CacheKey"]


class CacheKey:
    """Factory for the deterministic key shapes used by the services."""

    @staticmethod
    def for_resource(resource_type: str, resource_id: str | int) -> str:
        return f"{resource_type}:{resource_id}"

    @staticmethod
    def for_parts(resource_type: str, *parts: object) -> str:
        return ":".join([resource_type, *(str(part) for part in parts)])

    @staticmethod
    def for_report(resource_type: str, start: object, end: object) -> str:
        return f"{resource_type}_report:{start}:{end}"

    @staticmethod
    def for_query(query_type: str, **kwargs: object) -> str:
        # sorted kwargs, JSON-encoded, first 16 hex chars of SHA-256
        canonical = json.dumps(kwargs, sort_keys=True, default=str)
        digest = hashlib.sha256(canonical.encode()).hexdigest()[:16]
        return f"query:{query_type}:{digest}"
