"""Application cache – in-process TTL/tag cache and read-through helpers."""
from hrms_core.application.cache.entry import MISSING, CacheEntry
from hrms_core.application.cache.keys import CacheKey
from hrms_core.application.cache.read_through import SingleFlightReadThrough, cached
from hrms_core.application.cache.settings import CacheSettings
from hrms_core.application.cache.sizing import estimate_size
from hrms_core.application.cache.stats import CacheStats
from hrms_core.application.cache.store import CacheStore

__all__ = [
    "MISSING",
    "CacheEntry",
    "CacheKey",
    "CacheSettings",
    "CacheStats",
    "CacheStore",
    "SingleFlightReadThrough",
    "cached",
    "estimate_size",
]
