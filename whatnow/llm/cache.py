from __future__ import annotations

import time
from collections import Counter
from typing import Any

# (namespace, key) -> (value, expires_at)
_entries: dict[tuple[str, str], tuple[Any, float]] = {}
_hits: Counter[str] = Counter()
_misses: Counter[str] = Counter()


def cache_get(namespace: str, key: str) -> Any | None:
    slot = (namespace, key)
    entry = _entries.get(slot)
    if entry is not None:
        value, expires_at = entry
        if time.time() < expires_at:
            _hits[namespace] += 1
            return value
        del _entries[slot]
    _misses[namespace] += 1
    return None


def cache_set(namespace: str, key: str, value: Any, ttl: float) -> None:
    _entries[(namespace, key)] = (value, time.time() + ttl)


def get_cache_stats() -> dict:
    hits = sum(_hits.values())
    lookups = hits + sum(_misses.values())
    return {
        "size": len(_entries),
        "hits": hits,
        "misses": lookups - hits,
        "hit_rate": round(hits / lookups * 100, 1) if lookups else 0.0,
        "namespaces": sorted({ns for ns, _ in _entries}),
    }


def clear_cache() -> None:
    _entries.clear()
    _hits.clear()
    _misses.clear()
