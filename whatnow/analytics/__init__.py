"""
Process-local request analytics.

Responsibilities:
- Record one event per suggestion request.
- Aggregate per-intent counts, latency, route share and empty results.
"""
