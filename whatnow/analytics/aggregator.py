from __future__ import annotations

from collections import Counter
from typing import Any


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    requests = [e for e in events if e["type"] == "suggestion"]
    total = len(requests)

    times = [r["response_time_ms"] for r in requests if "response_time_ms" in r]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    intent_counter: Counter[str] = Counter(r.get("intent", "unknown") for r in requests)
    by_intent = [{"intent": n, "count": c} for n, c in intent_counter.most_common()]

    routes = sum(1 for r in requests if r.get("result_type") == "itinerary")
    empty = sum(1 for r in requests if r.get("total_count", 0) == 0)
    failed = sum(1 for r in requests if r.get("error"))

    return {
        "total_requests": total,
        "avg_response_time_ms": avg_time,
        "requests_by_intent": by_intent,
        "route_share": round(routes / total * 100, 1) if total else 0.0,
        "empty_results": empty,
        "failed_requests": failed,
    }
