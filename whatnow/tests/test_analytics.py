from __future__ import annotations

from fastapi.testclient import TestClient

from whatnow.analytics.aggregator import compute_analytics
from whatnow.analytics.store import clear_events, get_events, record_event
from whatnow.app import app

client = TestClient(app)

PLACES = [
    {"id": "m1", "category": "museum"},
    {"id": "c1", "category": "cafe"},
]


def _suggest(intent: str, **overrides):
    body = {"intent": intent, "latitude": 40.99, "longitude": 29.03, "candidates": {"places": PLACES}}
    body.update(overrides)
    return client.post("/suggestions", json=body)


def test_analytics_returns_empty_initially():
    clear_events()
    resp = client.get("/analytics")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_requests"] == 0
    assert body["avg_response_time_ms"] == 0.0
    assert body["route_share"] == 0.0


def test_analytics_tracks_requests_by_intent():
    clear_events()
    _suggest("FOOD_ONLY")
    _suggest("FOOD_ONLY")
    _suggest("ACTIVITY_ONLY")
    body = client.get("/analytics").json()
    assert body["total_requests"] == 3
    assert body["avg_response_time_ms"] >= 0
    assert body["requests_by_intent"][0] == {"intent": "FOOD_ONLY", "count": 2}


def test_analytics_route_share_and_empty_results():
    clear_events()
    _suggest("ROUTE_PLANNING", walking_distance_meters=2000)
    _suggest("FOOD_ONLY", candidates={"places": [{"id": "m1", "category": "museum"}]})
    body = client.get("/analytics").json()
    assert body["route_share"] == 50.0
    assert body["empty_results"] == 1


def test_analytics_counts_failures():
    clear_events()
    _suggest("FOOD_ONLY", latitude=200.0)
    _suggest("ROUTE_PLANNING", walking_distance_meters=2000, candidates={})
    body = client.get("/analytics").json()
    assert body["failed_requests"] == 2
    assert body["empty_results"] == 2


def test_store_filters_by_type():
    clear_events()
    record_event("suggestion", {"intent": "FOOD_ONLY"})
    record_event("other", {})
    assert len(get_events()) == 2
    assert len(get_events("suggestion")) == 1


def test_compute_analytics_ignores_other_events():
    events = [
        {"type": "suggestion", "intent": "FOOD_ONLY", "response_time_ms": 10.0,
         "result_type": "suggestions", "total_count": 2},
        {"type": "suggestion", "intent": "ROUTE_PLANNING", "response_time_ms": 30.0,
         "result_type": "itinerary", "total_count": 3},
        {"type": "other"},
    ]
    result = compute_analytics(events)
    assert result["total_requests"] == 2
    assert result["avg_response_time_ms"] == 20.0
    assert result["route_share"] == 50.0
    assert result["empty_results"] == 0
