from __future__ import annotations

from whatnow.suggestions.intents import SuggestionIntent
from whatnow.suggestions.validation import validate_request


def test_valid_request():
    assert validate_request(SuggestionIntent.FOOD_ONLY, 41.0, 29.0, 3000) == []


def test_coordinates_out_of_range():
    errors = validate_request(SuggestionIntent.FOOD_ONLY, 95.0, -200.0, 3000)
    assert "Latitude must be between -90 and 90" in errors
    assert "Longitude must be between -180 and 180" in errors


def test_radius_bounds():
    assert validate_request(SuggestionIntent.FOOD_ONLY, 41.0, 29.0, 99) == [
        "Radius must be between 100 and 50,000 meters",
    ]
    assert validate_request(SuggestionIntent.FOOD_ONLY, 41.0, 29.0, 50000) == []
    assert validate_request(SuggestionIntent.FOOD_ONLY, 41.0, 29.0, 50001) != []


def test_route_requires_walking_distance():
    errors = validate_request(SuggestionIntent.ROUTE_PLANNING, 41.0, 29.0, 3000)
    assert errors == ["Route planning requires a walking distance of at least 500 meters"]

    errors = validate_request(SuggestionIntent.ROUTE_PLANNING, 41.0, 29.0, 3000, 400)
    assert errors == ["Route planning requires a walking distance of at least 500 meters"]


def test_route_walking_distance_cap():
    errors = validate_request(SuggestionIntent.ROUTE_PLANNING, 41.0, 29.0, 3000, 12000)
    assert errors == ["Walking distance cannot exceed 10,000 meters (10 km)"]
    assert validate_request(SuggestionIntent.ROUTE_PLANNING, 41.0, 29.0, 3000, 2000) == []


def test_walking_distance_ignored_for_other_intents():
    assert validate_request(SuggestionIntent.QUICK_SUGGESTION, 41.0, 29.0, 3000) == []


def test_unknown_intent_validates_coordinates_only():
    assert validate_request("MYSTERY", 41.0, 29.0, 3000) == []
