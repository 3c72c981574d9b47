from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any

from .intents import SuggestionIntent, coerce_intent
from .models import PlaceCandidate

EARTH_RADIUS_METERS = 6371000.0
MAX_REASONS = 5


def haversine_meters(a: tuple[float, float], b: tuple[float, float]) -> float:
    lat1, lon1 = map(math.radians, a)
    lat2, lon2 = map(math.radians, b)
    d_lat = lat2 - lat1
    d_lon = lon2 - lon1
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    return EARTH_RADIUS_METERS * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def generate_reasons(
    intent: Any,
    place: PlaceCandidate,
    user_location: tuple[float, float] | None = None,
    matched_preferences: Sequence[str] = (),
    novelty_score: float = 0.0,
    contextual_reasons: Sequence[str] = (),
) -> list[str]:
    """Explain why *place* was suggested, most concrete reasons first."""
    reasons: list[str] = []

    if user_location is not None and place.latitude is not None and place.longitude is not None:
        distance = haversine_meters(user_location, (place.latitude, place.longitude))
        if distance < 500:
            reasons.append("Very close to you (walking distance)")
        elif distance < 1500:
            reasons.append("Close to your location")

    if place.rating is not None:
        if place.rating >= 4.5:
            reasons.append("Highly rated (4.5+ stars)")
        elif place.rating >= 4.0:
            reasons.append("Well-rated")

    resolved = coerce_intent(intent)
    if resolved is SuggestionIntent.FOOD_ONLY:
        reasons.append("Matches your food preference")
    elif resolved is SuggestionIntent.ACTIVITY_ONLY:
        reasons.append("Great activity for your area")
    elif resolved is SuggestionIntent.ROUTE_PLANNING:
        reasons.append("Part of a balanced day plan")
    elif resolved is SuggestionIntent.TRY_SOMETHING_NEW:
        if novelty_score > 0.7:
            reasons.append("A new experience for you")
        elif novelty_score > 0.4:
            reasons.append("Something different but familiar")

    if matched_preferences:
        reasons.append(f"Matches your interests: {', '.join(matched_preferences[:2])}")

    reasons.extend(contextual_reasons[:2])

    return reasons[:MAX_REASONS]
