from __future__ import annotations

import logging
from typing import Any

from .intents import MAX_WALKING_DISTANCE, SuggestionIntent, coerce_intent

logger = logging.getLogger(__name__)

MIN_RADIUS = 100
MAX_RADIUS = 50000
MIN_ROUTE_WALKING_DISTANCE = 500


def validate_request(
    intent: Any,
    latitude: float,
    longitude: float,
    radius_meters: int,
    walking_distance_meters: int | None = None,
) -> list[str]:
    """Return human-readable validation errors; an empty list means valid."""
    errors: list[str] = []

    if not -90 <= latitude <= 90:
        errors.append("Latitude must be between -90 and 90")
    if not -180 <= longitude <= 180:
        errors.append("Longitude must be between -180 and 180")
    if not MIN_RADIUS <= radius_meters <= MAX_RADIUS:
        errors.append("Radius must be between 100 and 50,000 meters")

    if coerce_intent(intent) is SuggestionIntent.ROUTE_PLANNING:
        if walking_distance_meters is None or walking_distance_meters < MIN_ROUTE_WALKING_DISTANCE:
            errors.append("Route planning requires a walking distance of at least 500 meters")
        elif walking_distance_meters > MAX_WALKING_DISTANCE:
            errors.append("Walking distance cannot exceed 10,000 meters (10 km)")

    if errors:
        logger.warning("Request validation failed for %s: %s", intent, ", ".join(errors))
    return errors
