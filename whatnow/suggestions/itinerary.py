from __future__ import annotations

import datetime as dt
import logging

from .config import DEFAULT_SUGGESTION_CONFIG, SuggestionConfig
from .intents import SuggestionIntent, display_name
from .models import AIItinerary, CandidateStop, ItineraryStop

logger = logging.getLogger(__name__)


class RouteAssemblyError(ValueError):
    """A route-required request has no viable stops, or a stop has no place."""


def default_title(start_date: dt.date) -> str:
    return f"{display_name(SuggestionIntent.ROUTE_PLANNING)} - {start_date:%Y-%m-%d}"


def assemble_itinerary(
    stops: list[CandidateStop],
    start_date: dt.date,
    transportation_mode: str | None = None,
    *,
    start_time: dt.time | None = None,
    title: str | None = None,
    description: str = "",
    reasoning: str = "",
    estimated_cost: str | None = None,
    config: SuggestionConfig = DEFAULT_SUGGESTION_CONFIG,
) -> AIItinerary:
    """
    Materialise upstream stops into an :class:`AIItinerary`.

    Stops are taken in the order given; nothing is re-ordered. The first stop
    arrives at *start_time* (or the configured day start) and every later stop
    arrives after the previous stop's duration plus its own travel time.
    Missing travel estimates on later stops become explicit zeros.

    Raises :class:`RouteAssemblyError` for an empty stop list or a stop
    without a usable place.
    """
    if not stops:
        raise RouteAssemblyError("route planning needs at least one stop")

    clock = dt.datetime.combine(start_date, start_time or config.day_start)
    materialised: list[ItineraryStop] = []
    previous_duration = 0

    for order, stop in enumerate(stops, start=1):
        place = stop.place
        if place is None or not place.id.strip():
            raise RouteAssemblyError(f"stop {order} is missing its place")

        if order == 1:
            travel_time = None
            distance = None
        else:
            travel_time = stop.travel_time_from_previous or 0
            distance = stop.distance_from_previous or 0
            clock += dt.timedelta(minutes=previous_duration + travel_time)

        materialised.append(ItineraryStop(
            order=order,
            place=place,
            arrival_time=clock.time(),
            duration_minutes=stop.duration_minutes,
            activity_type=stop.activity_type,
            reason=stop.reason,
            travel_time_from_previous=travel_time,
            distance_from_previous=distance,
        ))
        previous_duration = stop.duration_minutes

    total_travel = sum(s.travel_time_from_previous or 0 for s in materialised)
    total_duration = sum(s.duration_minutes for s in materialised) + total_travel
    total_distance = sum(s.distance_from_previous or 0 for s in materialised)

    itinerary = AIItinerary(
        title=title or default_title(start_date),
        description=description,
        date=start_date,
        stops=materialised,
        total_duration_minutes=total_duration,
        total_distance_meters=total_distance,
        reasoning=reasoning,
        transportation_mode=transportation_mode or config.transportation_mode,
        estimated_cost=estimated_cost,
    )

    logger.info(
        "Assembled itinerary with %d stops: %d min, %d m",
        len(materialised), total_duration, total_distance,
    )
    return itinerary
