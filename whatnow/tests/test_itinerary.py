from __future__ import annotations

import datetime as dt

import pytest
from pydantic import ValidationError

from whatnow.suggestions.config import SuggestionConfig
from whatnow.suggestions.itinerary import RouteAssemblyError, assemble_itinerary, default_title
from whatnow.suggestions.models import CandidateStop, ItineraryStop, PlaceCandidate

DAY = dt.date(2024, 5, 18)


def _stop(pid: str, duration: int, travel: int | None = None, distance: int | None = None) -> CandidateStop:
    return CandidateStop(
        place=PlaceCandidate(id=pid, category="cafe", name=f"Stop {pid}"),
        duration_minutes=duration,
        activity_type="visit",
        travel_time_from_previous=travel,
        distance_from_previous=distance,
    )


def _scenario_stops() -> list[CandidateStop]:
    return [_stop("a", 30), _stop("b", 45, 10, 700), _stop("c", 20, 15, 1200)]


# ── Arrival times and totals ─────────────────────────────────────────────


def test_three_stop_day_plan():
    itinerary = assemble_itinerary(_scenario_stops(), DAY, start_time=dt.time(9, 0))

    assert [s.arrival_time for s in itinerary.stops] == [
        dt.time(9, 0), dt.time(9, 40), dt.time(10, 40),
    ]
    assert itinerary.total_duration_minutes == 120
    assert itinerary.total_distance_meters == 1900


def test_first_stop_has_no_travel_fields():
    itinerary = assemble_itinerary(_scenario_stops(), DAY, start_time=dt.time(9, 0))
    first, *rest = itinerary.stops
    assert first.travel_time_from_previous is None
    assert first.distance_from_previous is None
    for stop in rest:
        assert stop.travel_time_from_previous is not None
        assert stop.distance_from_previous is not None


def test_orders_are_sequential_and_input_order_kept():
    itinerary = assemble_itinerary(_scenario_stops(), DAY)
    assert [s.order for s in itinerary.stops] == [1, 2, 3]
    assert [s.place.id for s in itinerary.stops] == ["a", "b", "c"]


def test_first_stop_travel_estimates_are_discarded():
    stops = [_stop("a", 30, travel=25, distance=2000), _stop("b", 30, 5, 300)]
    itinerary = assemble_itinerary(stops, DAY, start_time=dt.time(9, 0))
    assert itinerary.stops[0].travel_time_from_previous is None
    assert itinerary.total_duration_minutes == 65
    assert itinerary.total_distance_meters == 300


def test_missing_travel_on_later_stop_becomes_zero():
    stops = [_stop("a", 30), _stop("b", 30)]
    itinerary = assemble_itinerary(stops, DAY, start_time=dt.time(9, 0))
    second = itinerary.stops[1]
    assert second.travel_time_from_previous == 0
    assert second.distance_from_previous == 0
    assert second.arrival_time == dt.time(9, 30)


def test_single_stop():
    itinerary = assemble_itinerary([_stop("solo", 90)], DAY, start_time=dt.time(14, 15))
    assert len(itinerary.stops) == 1
    assert itinerary.stops[0].arrival_time == dt.time(14, 15)
    assert itinerary.total_duration_minutes == 90
    assert itinerary.total_distance_meters == 0


def test_arrival_times_wrap_at_midnight():
    stops = [_stop("late", 45), _stop("later", 30, 10, 600)]
    itinerary = assemble_itinerary(stops, DAY, start_time=dt.time(23, 30))

    assert [s.arrival_time for s in itinerary.stops] == [dt.time(23, 30), dt.time(0, 25)]
    assert itinerary.total_duration_minutes == 85
    assert itinerary.date == DAY


def test_total_duration_law():
    stops = [_stop(str(i), 15 * (i + 1), i * 4, i * 250) for i in range(6)]
    itinerary = assemble_itinerary(stops, DAY)
    durations = sum(s.duration_minutes for s in itinerary.stops)
    travel = sum(s.travel_time_from_previous or 0 for s in itinerary.stops)
    assert itinerary.total_duration_minutes == durations + travel


# ── Defaults and metadata ────────────────────────────────────────────────


def test_defaults_come_from_config():
    config = SuggestionConfig(day_start=dt.time(10, 30), transportation_mode="driving")
    itinerary = assemble_itinerary(_scenario_stops(), DAY, config=config)
    assert itinerary.stops[0].arrival_time == dt.time(10, 30)
    assert itinerary.transportation_mode == "driving"


def test_explicit_transportation_mode_wins():
    itinerary = assemble_itinerary(_scenario_stops(), DAY, "transit")
    assert itinerary.transportation_mode == "transit"


def test_default_title_and_passthrough_fields():
    itinerary = assemble_itinerary(
        _scenario_stops(), DAY,
        description="Coffee, art, dinner",
        reasoning="Walkable loop",
        estimated_cost="$40-$60",
    )
    assert itinerary.title == default_title(DAY) == "Day Plan / Route - 2024-05-18"
    assert itinerary.date == DAY
    assert itinerary.description == "Coffee, art, dinner"
    assert itinerary.reasoning == "Walkable loop"
    assert itinerary.estimated_cost == "$40-$60"


def test_each_call_gets_a_fresh_id():
    first = assemble_itinerary(_scenario_stops(), DAY)
    second = assemble_itinerary(_scenario_stops(), DAY)
    assert first.id != second.id


# ── Failures ─────────────────────────────────────────────────────────────


def test_empty_stop_list_fails():
    with pytest.raises(RouteAssemblyError):
        assemble_itinerary([], DAY)


def test_stop_without_place_fails():
    stops = [_stop("a", 30), CandidateStop(duration_minutes=30)]
    with pytest.raises(RouteAssemblyError, match="stop 2"):
        assemble_itinerary(stops, DAY)


def test_stop_with_blank_place_id_fails():
    stops = [CandidateStop(place=PlaceCandidate(id="  "), duration_minutes=30)]
    with pytest.raises(RouteAssemblyError):
        assemble_itinerary(stops, DAY)


def test_route_assembly_error_is_value_error():
    assert issubclass(RouteAssemblyError, ValueError)


def test_itinerary_stop_rejects_travel_on_first_stop():
    with pytest.raises(ValidationError):
        ItineraryStop(
            order=1,
            place=PlaceCandidate(id="x"),
            arrival_time=dt.time(9, 0),
            duration_minutes=30,
            travel_time_from_previous=5,
            distance_from_previous=100,
        )


def test_itinerary_stop_requires_travel_on_later_stops():
    with pytest.raises(ValidationError):
        ItineraryStop(
            order=2,
            place=PlaceCandidate(id="x"),
            arrival_time=dt.time(9, 0),
            duration_minutes=30,
        )
