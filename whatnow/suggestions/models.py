from __future__ import annotations

import datetime as dt
import uuid
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


# ---------------------------------------------------------------------------
# Upstream inputs
# ---------------------------------------------------------------------------


class InterpretedPrompt(BaseModel):
    model_config = ConfigDict(frozen=True)

    text_query: str = ""
    location_text: str | None = None
    price_preferences: tuple[str, ...] = Field(
        default=(), description='Price tags, e.g. ("PRICE_LEVEL_INEXPENSIVE",)',
    )


class PlaceCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    category: str = Field(default="", description='Category tag(s), e.g. "cafe" or "cafe, bakery"')
    name: str = ""
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)
    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    source: str | None = None
    data: dict[str, Any] = Field(default_factory=dict, description="Opaque display data")

    @property
    def category_tags(self) -> list[str]:
        return [tag.strip().lower() for tag in self.category.split(",") if tag.strip()]


class PlaceSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    place_id: str
    summary: str = ""
    highlights: list[str] = Field(default_factory=list)
    sentiment_score: float = Field(default=0.0, ge=0.0, le=1.0)
    best_for: list[str] = Field(default_factory=list)
    recommended_time: str | None = None


class CandidateStop(BaseModel):
    """A stop proposed upstream, in visit order, before materialisation."""

    place: PlaceCandidate | None = None
    duration_minutes: int = Field(default=60, ge=0, le=24 * 60)
    activity_type: str = ""
    reason: str = ""
    travel_time_from_previous: int | None = Field(default=None, ge=0)
    distance_from_previous: int | None = Field(default=None, ge=0)


class CandidatePool(BaseModel):
    places: list[PlaceCandidate] = Field(default_factory=list)
    summaries: list[PlaceSummary] = Field(default_factory=list)
    stops: list[CandidateStop] = Field(default_factory=list)
    title: str | None = None
    description: str = ""
    reasoning: str = ""
    estimated_cost: str | None = None


# ---------------------------------------------------------------------------
# Itinerary
# ---------------------------------------------------------------------------


class ItineraryStop(BaseModel):
    model_config = ConfigDict(frozen=True)

    order: int = Field(..., ge=1)
    place: PlaceCandidate
    arrival_time: dt.time
    duration_minutes: int = Field(..., ge=0)
    activity_type: str = ""
    reason: str = ""
    travel_time_from_previous: int | None = Field(default=None, ge=0)
    distance_from_previous: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_travel_fields(self) -> "ItineraryStop":
        present = (
            self.travel_time_from_previous is not None,
            self.distance_from_previous is not None,
        )
        if self.order == 1 and any(present):
            raise ValueError("the first stop has no previous stop to travel from")
        if self.order > 1 and not all(present):
            raise ValueError(
                f"stop {self.order} must carry travel time and distance from the previous stop"
            )
        return self


class AIItinerary(BaseModel):
    """Ordered day plan. Built once per request and never mutated."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    title: str
    description: str = ""
    date: dt.date
    stops: list[ItineraryStop] = Field(..., min_length=1)
    total_duration_minutes: int = Field(..., ge=0)
    total_distance_meters: int = Field(..., ge=0)
    reasoning: str = ""
    transportation_mode: str = "walking"
    estimated_cost: str | None = None
    generated_at: dt.datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def check_totals(self) -> "AIItinerary":
        orders = [stop.order for stop in self.stops]
        if orders != list(range(1, len(self.stops) + 1)):
            raise ValueError(f"stop order must run 1..{len(self.stops)}, got {orders}")

        travel = sum(stop.travel_time_from_previous or 0 for stop in self.stops)
        durations = sum(stop.duration_minutes for stop in self.stops)
        if self.total_duration_minutes != durations + travel:
            raise ValueError("total_duration_minutes must equal stop durations plus travel time")

        distance = sum(stop.distance_from_previous or 0 for stop in self.stops)
        if self.total_distance_meters != distance:
            raise ValueError("total_distance_meters must equal the sum of inter-stop distances")
        return self


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


class SuggestionResultType(str, Enum):
    suggestions = "suggestions"
    itinerary = "itinerary"


class SuggestionItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    place: PlaceCandidate
    summary: PlaceSummary | None = None
    reasons: list[str] = Field(default_factory=list)


class SuggestionMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    generated_at: dt.datetime = Field(default_factory=_utcnow)
    display_name: str
    diversity_factor: float
    emphasizes_novelty: bool = False


class SuggestionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: SuggestionResultType
    intent: str
    suggestions: list[SuggestionItem] = Field(default_factory=list)
    itinerary: AIItinerary | None = None
    total_count: int = Field(default=0, ge=0)
    metadata: SuggestionMeta

    @model_validator(mode="after")
    def check_shape(self) -> "SuggestionResult":
        is_itinerary = self.type is SuggestionResultType.itinerary
        if is_itinerary != (self.itinerary is not None):
            raise ValueError("itinerary must be set exactly when type is 'itinerary'")
        if is_itinerary and self.suggestions:
            raise ValueError("an itinerary result carries no suggestion list")
        return self


# ---------------------------------------------------------------------------
# API payloads
# ---------------------------------------------------------------------------


class SuggestionsRequest(BaseModel):
    prompt: str = Field(default="", max_length=1000)
    intent: str | None = Field(
        default=None, description="Intent name; classified from the prompt when omitted",
    )
    latitude: float
    longitude: float
    radius_meters: int = 3000
    walking_distance_meters: int | None = None
    start_date: dt.date | None = None
    start_time: dt.time | None = None
    transportation_mode: str | None = None
    excluded_place_ids: list[str] = Field(default_factory=list)
    candidates: CandidatePool = Field(default_factory=CandidatePool)
    use_ai: bool = False
