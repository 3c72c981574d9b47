from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Iterable
from typing import Any

from .config import DEFAULT_SUGGESTION_CONFIG, SuggestionConfig
from .filtering import exclude_places, filter_candidates
from .intents import coerce_intent, display_name, diversity_factor, policy_for
from .itinerary import assemble_itinerary
from .models import (
    CandidatePool,
    CandidateStop,
    InterpretedPrompt,
    PlaceCandidate,
    SuggestionItem,
    SuggestionMeta,
    SuggestionResult,
    SuggestionResultType,
)
from .reasons import generate_reasons

logger = logging.getLogger(__name__)


def _route_stops(
    pool: CandidatePool,
    places: list[PlaceCandidate],
    excluded: set[str],
    config: SuggestionConfig,
) -> list[CandidateStop]:
    """Stops for the assembler: upstream stops if sent, else one per place."""
    if pool.stops:
        return [
            stop for stop in pool.stops
            if stop.place is None or stop.place.id not in excluded
        ]
    return [
        CandidateStop(
            place=place,
            duration_minutes=config.default_stop_minutes,
            activity_type=place.category_tags[0] if place.category_tags else "",
        )
        for place in places
    ]


def build_suggestions(
    intent: Any,
    prompt: InterpretedPrompt,
    pool: CandidatePool,
    *,
    start_date: dt.date | None = None,
    start_time: dt.time | None = None,
    transportation_mode: str | None = None,
    excluded_place_ids: Iterable[str] = (),
    user_location: tuple[float, float] | None = None,
    config: SuggestionConfig = DEFAULT_SUGGESTION_CONFIG,
) -> SuggestionResult:
    """
    Turn a classified intent and an upstream candidate pool into a result.

    Route intents hand the whole pool (no category filter) to the itinerary
    assembler and return its itinerary; a :class:`RouteAssemblyError` is
    propagated untouched. Every other intent gets the category-filtered pool
    capped at the policy's result count, in upstream relevance order.
    Novelty intents are not re-ranked here: the upstream recommender is
    expected to have sent novel candidates already.
    """
    policy = policy_for(intent)
    resolved = coerce_intent(intent)
    intent_label = resolved.value if resolved is not None else str(intent)

    logger.info(
        "Building suggestions for %s (query=%r, location=%s): %d places, %d stops",
        intent_label, prompt.text_query, prompt.location_text,
        len(pool.places), len(pool.stops),
    )

    excluded = set(excluded_place_ids)
    places = exclude_places(pool.places, excluded)
    metadata = SuggestionMeta(
        display_name=display_name(intent),
        diversity_factor=diversity_factor(intent),
        emphasizes_novelty=policy.emphasizes_novelty,
    )

    if policy.requires_route:
        stops = _route_stops(pool, places, excluded, config)[: policy.max_results]
        itinerary = assemble_itinerary(
            stops,
            start_date or dt.date.today(),
            transportation_mode,
            start_time=start_time,
            title=pool.title,
            description=pool.description,
            reasoning=pool.reasoning,
            estimated_cost=pool.estimated_cost,
            config=config,
        )
        return SuggestionResult(
            type=SuggestionResultType.itinerary,
            intent=intent_label,
            itinerary=itinerary,
            total_count=len(itinerary.stops),
            metadata=metadata,
        )

    admissible = filter_candidates(places, policy)
    if not admissible:
        logger.info("No eligible candidates left for %s", intent_label)

    summaries = {summary.place_id: summary for summary in pool.summaries}
    items = [
        SuggestionItem(
            place=place,
            summary=summaries.get(place.id),
            reasons=generate_reasons(intent, place, user_location),
        )
        for place in admissible[: policy.max_results]
    ]

    return SuggestionResult(
        type=SuggestionResultType.suggestions,
        intent=intent_label,
        suggestions=items,
        total_count=len(admissible),
        metadata=metadata,
    )
