from __future__ import annotations

import logging
import time

from fastapi import FastAPI, HTTPException

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_event
from .llm.cache import get_cache_stats
from .llm.groq_client import draft_day_plan, summarize_place
from .prompting.interpreter import classify_intent, interpret_prompt
from .prompting.models import InterpretRequest, InterpretResponse
from .suggestions.builder import build_suggestions
from .suggestions.filtering import exclude_places, filter_candidates
from .suggestions.intents import describe_intents, max_suggestions, policy_for, requires_route
from .suggestions.itinerary import RouteAssemblyError
from .suggestions.models import (
    CandidatePool,
    InterpretedPrompt,
    SuggestionResult,
    SuggestionsRequest,
)
from .suggestions.validation import validate_request

logger = logging.getLogger(__name__)

app = FastAPI(title="WhatNow Suggestion API", version="1.0.0")


def _enrich_pool(
    pool: CandidatePool,
    prompt: InterpretedPrompt,
    intent: str,
    body: SuggestionsRequest,
) -> CandidatePool:
    """Fill in AI summaries for the places that will be returned, or draft a day plan for routes."""
    places = exclude_places(pool.places, body.excluded_place_ids)
    update: dict = {}

    if not requires_route(intent):
        # Only the admissible head of the pool is returned, and so summarised
        admissible = filter_candidates(places, policy_for(intent))
        known = {s.place_id for s in pool.summaries}
        summaries = list(pool.summaries)
        summaries.extend(
            summarize_place(place)
            for place in admissible[: max_suggestions(intent)]
            if place.id not in known
        )
        update["summaries"] = summaries
    elif not pool.stops:
        draft = draft_day_plan(
            prompt,
            places,
            max_stops=max_suggestions(intent),
            transportation_mode=body.transportation_mode or "walking",
        )
        if draft is not None:
            update.update(
                stops=draft.stops,
                title=pool.title or draft.title,
                description=pool.description or draft.description,
                reasoning=pool.reasoning or draft.reasoning,
                estimated_cost=pool.estimated_cost or draft.estimated_cost,
            )
    return pool.model_copy(update=update)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/suggestions/intents")
def suggestion_intents() -> list[dict]:
    return describe_intents()


@app.post("/prompts/interpret", response_model=InterpretResponse)
def interpret(body: InterpretRequest) -> InterpretResponse:
    return InterpretResponse(
        prompt=interpret_prompt(body.prompt),
        intent=classify_intent(body.prompt),
    )


@app.post("/suggestions", response_model=SuggestionResult)
def suggestions(body: SuggestionsRequest) -> SuggestionResult:
    start = time.perf_counter()
    intent = body.intent or classify_intent(body.prompt).value

    def track(**data) -> None:
        elapsed_ms = (time.perf_counter() - start) * 1000
        record_event("suggestion", {"intent": intent, "response_time_ms": elapsed_ms, **data})

    errors = validate_request(
        intent,
        body.latitude,
        body.longitude,
        body.radius_meters,
        body.walking_distance_meters,
    )
    if errors:
        track(error="validation", total_count=0)
        raise HTTPException(status_code=400, detail=errors)

    prompt = interpret_prompt(body.prompt)
    pool = body.candidates
    if body.use_ai:
        pool = _enrich_pool(pool, prompt, intent, body)

    try:
        result = build_suggestions(
            intent,
            prompt,
            pool,
            start_date=body.start_date,
            start_time=body.start_time,
            transportation_mode=body.transportation_mode,
            excluded_place_ids=body.excluded_place_ids,
            user_location=(body.latitude, body.longitude),
        )
    except RouteAssemblyError as exc:
        logger.warning("Route assembly failed for %s: %s", intent, exc)
        track(error="route_assembly", total_count=0)
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    track(result_type=result.type.value, total_count=result.total_count)
    return result


# ── Operational endpoints ────────────────────────────────────────────────


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()
