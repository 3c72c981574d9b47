from __future__ import annotations

import json
import logging
from typing import Any

from groq import Groq
from pydantic import BaseModel, Field, ValidationError

from ..suggestions.models import CandidateStop, InterpretedPrompt, PlaceCandidate, PlaceSummary
from .cache import cache_get, cache_set
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

SUMMARY_PROMPT = (
    "You are an expert at summarizing places and attractions. "
    "Create a concise, informative summary that highlights key features and "
    "helps travelers decide if this place is right for them.\n\n"
    "Return ONLY valid JSON in this exact format:\n"
    '{"summary": "<1-3 sentence overview>", "highlights": ["<feature>", ...], '
    '"sentiment_score": <0.0 to 1.0>, "best_for": ["families", "couples", ...], '
    '"recommended_time": "<best time to visit>"}'
)

DAY_PLAN_PROMPT = (
    "You are a travel planning assistant. Build a realistic one-day plan "
    "using ONLY the candidate places provided, in the order they should be visited.\n\n"
    "Return ONLY valid JSON in this exact format:\n"
    '{"title": "<catchy title>", "description": "<overview>", '
    '"reasoning": "<overall rationale>", "estimated_cost": "<e.g. $50-$100>", '
    '"stops": [{"place_id": "<candidate id>", "duration_minutes": 60, '
    '"activity_type": "breakfast", "reason": "<one sentence>", '
    '"travel_time_from_previous": 10, "distance_from_previous": 800}]}\n'
    "Rules:\n"
    "- Balance activity types (don't put six museums in a row).\n"
    "- Each stop should last 30-120 minutes.\n"
    "- Estimate travel between stops (walking: 12 min/km, driving: 2 min/km).\n"
    "- Omit travel fields on the first stop."
)


class DayPlanDraft(BaseModel):
    title: str | None = None
    description: str = ""
    reasoning: str = ""
    estimated_cost: str | None = None
    stops: list[CandidateStop] = Field(default_factory=list)


def _place_table(places: list[PlaceCandidate]) -> list[str]:
    lines = ["| ID | Name | Category | Rating |", "|---|---|---|---|"]
    for p in places:
        rating = p.rating if p.rating is not None else "N/A"
        lines.append(f"| {p.id} | {p.name or '?'} | {p.category or '?'} | {rating} |")
    return lines


def _complete_json(
    config: LLMConfig,
    system_prompt: str,
    user_message: str,
    temperature: float,
) -> dict[str, Any]:
    client = Groq(api_key=config.api_key, timeout=config.timeout)
    response = client.chat.completions.create(
        model=config.model,
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ],
        max_tokens=config.max_tokens,
        temperature=temperature,
        response_format={"type": "json_object"},
    )
    content = response.choices[0].message.content or "{}"
    return json.loads(content)


# ---------------------------------------------------------------------------
# Place summaries
# ---------------------------------------------------------------------------


def fallback_summary(place: PlaceCandidate) -> PlaceSummary:
    description = place.data.get("description")
    return PlaceSummary(
        place_id=place.id,
        summary=str(description) if description else f"A {place.category or 'place'} in the area.",
        sentiment_score=(place.rating if place.rating is not None else 3.0) / 5.0,
    )


def summarize_place(
    place: PlaceCandidate,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> PlaceSummary:
    """
    Ask Groq for a short summary of *place*.

    Successful summaries are cached per place id. Returns
    :func:`fallback_summary` on any failure (timeout, bad JSON, API error).
    """
    cached = cache_get("summary", place.id)
    if cached is not None:
        return cached

    if not config.enabled or not config.api_key:
        return fallback_summary(place)

    try:
        lines = [
            f"Name: {place.name or place.id}",
            f"Types: {place.category}",
            f"Rating: {place.rating if place.rating is not None else 0}",
            f"Description: {place.data.get('description') or 'No description available'}",
        ]
        parsed = _complete_json(
            config, SUMMARY_PROMPT, "\n".join(lines), temperature=config.summary_temperature,
        )
        summary = PlaceSummary.model_validate({**parsed, "place_id": place.id})
    except Exception:
        logger.warning("Place summary failed for %s, using fallback", place.id, exc_info=True)
        return fallback_summary(place)

    cache_set("summary", place.id, summary, config.summary_cache_ttl)
    return summary


# ---------------------------------------------------------------------------
# Day plan drafts
# ---------------------------------------------------------------------------


def _parse_stops(
    raw_stops: list[Any],
    places_by_id: dict[str, PlaceCandidate],
) -> list[CandidateStop]:
    stops: list[CandidateStop] = []
    for idx, raw in enumerate(raw_stops):
        if not isinstance(raw, dict):
            logger.debug("Skipping non-dict stop at position %s", idx)
            continue
        place = places_by_id.get(str(raw.get("place_id", "")))
        if place is None:
            logger.debug("Skipping stop at position %s with unknown place id", idx)
            continue
        try:
            stops.append(CandidateStop(
                place=place,
                duration_minutes=raw.get("duration_minutes", 60),
                activity_type=str(raw.get("activity_type") or ""),
                reason=str(raw.get("reason") or ""),
                travel_time_from_previous=raw.get("travel_time_from_previous"),
                distance_from_previous=raw.get("distance_from_previous"),
            ))
        except ValidationError as exc:
            logger.warning("Skipping stop at position %s due to validation error: %s", idx, exc)
    return stops


def draft_day_plan(
    prompt: InterpretedPrompt,
    places: list[PlaceCandidate],
    *,
    max_stops: int = 8,
    transportation_mode: str = "walking",
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> DayPlanDraft | None:
    """
    Ask Groq to order a subset of *places* into a day plan.

    Stops referencing ids outside *places* are dropped. Returns ``None`` when
    the LLM is disabled, fails, or proposes no usable stop.
    """
    if not config.enabled or not config.api_key or not places:
        return None

    try:
        lines = ["## Request", f"- Query: {prompt.text_query}"]
        if prompt.location_text:
            lines.append(f"- Area: {prompt.location_text}")
        if prompt.price_preferences:
            lines.append(f"- Price: {', '.join(prompt.price_preferences)}")
        lines.append(f"- Transportation: {transportation_mode}")
        lines.append(f"- Maximum stops: {max_stops}")
        lines.append("\n## Candidate Places")
        lines.extend(_place_table(places))

        parsed = _complete_json(
            config, DAY_PLAN_PROMPT, "\n".join(lines), temperature=config.day_plan_temperature,
        )
        raw_stops = parsed.get("stops") or []
        stops = _parse_stops(raw_stops if isinstance(raw_stops, list) else [], {p.id: p for p in places})
        if not stops:
            logger.warning("Day plan draft contained no usable stops")
            return None

        return DayPlanDraft(
            title=str(parsed["title"]) if parsed.get("title") else None,
            description=str(parsed.get("description") or ""),
            reasoning=str(parsed.get("reasoning") or ""),
            estimated_cost=str(parsed["estimated_cost"]) if parsed.get("estimated_cost") else None,
            stops=stops[:max_stops],
        )

    except Exception:
        logger.warning("Day plan draft failed, falling back to candidate order", exc_info=True)
        return None
