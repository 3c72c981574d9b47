from __future__ import annotations

import json
import logging
import re

from groq import Groq

from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..suggestions.intents import SuggestionIntent, coerce_intent
from ..suggestions.models import InterpretedPrompt

logger = logging.getLogger(__name__)

DEFAULT_FOOD_QUERY = "restaurant cafe pizza burger"

# ---------------------------------------------------------------------------
# LLM Prompts
# ---------------------------------------------------------------------------

INTENT_CLASSIFICATION_PROMPT = """\
You classify requests for a place suggestion app. Given a user message, pick \
exactly one intent:

- QUICK_SUGGESTION: wants a quick pick right now, no specific category
- FOOD_ONLY: wants somewhere to eat or drink
- ACTIVITY_ONLY: wants something to do (museum, park, cinema, sports, ...)
- ROUTE_PLANNING: wants a multi-stop plan or route for the day
- TRY_SOMETHING_NEW: wants something new or different from usual

Return ONLY valid JSON: {"intent": "<one of the labels above>"}"""


# ---------------------------------------------------------------------------
# Keyword tables (EN / TR)
# ---------------------------------------------------------------------------

_FILLER_WORDS = ["i want to", "i want a", "i want", "istiyorum", "isterim", "lütfen", "please"]

_FOOD_KEYWORDS = [
    "eat", "food", "hungry", "meal", "lunch", "dinner", "breakfast", "brunch",
    "yemek", "acıktım", "karnım", "kahvaltı", "öğle", "akşam",
]

_CUISINES = [
    "kebap", "kebab", "döner", "doner", "lahmacun", "pide", "balık", "balik", "fish",
    "meze", "turkish", "ottoman", "vegan", "vegetarian",
    "pizza", "burger", "sushi", "chinese", "italian", "mexican", "indian", "japanese",
    "korean", "thai", "vietnamese", "cafe", "coffee", "kahve", "tea",
]

_PRICE_KEYWORDS: dict[str, list[str]] = {
    "PRICE_LEVEL_INEXPENSIVE": ["ucuz", "ekonomik", "cheap", "inexpensive", "budget"],
    "PRICE_LEVEL_MODERATE": ["orta fiyat", "makul", "moderate", "mid-range"],
    "PRICE_LEVEL_EXPENSIVE": ["lüks", "pahalı", "expensive", "luxury", "fine dining"],
}

_LOCATIONS: dict[str, str] = {
    "kadıköy": "Kadıköy", "kadikoy": "Kadıköy",
    "üsküdar": "Üsküdar", "uskudar": "Üsküdar",
    "taksim": "Taksim",
    "ümraniye": "Ümraniye", "umraniye": "Ümraniye",
    "beşiktaş": "Beşiktaş", "besiktas": "Beşiktaş",
    "şişli": "Şişli", "sisli": "Şişli",
    "beyoğlu": "Beyoğlu", "beyoglu": "Beyoğlu",
    "fatih": "Fatih",
    "bakırköy": "Bakırköy", "bakirkoy": "Bakırköy",
    "maltepe": "Maltepe",
    "kartal": "Kartal",
    "pendik": "Pendik",
}

_ROUTE_KEYWORDS = ["route", "itinerary", "day plan", "plan my day", "whole day", "rota", "gezi planı"]
_NOVELTY_KEYWORDS = ["something new", "something different", "never tried", "surprise", "yeni bir şey", "farklı"]
_ACTIVITY_KEYWORDS = [
    "museum", "park", "cinema", "movie", "theater", "concert", "gallery", "zoo",
    "aquarium", "spa", "gym", "shopping", "müze", "sinema", "tiyatro", "konser",
]

_PUNCTUATION_RE = re.compile(r"[^\w\s'-]")
_WHITESPACE_RE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Keyword interpretation
# ---------------------------------------------------------------------------


def _normalize_prompt(text: str) -> str:
    normalized = _PUNCTUATION_RE.sub(" ", text.lower())
    for filler in _FILLER_WORDS:
        normalized = normalized.replace(filler, " ")
    return _WHITESPACE_RE.sub(" ", normalized).strip()


def _mentions(cleaned: str, keywords: list[str]) -> bool:
    # Phrases match as substrings, single words only as whole tokens.
    tokens = set(cleaned.split(" "))
    return any(k in cleaned if " " in k else k in tokens for k in keywords)


def _extract_price_preferences(cleaned: str) -> tuple[str, ...]:
    return tuple(
        tag for tag, keywords in _PRICE_KEYWORDS.items()
        if _mentions(cleaned, keywords)
    )


def _extract_location(cleaned: str) -> str | None:
    for token, name in _LOCATIONS.items():
        if token in cleaned:
            return name
    return None


def _build_query(cleaned: str, tokens: list[str]) -> str:
    cuisines = [c for c in _CUISINES if c in tokens]
    if cuisines:
        return " ".join(cuisines)

    if _mentions(cleaned, _FOOD_KEYWORDS):
        meaningful = [t for t in tokens if len(t) > 2 and t not in _FOOD_KEYWORDS][:3]
        if meaningful:
            return f"restaurant {' '.join(meaningful)}"
        return "restaurant cafe"

    return " ".join(t for t in tokens if len(t) > 2)


def interpret_prompt(text: str) -> InterpretedPrompt:
    """Keyword interpretation of a free-text prompt into an :class:`InterpretedPrompt`."""
    if not text or not text.strip():
        return InterpretedPrompt(text_query=DEFAULT_FOOD_QUERY)

    cleaned = _normalize_prompt(text)
    tokens = cleaned.split(" ")
    location = _extract_location(cleaned)
    if location:
        tokens = [t for t in tokens if not any(loc in t for loc in _LOCATIONS)]

    result = InterpretedPrompt(
        text_query=_build_query(cleaned, tokens) or DEFAULT_FOOD_QUERY,
        location_text=location,
        price_preferences=_extract_price_preferences(cleaned),
    )
    logger.info(
        "Prompt interpreted: %r -> query=%r location=%s price=%s",
        text, result.text_query, result.location_text, ",".join(result.price_preferences),
    )
    return result


# ---------------------------------------------------------------------------
# Intent classification
# ---------------------------------------------------------------------------


def _fallback_intent(text: str) -> SuggestionIntent:
    cleaned = _normalize_prompt(text or "")
    if _mentions(cleaned, _ROUTE_KEYWORDS):
        return SuggestionIntent.ROUTE_PLANNING
    if _mentions(cleaned, _NOVELTY_KEYWORDS):
        return SuggestionIntent.TRY_SOMETHING_NEW
    if _mentions(cleaned, _FOOD_KEYWORDS) or _mentions(cleaned, _CUISINES):
        return SuggestionIntent.FOOD_ONLY
    if _mentions(cleaned, _ACTIVITY_KEYWORDS):
        return SuggestionIntent.ACTIVITY_ONLY
    return SuggestionIntent.QUICK_SUGGESTION


def classify_intent(
    text: str,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> SuggestionIntent:
    """Classify *text* into a :class:`SuggestionIntent`, via Groq when available."""
    if not config.enabled or not config.api_key or not text.strip():
        return _fallback_intent(text)

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": INTENT_CLASSIFICATION_PROMPT},
                {"role": "user", "content": text},
            ],
            max_tokens=config.classify_max_tokens,
            temperature=config.classify_temperature,
            response_format={"type": "json_object"},
        )

        content = response.choices[0].message.content or "{}"
        intent = coerce_intent(json.loads(content).get("intent"))
        if intent is None:
            logger.warning("Intent classifier returned an unknown label, using keywords")
            return _fallback_intent(text)
        return intent

    except Exception:
        logger.warning("Intent classification failed, using fallback", exc_info=True)
        return _fallback_intent(text)
