from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any


class SuggestionIntent(str, Enum):
    """Classified purpose of a suggestion request.

    Exactly one intent governs a request and it never changes after
    classification. Policy lookups go through :func:`policy_for` so that
    callers never depend on the table layout below.
    """

    QUICK_SUGGESTION = "QUICK_SUGGESTION"
    FOOD_ONLY = "FOOD_ONLY"
    ACTIVITY_ONLY = "ACTIVITY_ONLY"
    ROUTE_PLANNING = "ROUTE_PLANNING"
    TRY_SOMETHING_NEW = "TRY_SOMETHING_NEW"

    @property
    def policy(self) -> IntentPolicy:
        return policy_for(self)

    @property
    def requires_route(self) -> bool:
        return requires_route(self)

    @property
    def has_category_restrictions(self) -> bool:
        return has_category_restrictions(self)

    @property
    def emphasizes_novelty(self) -> bool:
        return emphasizes_novelty(self)

    @property
    def max_suggestions(self) -> int:
        return max_suggestions(self)

    @property
    def allowed_categories(self) -> tuple[str, ...]:
        return allowed_categories(self)

    @property
    def display_name(self) -> str:
        return display_name(self)


@dataclass(frozen=True)
class IntentPolicy:
    max_results: int
    # None means unrestricted; an empty tuple admits nothing.
    allowed_categories: tuple[str, ...] | None = None
    requires_route: bool = False
    emphasizes_novelty: bool = False

    @property
    def has_category_restrictions(self) -> bool:
        return self.allowed_categories is not None


# ---------------------------------------------------------------------------
# Policy table
# ---------------------------------------------------------------------------

FOOD_CATEGORIES: tuple[str, ...] = (
    "restaurant", "cafe", "bar", "bakery", "meal_takeaway",
    "meal_delivery", "food", "dessert", "coffee", "breakfast",
    "lunch", "dinner", "brunch",
)

ACTIVITY_CATEGORIES: tuple[str, ...] = (
    "amusement_park", "aquarium", "art_gallery", "bowling_alley",
    "casino", "movie_theater", "museum", "night_club", "park",
    "spa", "stadium", "tourist_attraction", "zoo", "gym",
    "shopping_mall", "library", "theater", "concert_hall",
)

DEFAULT_POLICY = IntentPolicy(max_results=10)

_POLICIES = MappingProxyType({
    SuggestionIntent.QUICK_SUGGESTION: IntentPolicy(max_results=3),
    SuggestionIntent.FOOD_ONLY: IntentPolicy(
        max_results=10, allowed_categories=FOOD_CATEGORIES,
    ),
    SuggestionIntent.ACTIVITY_ONLY: IntentPolicy(
        max_results=10, allowed_categories=ACTIVITY_CATEGORIES,
    ),
    SuggestionIntent.ROUTE_PLANNING: IntentPolicy(max_results=8, requires_route=True),
    SuggestionIntent.TRY_SOMETHING_NEW: IntentPolicy(max_results=5, emphasizes_novelty=True),
})

_DISPLAY_NAMES = MappingProxyType({
    SuggestionIntent.QUICK_SUGGESTION: "Quick Suggestion",
    SuggestionIntent.FOOD_ONLY: "Food & Dining",
    SuggestionIntent.ACTIVITY_ONLY: "Activities & Entertainment",
    SuggestionIntent.ROUTE_PLANNING: "Day Plan / Route",
    SuggestionIntent.TRY_SOMETHING_NEW: "Try Something New",
})

_DESCRIPTIONS = MappingProxyType({
    SuggestionIntent.QUICK_SUGGESTION: "Get a few quick suggestions for immediate decision",
    SuggestionIntent.FOOD_ONLY: "Restaurants, cafes, and dining options only",
    SuggestionIntent.ACTIVITY_ONLY: "Fun activities, entertainment, and cultural experiences",
    SuggestionIntent.ROUTE_PLANNING: "Multi-stop day plan with ordered stops",
    SuggestionIntent.TRY_SOMETHING_NEW: "Discover novel experiences based on your preferences",
})

_DIVERSITY_FACTORS = MappingProxyType({
    SuggestionIntent.QUICK_SUGGESTION: 0.3,
    SuggestionIntent.FOOD_ONLY: 0.5,
    SuggestionIntent.ACTIVITY_ONLY: 0.6,
    SuggestionIntent.ROUTE_PLANNING: 0.8,
    SuggestionIntent.TRY_SOMETHING_NEW: 1.0,
})
_DEFAULT_DIVERSITY = 0.5

# Metres
_WALKING_DISTANCES = MappingProxyType({
    SuggestionIntent.QUICK_SUGGESTION: 1000,
    SuggestionIntent.FOOD_ONLY: 2000,
    SuggestionIntent.ACTIVITY_ONLY: 3000,
    SuggestionIntent.ROUTE_PLANNING: 5000,
    SuggestionIntent.TRY_SOMETHING_NEW: 4000,
})
_DEFAULT_WALKING_DISTANCE = 3000
MAX_WALKING_DISTANCE = 10000

_ORDINALS: tuple[SuggestionIntent, ...] = tuple(SuggestionIntent)


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def coerce_intent(value: Any) -> SuggestionIntent | None:
    """Map an enum member, its name (any case) or its ordinal to an intent.

    Returns ``None`` for anything outside the enumeration.
    """
    if isinstance(value, SuggestionIntent):
        return value
    if isinstance(value, str):
        try:
            return SuggestionIntent(value.strip().upper())
        except ValueError:
            return None
    if isinstance(value, int) and not isinstance(value, bool):
        if 0 <= value < len(_ORDINALS):
            return _ORDINALS[value]
    return None


def policy_for(intent: Any) -> IntentPolicy:
    """Return the policy for *intent*; unknown values get :data:`DEFAULT_POLICY`."""
    resolved = coerce_intent(intent)
    if resolved is None:
        return DEFAULT_POLICY
    return _POLICIES.get(resolved, DEFAULT_POLICY)


def requires_route(intent: Any) -> bool:
    return policy_for(intent).requires_route


def has_category_restrictions(intent: Any) -> bool:
    return policy_for(intent).has_category_restrictions


def emphasizes_novelty(intent: Any) -> bool:
    return policy_for(intent).emphasizes_novelty


def max_suggestions(intent: Any) -> int:
    return policy_for(intent).max_results


def allowed_categories(intent: Any) -> tuple[str, ...]:
    """Allow-list for restricted intents, empty for unrestricted ones."""
    return policy_for(intent).allowed_categories or ()


def display_name(intent: Any) -> str:
    resolved = coerce_intent(intent)
    if resolved is None:
        return str(intent)
    return _DISPLAY_NAMES[resolved]


def description(intent: Any) -> str:
    resolved = coerce_intent(intent)
    if resolved is None:
        return ""
    return _DESCRIPTIONS[resolved]


def diversity_factor(intent: Any) -> float:
    resolved = coerce_intent(intent)
    return _DIVERSITY_FACTORS.get(resolved, _DEFAULT_DIVERSITY)


def max_walking_distance(intent: Any, user_preference: int | None = None) -> int:
    """Walking radius in metres; an explicit user preference wins but is capped."""
    if user_preference is not None:
        return min(user_preference, MAX_WALKING_DISTANCE)
    resolved = coerce_intent(intent)
    return _WALKING_DISTANCES.get(resolved, _DEFAULT_WALKING_DISTANCE)


def describe_intents() -> list[dict[str, Any]]:
    return [
        {
            "value": intent.value,
            "display_name": display_name(intent),
            "description": description(intent),
            "max_results": max_suggestions(intent),
            "requires_route": requires_route(intent),
        }
        for intent in SuggestionIntent
    ]
