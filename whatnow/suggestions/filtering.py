from __future__ import annotations

import logging
from collections.abc import Iterable

from .intents import IntentPolicy
from .models import PlaceCandidate

logger = logging.getLogger(__name__)


def filter_candidates(
    candidates: list[PlaceCandidate],
    policy: IntentPolicy,
) -> list[PlaceCandidate]:
    """Keep only candidates whose category is on the policy's allow-list.

    Unrestricted policies return *candidates* unchanged. Otherwise a candidate
    is admitted when any of its comma-separated category tags equals an
    allow-list entry, ignoring case. Relative order is preserved and no
    result cap is applied here.
    """
    if not policy.has_category_restrictions:
        return candidates

    allowed = {c.lower() for c in policy.allowed_categories or ()}
    filtered = [
        place for place in candidates
        if any(tag in allowed for tag in place.category_tags)
    ]

    if len(filtered) < len(candidates):
        logger.info(
            "Category filter reduced %d candidates to %d", len(candidates), len(filtered),
        )
    return filtered


def exclude_places(
    candidates: list[PlaceCandidate],
    excluded_ids: Iterable[str],
) -> list[PlaceCandidate]:
    excluded = set(excluded_ids)
    if not excluded:
        return candidates
    return [place for place in candidates if place.id not in excluded]
