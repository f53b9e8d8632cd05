"""Cuisine detection from restaurant names, category tags and text."""

import logging

from findsoup.classifiers.matching import (
    contains_phrase,
    cuisine_text,
    search_pattern,
)
from findsoup.models import CuisineLabel, RestaurantSignal
from findsoup.taxonomy import Taxonomy, get_taxonomy

logger = logging.getLogger(__name__)


def detect_cuisines(
    signal: RestaurantSignal, taxonomy: Taxonomy | None = None
) -> list[CuisineLabel]:
    """Infer the cuisines of a restaurant.

    Signals are tried from most to least trustworthy:

    1. category tags from the places taxonomy (e.g. ramen_restaurant),
    2. indicator phrases anywhere in the name, tags and free text,
    3. strong regex patterns on the name alone,
    4. broader name roots, only when nothing matched so far,
    5. the search query hint, only when nothing matched so far.

    Each cuisine is listed once, in the order it was first detected. No
    cuisine is guessed when nothing matches.

    Args:
        signal: Restaurant to classify
        taxonomy: Classification tables (process-wide tables if None)

    Returns:
        Detected cuisines, possibly empty
    """
    if taxonomy is None:
        taxonomy = get_taxonomy()
    table = taxonomy.cuisines
    detected: list[CuisineLabel] = []

    def add(cuisine: CuisineLabel, reason: str) -> None:
        if cuisine not in detected:
            detected.append(cuisine)
            logger.debug(f"{signal.name!r}: {cuisine.value} ({reason})")

    tags = {tag.lower() for tag in signal.category_tags}
    for cuisine, definition in table.cuisines.items():
        matched_tag = next((t for t in definition.category_tags if t.lower() in tags), None)
        if matched_tag:
            add(cuisine, f"category tag {matched_tag}")

    text = cuisine_text(signal)
    for cuisine, definition in table.cuisines.items():
        indicator = next((i for i in definition.indicators if contains_phrase(text, i)), None)
        if indicator:
            add(cuisine, f"indicator {indicator!r}")

    name = signal.name.lower()
    for cuisine, definition in table.cuisines.items():
        if cuisine in detected:
            continue
        pattern = next((p for p in definition.name_patterns if search_pattern(name, p)), None)
        if pattern:
            add(cuisine, f"name pattern {pattern!r}")

    if not detected:
        for rule in table.name_roots:
            if not any(search_pattern(name, p) for p in rule.patterns):
                continue
            if rule.requires_any and not any(contains_phrase(name, w) for w in rule.requires_any):
                continue
            add(rule.cuisine, "name root")

    if not detected and signal.search_query_hint:
        hint = signal.search_query_hint.lower()
        for query_hint in table.query_hints:
            if query_hint.cuisine and search_pattern(hint, query_hint.pattern):
                add(query_hint.cuisine, f"search query {signal.search_query_hint!r}")

    return detected


def rank_cuisines(
    signal: RestaurantSignal, limit: int = 2, taxonomy: Taxonomy | None = None
) -> list[CuisineLabel]:
    """Pick the cuisines to store for a restaurant.

    Detected cuisines are ordered by table priority (lower is more
    confident, ties keep detection order) and truncated to avoid
    over-tagging. Restaurants with no detectable cuisine get UNKNOWN.

    Args:
        signal: Restaurant to classify
        limit: Maximum number of cuisines to keep
        taxonomy: Classification tables (process-wide tables if None)

    Returns:
        Between 1 and limit cuisines
    """
    if limit < 1:
        msg = f"limit must be at least 1, got {limit}"
        raise ValueError(msg)

    if taxonomy is None:
        taxonomy = get_taxonomy()
    detected = detect_cuisines(signal, taxonomy)

    if not detected:
        return [CuisineLabel.UNKNOWN]

    return sorted(detected, key=taxonomy.priority)[:limit]
