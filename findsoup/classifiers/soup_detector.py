"""Soup type detection with cuisine-aware keyword matching and tiered defaults."""

import logging
from collections.abc import Callable, Sequence

from findsoup.classifiers.cuisine_detector import detect_cuisines
from findsoup.classifiers.families import FamilyProfile
from findsoup.classifiers.matching import contains_phrase, search_pattern, soup_text
from findsoup.models import CuisineLabel, RestaurantSignal
from findsoup.taxonomy import SoupTypeDefinition, Taxonomy, get_taxonomy

logger = logging.getLogger(__name__)


def _extend_unique(soups: list[str], new_soups: Sequence[str]) -> None:
    for soup in new_soups:
        if soup not in soups:
            soups.append(soup)


def _is_compatible(soup: SoupTypeDefinition, profile: FamilyProfile) -> bool:
    if not soup.cuisines or not profile.cuisines:
        return True

    # Cross-cultural contamination guard
    if profile.conflicts(soup.name):
        return False

    return bool(set(soup.cuisines) & set(profile.cuisines)) or profile.fusion


def _match_keywords(
    signal: RestaurantSignal, profile: FamilyProfile, taxonomy: Taxonomy
) -> list[str]:
    text = soup_text(signal)
    soups: list[str] = []

    for soup in taxonomy.soups.soup_types:
        keyword = next((k for k in soup.keywords if contains_phrase(text, k)), None)
        if keyword is None:
            continue

        if _is_compatible(soup, profile):
            _extend_unique(soups, [soup.name])
            logger.debug(f"{signal.name!r}: found {soup.name} (keyword {keyword!r})")
        else:
            logger.debug(
                f"{signal.name!r}: blocked {soup.name} (keyword {keyword!r}, cuisine mismatch)"
            )

    return profile.cohere(soups)


def _cuisine_defaults(
    signal: RestaurantSignal, profile: FamilyProfile, taxonomy: Taxonomy
) -> list[str]:
    soups: list[str] = []

    for cuisine in profile.cuisines:
        defaults = taxonomy.fallbacks.cuisine_defaults.get(cuisine)
        if defaults and profile.allows(defaults):
            _extend_unique(soups, defaults)

    return profile.cohere(soups)


def _name_pattern_defaults(
    signal: RestaurantSignal, profile: FamilyProfile, taxonomy: Taxonomy
) -> list[str]:
    soups: list[str] = []

    for rule in taxonomy.fallbacks.name_pattern_defaults:
        if search_pattern(signal.name, rule.pattern) and profile.allows(rule.soup_types):
            _extend_unique(soups, rule.soup_types)

    return profile.cohere(soups)


def _generic_noun_defaults(
    signal: RestaurantSignal, profile: FamilyProfile, taxonomy: Taxonomy
) -> list[str]:
    fallbacks = taxonomy.fallbacks
    if not search_pattern(signal.name, fallbacks.generic_noun_pattern):
        return []

    for default in fallbacks.generic_noun_defaults:
        if default.cuisine in profile.cuisines and profile.allows(default.soup_types):
            return list(default.soup_types)

    if profile.allows(fallbacks.generic_noun_fallback):
        return list(fallbacks.generic_noun_fallback)
    return []


def _last_resort(
    signal: RestaurantSignal, profile: FamilyProfile, taxonomy: Taxonomy
) -> list[str]:
    fallbacks = taxonomy.fallbacks

    for rule in fallbacks.last_resort:
        if search_pattern(signal.name, rule.pattern) and profile.allows(rule.soup_types):
            return list(rule.soup_types)

    return list(fallbacks.last_resort_fallback)


# Each tier only runs when every earlier tier came back empty.
TIERS: list[tuple[str, Callable[[RestaurantSignal, FamilyProfile, Taxonomy], list[str]]]] = [
    ("keyword match", _match_keywords),
    ("cuisine default", _cuisine_defaults),
    ("name pattern", _name_pattern_defaults),
    ("generic noun", _generic_noun_defaults),
    ("last resort", _last_resort),
]


def detect_soup_types(
    signal: RestaurantSignal,
    cuisines: Sequence[CuisineLabel] | None = None,
    taxonomy: Taxonomy | None = None,
) -> list[str]:
    """Infer the soup types a restaurant likely serves.

    Keyword evidence is used first, filtered by cuisine compatibility.
    When no keyword matches, progressively weaker defaults are applied
    (cuisine defaults, name patterns, generic soup nouns, last resort), so
    the result is never empty.

    Args:
        signal: Restaurant to classify
        cuisines: Cuisines from detect_cuisines (detected here if None)
        taxonomy: Classification tables (process-wide tables if None)

    Returns:
        Soup type names without duplicates
    """
    if taxonomy is None:
        taxonomy = get_taxonomy()
    if cuisines is None:
        cuisines = detect_cuisines(signal, taxonomy)

    profile = FamilyProfile(signal, list(cuisines), taxonomy)

    for tier_name, tier in TIERS:
        soups = tier(signal, profile, taxonomy)
        if soups:
            logger.debug(f"{signal.name!r}: {tier_name} -> {', '.join(soups)}")
            return soups

    return []
