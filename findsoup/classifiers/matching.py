"""Text matching helpers shared by the classifiers."""

import re
from functools import lru_cache

from findsoup.models import RestaurantSignal


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> re.Pattern:
    """Compile a table regex, case-insensitive."""
    return re.compile(pattern, re.IGNORECASE)


@lru_cache(maxsize=2048)
def _phrase_pattern(phrase: str) -> re.Pattern:
    return re.compile(rf"(?<!\w){re.escape(phrase.lower())}(?!\w)", re.IGNORECASE)


def contains_phrase(text: str, phrase: str) -> bool:
    """Check for a phrase as a whole word or word sequence.

    "pho" matches "Pho 88" and "best pho in town" but not "Phoenix".
    """
    if not phrase:
        return False
    return _phrase_pattern(phrase).search(text) is not None


def search_pattern(text: str, pattern: str) -> bool:
    """Check a table regex against text."""
    return compile_pattern(pattern).search(text) is not None


def normalize_tag(tag: str) -> str:
    """Turn a place category tag into plain words (ramen_restaurant -> ramen restaurant)."""
    return tag.replace("_", " ").strip().lower()


def cuisine_text(signal: RestaurantSignal) -> str:
    """Name, category tags and free text, lower-cased."""
    parts = [signal.name, *(normalize_tag(tag) for tag in signal.category_tags), signal.free_text]
    return " ".join(part for part in parts if part).lower()


def soup_text(signal: RestaurantSignal) -> str:
    """Name, free text and search hint, lower-cased."""
    parts = [signal.name, signal.free_text, signal.search_query_hint or ""]
    return " ".join(part for part in parts if part).lower()


def mentions_fusion(signal: RestaurantSignal) -> bool:
    """True when the restaurant's text calls itself fusion."""
    return contains_phrase(soup_text(signal), "fusion")


def name_mentions_fusion(signal: RestaurantSignal) -> bool:
    """True when the restaurant's name contains "fusion"."""
    return "fusion" in signal.name.lower()
