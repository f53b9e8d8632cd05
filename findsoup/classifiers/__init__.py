"""Rule-based cuisine and soup type classification."""

from findsoup.classifiers.assignment_validator import validate
from findsoup.classifiers.cuisine_detector import detect_cuisines, rank_cuisines
from findsoup.classifiers.families import FamilyProfile
from findsoup.classifiers.soup_detector import detect_soup_types
from findsoup.models import ClassificationResult, RestaurantSignal
from findsoup.taxonomy import Taxonomy, get_taxonomy


def classify(signal: RestaurantSignal, taxonomy: Taxonomy | None = None) -> ClassificationResult:
    """Detect cuisines, then the soups compatible with them."""
    if taxonomy is None:
        taxonomy = get_taxonomy()
    cuisines = detect_cuisines(signal, taxonomy)
    soup_types = detect_soup_types(signal, cuisines, taxonomy)
    return ClassificationResult(cuisines=cuisines, soup_types=soup_types)


__all__ = [
    "FamilyProfile",
    "classify",
    "detect_cuisines",
    "detect_soup_types",
    "rank_cuisines",
    "validate",
]
