"""Advisory checks for soup assignments already stored for a restaurant."""

import logging
from collections.abc import Sequence

from findsoup.classifiers.cuisine_detector import detect_cuisines
from findsoup.classifiers.families import FamilyProfile
from findsoup.models import (
    CuisineFamily,
    RestaurantSignal,
    ValidationReport,
    ValidationWarning,
    WarningKind,
)
from findsoup.taxonomy import Taxonomy, get_taxonomy

logger = logging.getLogger(__name__)

ASIAN_IN_WESTERN = "Asian soup(s) assigned to Western restaurant"
WESTERN_IN_ASIAN = "Western soup(s) assigned to Asian restaurant"
MIXED_WITHOUT_FUSION = "Mixed Asian and Western soups without fusion indicator"


def validate(
    signal: RestaurantSignal,
    assigned_soup_types: Sequence[str],
    taxonomy: Taxonomy | None = None,
) -> ValidationReport:
    """Check a restaurant's soups against its detected cuisines.

    Warnings never block a write; they only flag rows for human review.

    Args:
        signal: Restaurant the soups are assigned to
        assigned_soup_types: Soup type names currently listed
        taxonomy: Classification tables (process-wide tables if None)

    Returns:
        ValidationReport, valid when no warning was raised
    """
    if taxonomy is None:
        taxonomy = get_taxonomy()

    profile = FamilyProfile(signal, detect_cuisines(signal, taxonomy), taxonomy)
    soup_families = {taxonomy.soup_family(soup) for soup in assigned_soup_types}
    has_asian_soup = CuisineFamily.ASIAN in soup_families
    has_western_soup = CuisineFamily.WESTERN in soup_families

    warnings: list[ValidationWarning] = []

    if has_asian_soup and profile.strict_family == CuisineFamily.WESTERN:
        warnings.append(
            ValidationWarning(
                kind=WarningKind.ASIAN_SOUP_IN_WESTERN_RESTAURANT, message=ASIAN_IN_WESTERN
            )
        )

    if has_western_soup and profile.strict_family == CuisineFamily.ASIAN:
        warnings.append(
            ValidationWarning(
                kind=WarningKind.WESTERN_SOUP_IN_ASIAN_RESTAURANT, message=WESTERN_IN_ASIAN
            )
        )

    if has_asian_soup and has_western_soup and not profile.fusion_in_name:
        warnings.append(
            ValidationWarning(
                kind=WarningKind.MIXED_FAMILIES_WITHOUT_FUSION, message=MIXED_WITHOUT_FUSION
            )
        )

    if warnings:
        logger.debug(f"{signal.name!r}: {len(warnings)} assignment warning(s)")

    return ValidationReport(is_valid=not warnings, warnings=warnings)
