"""Data models for the FindSoupNearMe classifier."""

from findsoup.models.classification import (
    ClassificationResult,
    CuisineFamily,
    CuisineLabel,
    ValidationReport,
    ValidationWarning,
    WarningKind,
)
from findsoup.models.restaurant import RestaurantRecord, RestaurantSignal

__all__ = [
    "ClassificationResult",
    "CuisineFamily",
    "CuisineLabel",
    "RestaurantRecord",
    "RestaurantSignal",
    "ValidationReport",
    "ValidationWarning",
    "WarningKind",
]
