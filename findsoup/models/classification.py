"""Data models for classification results and validation reports."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CuisineLabel(str, Enum):
    """Cuisines a restaurant can be classified into."""

    VIETNAMESE = "vietnamese"
    JAPANESE = "japanese"
    CHINESE = "chinese"
    THAI = "thai"
    KOREAN = "korean"
    AMERICAN = "american"
    ITALIAN = "italian"
    FRENCH = "french"
    MEXICAN = "mexican"
    MEDITERRANEAN = "mediterranean"
    INDIAN = "indian"
    JEWISH = "jewish"
    CAJUN = "cajun"
    ASIAN_FUSION = "asian_fusion"
    COMFORT_FOOD = "comfort_food"
    CAFE = "cafe"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        """Human readable label, e.g. "Asian Fusion"."""
        return self.value.replace("_", " ").title()


class CuisineFamily(str, Enum):
    """Cuisine families used by the cross-contamination guard."""

    ASIAN = "asian"
    WESTERN = "western"


class ClassificationResult(BaseModel):
    """Cuisines and soup types inferred for one restaurant."""

    model_config = ConfigDict(frozen=True)

    cuisines: list[CuisineLabel] = Field(
        default_factory=list, description="Detected cuisines, highest confidence first"
    )
    soup_types: list[str] = Field(
        default_factory=list, description="Soup type names, no duplicates"
    )


class WarningKind(str, Enum):
    """Kinds of inconsistent soup assignments."""

    ASIAN_SOUP_IN_WESTERN_RESTAURANT = "asian_soup_in_western_restaurant"
    WESTERN_SOUP_IN_ASIAN_RESTAURANT = "western_soup_in_asian_restaurant"
    MIXED_FAMILIES_WITHOUT_FUSION = "mixed_families_without_fusion"


class ValidationWarning(BaseModel):
    """Advisory finding about a soup assignment."""

    model_config = ConfigDict(frozen=True)

    kind: WarningKind = Field(..., description="Warning kind")
    message: str = Field(..., description="Message for human review")


class ValidationReport(BaseModel):
    """Result of validating a restaurant's soup assignment."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool = Field(..., description="True when there are no warnings")
    warnings: list[ValidationWarning] = Field(default_factory=list)

    @property
    def messages(self) -> list[str]:
        """Warning messages in the order they were raised."""
        return [warning.message for warning in self.warnings]
