"""Restaurant data models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RestaurantSignal(BaseModel):
    """Read-only projection of a restaurant used as classifier input."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Restaurant display name")
    category_tags: list[str] = Field(
        default_factory=list,
        description="Place category tags, e.g. vietnamese_restaurant",
    )
    free_text: str = Field(
        default="", description="Description, editorial summary and review excerpts"
    )
    search_query_hint: str | None = Field(
        None, description="Search query that surfaced the restaurant"
    )

    @field_validator("name", "free_text", mode="before")
    @classmethod
    def _coalesce_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("category_tags", mode="before")
    @classmethod
    def _coalesce_tags(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [tag for tag in value if tag]
        return value

    @classmethod
    def from_place_result(
        cls, result: dict[str, Any], search_query: str | None = None
    ) -> "RestaurantSignal":
        """Build a signal from a places-search result.

        Both camelCase (``editorialSummary``) and snake_case
        (``editorial_summary``) payloads are accepted.

        Args:
            result: Place result as returned by the places API
            search_query: Query that returned this result, if any

        Returns:
            RestaurantSignal for the result
        """
        summary = result.get("editorialSummary") or result.get("editorial_summary") or {}
        texts = [result.get("description") or "", summary.get("overview") or ""]

        for review in result.get("reviews") or []:
            texts.append(review.get("text") or "")
        for key in ("positiveReview", "negativeReview"):
            review = result.get(key) or {}
            texts.append(review.get("text") or "")

        return cls(
            name=result.get("name"),
            category_tags=result.get("types"),
            free_text=" ".join(text for text in texts if text),
            search_query_hint=search_query or None,
        )


class RestaurantRecord(BaseModel):
    """A restaurant row as persisted in the directory store."""

    id: str = Field(..., description="Restaurant identifier")
    name: str = Field(..., description="Restaurant name")
    city: str | None = Field(None, description="City")
    state: str | None = Field(None, description="State code")
    description: str | None = Field(None, description="Restaurant description")
    category_tags: list[str] = Field(
        default_factory=list, description="Place category tags"
    )
    cuisines: list[str] = Field(default_factory=list, description="Assigned cuisines")
    soup_types: list[str] = Field(
        default_factory=list, description="Soup types currently listed"
    )

    @property
    def location(self) -> str:
        """City and state for reports."""
        return ", ".join(part for part in (self.city, self.state) if part) or "unknown"

    def to_signal(self) -> RestaurantSignal:
        """Project the stored row onto a classifier signal."""
        return RestaurantSignal(
            name=self.name,
            category_tags=self.category_tags,
            free_text=self.description,
        )
