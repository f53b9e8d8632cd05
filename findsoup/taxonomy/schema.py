"""Pydantic models for the static classification tables."""

import re

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from findsoup.models import CuisineFamily, CuisineLabel


def _check_patterns(patterns: list[str]) -> list[str]:
    for pattern in patterns:
        try:
            re.compile(pattern)
        except re.error as e:
            raise ValueError(f"Invalid pattern {pattern!r}: {e}") from e
    return patterns


class CuisineDefinition(BaseModel):
    """Detection signals for one cuisine."""

    model_config = ConfigDict(frozen=True)

    priority: int = Field(..., ge=1, description="Lower is more confident")
    category_tags: list[str] = Field(default_factory=list)
    indicators: list[str] = Field(
        default_factory=list, description="Phrases searched in the full text"
    )
    name_patterns: list[str] = Field(
        default_factory=list, description="High-specificity regexes applied to the name"
    )

    @field_validator("name_patterns")
    @classmethod
    def validate_patterns(cls, value: list[str]) -> list[str]:
        return _check_patterns(value)


class NameRootRule(BaseModel):
    """Low-confidence name root, optionally paired with a business suffix word."""

    model_config = ConfigDict(frozen=True)

    cuisine: CuisineLabel
    patterns: list[str] = Field(..., min_length=1)
    requires_any: list[str] = Field(default_factory=list)

    @field_validator("patterns")
    @classmethod
    def validate_patterns(cls, value: list[str]) -> list[str]:
        return _check_patterns(value)


class QueryHint(BaseModel):
    """Search-query pattern that may imply a cuisine."""

    model_config = ConfigDict(frozen=True)

    pattern: str
    cuisine: CuisineLabel | None = None

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, value: str) -> str:
        return _check_patterns([value])[0]


class CuisineTable(BaseModel):
    """Cuisine families and detection signals."""

    model_config = ConfigDict(frozen=True)

    version: str
    families: dict[CuisineFamily, list[CuisineLabel]]
    cuisines: dict[CuisineLabel, CuisineDefinition]
    name_roots: list[NameRootRule] = Field(default_factory=list)
    query_hints: list[QueryHint] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_families_disjoint(self) -> "CuisineTable":
        seen: set[CuisineLabel] = set()
        for members in self.families.values():
            overlap = seen.intersection(members)
            if overlap:
                names = ", ".join(sorted(c.value for c in overlap))
                raise ValueError(f"Cuisines in more than one family: {names}")
            seen.update(members)
        return self


class SoupTypeDefinition(BaseModel):
    """Catalog entry for a soup type."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    keywords: list[str] = Field(default_factory=list)
    cuisines: list[CuisineLabel] = Field(
        default_factory=list, description="Compatible cuisines, empty means universal"
    )
    description: str = ""
    popularity_tier: int = Field(default=3, ge=1, le=3)


class SoupCatalog(BaseModel):
    """All known soup types."""

    model_config = ConfigDict(frozen=True)

    version: str
    soup_types: list[SoupTypeDefinition]

    @model_validator(mode="after")
    def check_names_unique(self) -> "SoupCatalog":
        names = [soup.name for soup in self.soup_types]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate soup types: {', '.join(duplicates)}")
        return self


class PatternRule(BaseModel):
    """Regex over the restaurant name mapped to default soups."""

    model_config = ConfigDict(frozen=True)

    pattern: str
    soup_types: list[str] = Field(..., min_length=1)

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, value: str) -> str:
        return _check_patterns([value])[0]


class CuisineDefault(BaseModel):
    """Default soups for a cuisine."""

    model_config = ConfigDict(frozen=True)

    cuisine: CuisineLabel
    soup_types: list[str] = Field(..., min_length=1)


class FallbackTable(BaseModel):
    """Default soups used when no keyword evidence exists."""

    model_config = ConfigDict(frozen=True)

    version: str
    cuisine_defaults: dict[CuisineLabel, list[str]] = Field(default_factory=dict)
    name_pattern_defaults: list[PatternRule] = Field(default_factory=list)
    generic_noun_pattern: str = r"\b(soup|broth|bowl)\b"
    generic_noun_defaults: list[CuisineDefault] = Field(default_factory=list)
    generic_noun_fallback: list[str] = Field(default_factory=lambda: ["House Special"])
    last_resort: list[PatternRule] = Field(default_factory=list)
    last_resort_fallback: list[str] = Field(
        default_factory=lambda: ["House Special"], min_length=1
    )

    @field_validator("generic_noun_pattern")
    @classmethod
    def validate_pattern(cls, value: str) -> str:
        return _check_patterns([value])[0]

    def referenced_soups(self) -> set[str]:
        """Every soup name the fallback tiers can emit."""
        names = set(self.generic_noun_fallback) | set(self.last_resort_fallback)
        for soups in self.cuisine_defaults.values():
            names.update(soups)
        for rule in [*self.name_pattern_defaults, *self.last_resort]:
            names.update(rule.soup_types)
        for default in self.generic_noun_defaults:
            names.update(default.soup_types)
        return names


class Taxonomy(BaseModel):
    """The complete, immutable set of classification tables."""

    model_config = ConfigDict(frozen=True)

    cuisines: CuisineTable
    soups: SoupCatalog
    fallbacks: FallbackTable

    _soup_index: dict[str, SoupTypeDefinition] = PrivateAttr(default_factory=dict)
    _cuisine_family: dict[CuisineLabel, CuisineFamily] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def check_tables_consistent(self) -> "Taxonomy":
        known = {soup.name for soup in self.soups.soup_types}
        missing = sorted(self.fallbacks.referenced_soups() - known)
        if missing:
            raise ValueError(f"Fallback tables reference unknown soups: {', '.join(missing)}")

        family_of = {
            cuisine: family
            for family, members in self.cuisines.families.items()
            for cuisine in members
        }
        for soup in self.soups.soup_types:
            families = {family_of.get(cuisine) for cuisine in soup.cuisines}
            if len(families) > 1 and families & set(CuisineFamily):
                raise ValueError(
                    f"Soup type {soup.name!r} mixes cuisine families: "
                    f"{', '.join(c.value for c in soup.cuisines)}"
                )
        return self

    def model_post_init(self, __context) -> None:
        self._soup_index = {soup.name: soup for soup in self.soups.soup_types}
        self._cuisine_family = {
            cuisine: family
            for family, members in self.cuisines.families.items()
            for cuisine in members
        }

    @property
    def version(self) -> str:
        """Combined version string of the three tables."""
        return "/".join(
            (self.cuisines.version, self.soups.version, self.fallbacks.version)
        )

    def soup(self, name: str) -> SoupTypeDefinition | None:
        """Look up a catalog entry by soup name."""
        return self._soup_index.get(name)

    def cuisine_family(self, cuisine: CuisineLabel) -> CuisineFamily | None:
        """Family of a cuisine, or None for cuisines outside both families."""
        return self._cuisine_family.get(cuisine)

    def soup_family(self, name: str) -> CuisineFamily | None:
        """Family of a soup type, derived from its compatible cuisines."""
        soup = self._soup_index.get(name)
        if soup is None:
            return None
        for cuisine in soup.cuisines:
            family = self._cuisine_family.get(cuisine)
            if family is not None:
                return family
        return None

    def priority(self, cuisine: CuisineLabel) -> int:
        """Detection priority of a cuisine; unlisted cuisines rank last."""
        definition = self.cuisines.cuisines.get(cuisine)
        return definition.priority if definition else 99
