"""Cuisine-family guard shared by the soup detector and the validator.

Both components must agree on when a soup is "cross-cultural" for a
restaurant, so the rules live here and nowhere else:

- a restaurant is strictly Asian (or strictly Western) when its cuisines
  fall in exactly one family and its text does not say "fusion";
- a soup conflicts when its family is the opposite of that strict family;
- Asian and Western soups may only be listed together when the
  restaurant's name says "fusion".
"""

import logging

from findsoup.classifiers.matching import contains_phrase, mentions_fusion, name_mentions_fusion
from findsoup.models import CuisineFamily, CuisineLabel, RestaurantSignal
from findsoup.taxonomy import Taxonomy

logger = logging.getLogger(__name__)


class FamilyProfile:
    """Cuisine-family view of one restaurant."""

    def __init__(
        self,
        signal: RestaurantSignal,
        cuisines: list[CuisineLabel],
        taxonomy: Taxonomy,
    ) -> None:
        """Build the profile.

        Args:
            signal: Restaurant being classified
            cuisines: Cuisines detected for the restaurant
            taxonomy: Tables defining the families
        """
        self.signal = signal
        self.taxonomy = taxonomy
        self.cuisines = list(cuisines)
        self.families = [
            family
            for family in (taxonomy.cuisine_family(c) for c in self.cuisines)
            if family is not None
        ]
        self.fusion = mentions_fusion(signal)
        self.fusion_in_name = name_mentions_fusion(signal)

    @property
    def is_asian(self) -> bool:
        return CuisineFamily.ASIAN in self.families

    @property
    def is_western(self) -> bool:
        return CuisineFamily.WESTERN in self.families

    @property
    def strict_family(self) -> CuisineFamily | None:
        """The restaurant's only cuisine family, unless it declares fusion."""
        if self.fusion:
            return None
        if self.is_asian and not self.is_western:
            return CuisineFamily.ASIAN
        if self.is_western and not self.is_asian:
            return CuisineFamily.WESTERN
        return None

    def conflicts(self, soup_type: str) -> bool:
        """True when a soup belongs to the family opposite to the restaurant's."""
        strict = self.strict_family
        if strict is None:
            return False
        family = self.taxonomy.soup_family(soup_type)
        return family is not None and family != strict

    def allows(self, soup_types: list[str]) -> bool:
        """True when none of the soups conflict with the restaurant."""
        return not any(self.conflicts(soup_type) for soup_type in soup_types)

    def cohere(self, soup_types: list[str]) -> list[str]:
        """Drop one family when a list mixes Asian and Western soups.

        Mixing is kept for restaurants whose name says fusion. Otherwise the
        family kept is the one of the soup named in the restaurant's name
        with the most confident cuisine, then the one of the restaurant's
        most confident cuisine, then the one of the first soup.

        Args:
            soup_types: Candidate soups in detection order

        Returns:
            Soups with at most one family represented
        """
        soup_families = {s: self.taxonomy.soup_family(s) for s in soup_types}
        present = {family for family in soup_families.values() if family is not None}

        if len(present) < 2 or self.fusion_in_name:
            return list(soup_types)

        keep = self._preferred_family(soup_types, soup_families)
        kept = [s for s in soup_types if soup_families[s] in (None, keep)]
        dropped = [s for s in soup_types if s not in kept]
        logger.debug(
            f"{self.signal.name!r}: mixed soup families, kept {keep.value}, "
            f"dropped {', '.join(dropped)}"
        )
        return kept

    def _preferred_family(
        self,
        soup_types: list[str],
        soup_families: dict[str, CuisineFamily | None],
    ) -> CuisineFamily:
        name = self.signal.name.lower()
        named = [
            soup
            for soup in (self.taxonomy.soup(s) for s in soup_types)
            if soup
            and soup_families[soup.name]
            and any(contains_phrase(name, k) for k in soup.keywords)
        ]
        if named:
            # Most confident cuisine first, catalog order breaks ties
            best = min(named, key=lambda soup: min(map(self.taxonomy.priority, soup.cuisines)))
            return soup_families[best.name]

        ranked = sorted(self.cuisines, key=self.taxonomy.priority)
        for cuisine in ranked:
            family = self.taxonomy.cuisine_family(cuisine)
            if family is not None:
                return family

        return next(family for family in soup_families.values() if family is not None)
