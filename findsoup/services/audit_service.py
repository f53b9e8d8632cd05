"""Batch audit and cleanup jobs over the restaurant directory."""

import logging
from collections import Counter
from enum import Enum

from pydantic import BaseModel, Field

from findsoup.classifiers import detect_soup_types, rank_cuisines, validate
from findsoup.models import RestaurantRecord
from findsoup.services.restaurant_store import RestaurantStore
from findsoup.taxonomy import Taxonomy, get_taxonomy

logger = logging.getLogger(__name__)


class MergeStrategy(str, Enum):
    """How re-detected soups are written back."""

    REPLACE = "replace"
    MERGE = "merge"


class AuditIssue(BaseModel):
    """A restaurant whose stored soups fail validation."""

    restaurant_id: str = Field(..., description="Restaurant identifier")
    name: str = Field(..., description="Restaurant name")
    location: str = Field(..., description="City and state")
    soup_types: list[str] = Field(default_factory=list, description="Stored soups")
    warnings: list[str] = Field(default_factory=list, description="Validation warnings")


class SoupChange(BaseModel):
    """Stored soups compared with freshly detected ones."""

    restaurant_id: str = Field(..., description="Restaurant identifier")
    name: str = Field(..., description="Restaurant name")
    old_soup_types: list[str] = Field(default_factory=list)
    new_soup_types: list[str] = Field(default_factory=list)

    @property
    def changed(self) -> bool:
        return set(self.old_soup_types) != set(self.new_soup_types)


class UpdateSummary(BaseModel):
    """Outcome of a soup update run."""

    processed: int = 0
    changed: int = 0
    errors: int = 0
    dry_run: bool = True
    changed_restaurants: list[str] = Field(default_factory=list)


class CoverageReport(BaseModel):
    """How many restaurants have a cuisine assigned."""

    total: int = 0
    with_cuisines: int = 0
    without_cuisines: int = 0

    @property
    def percentage(self) -> float:
        """Share of restaurants with cuisines, 0-100."""
        if not self.total:
            return 0.0
        return round(self.with_cuisines / self.total * 100, 1)


class AuditService:
    """Runs the classifiers over every stored restaurant.

    Write operations default to dry runs; pass ``dry_run=False`` to persist.
    """

    def __init__(self, store: RestaurantStore, taxonomy: Taxonomy | None = None) -> None:
        """Initialize the audit service.

        Args:
            store: Restaurant directory to audit
            taxonomy: Classification tables (process-wide tables if None)
        """
        self.store = store
        self.taxonomy = taxonomy if taxonomy is not None else get_taxonomy()

    def audit_assignments(self) -> list[AuditIssue]:
        """Validate the stored soups of every restaurant.

        Returns:
            One issue per restaurant with at least one warning
        """
        issues = []
        restaurants = self.store.list_restaurants()

        for record in restaurants:
            report = validate(record.to_signal(), record.soup_types, self.taxonomy)
            if report.is_valid:
                continue

            issues.append(
                AuditIssue(
                    restaurant_id=record.id,
                    name=record.name,
                    location=record.location,
                    soup_types=record.soup_types,
                    warnings=report.messages,
                )
            )
            logger.debug(f"{record.name} ({record.location}): {'; '.join(report.messages)}")

        logger.info(f"Audited {len(restaurants)} restaurants, {len(issues)} need review")
        return issues

    def _plan(self, record: RestaurantRecord) -> SoupChange:
        return SoupChange(
            restaurant_id=record.id,
            name=record.name,
            old_soup_types=record.soup_types,
            new_soup_types=detect_soup_types(record.to_signal(), taxonomy=self.taxonomy),
        )

    def plan_soup_updates(self) -> list[SoupChange]:
        """Re-detect soups and list the restaurants whose soups would change."""
        changes = [self._plan(record) for record in self.store.list_restaurants()]
        return [change for change in changes if change.changed]

    def _write(self, change: SoupChange, strategy: MergeStrategy) -> None:
        if strategy == MergeStrategy.REPLACE:
            self.store.replace_soups(change.restaurant_id, change.new_soup_types)
        else:
            self.store.merge_soups(change.restaurant_id, change.new_soup_types)

    def apply_soup_updates(
        self, strategy: MergeStrategy = MergeStrategy.REPLACE, dry_run: bool = True
    ) -> UpdateSummary:
        """Re-detect and write back soups for every restaurant.

        A failure on one restaurant is logged and counted; the run goes on.

        Args:
            strategy: REPLACE deletes then reinserts, MERGE only adds missing soups
            dry_run: Report changes without writing them

        Returns:
            UpdateSummary with counts and changed restaurant names
        """
        summary = UpdateSummary(dry_run=dry_run)
        mode = "dry run" if dry_run else strategy.value
        logger.info(f"Updating soup assignments ({mode})")

        for record in self.store.list_restaurants():
            summary.processed += 1
            try:
                change = self._plan(record)
                if not change.changed:
                    continue

                if not dry_run:
                    self._write(change, strategy)

                summary.changed += 1
                summary.changed_restaurants.append(record.name)
                logger.debug(
                    f"{record.name}: {', '.join(change.old_soup_types) or 'none'} -> "
                    f"{', '.join(change.new_soup_types)}"
                )

            except Exception as e:
                summary.errors += 1
                logger.error(f"Error updating soups for {record.name}: {e}", exc_info=True)

        logger.info(
            f"Processed {summary.processed} restaurants: {summary.changed} changed, "
            f"{summary.errors} errors"
        )
        return summary

    def fix_restaurant(
        self,
        name_fragment: str,
        strategy: MergeStrategy = MergeStrategy.REPLACE,
        dry_run: bool = True,
    ) -> SoupChange | None:
        """Re-detect and write back the soups of one restaurant.

        Args:
            name_fragment: Case-insensitive part of the restaurant name
            strategy: How to write the soups back
            dry_run: Report the change without writing it

        Returns:
            The soup change, or None if no restaurant matches

        Raises:
            ValueError: If the fragment matches more than one restaurant
        """
        matches = self.store.find_by_name(name_fragment)

        if not matches:
            logger.warning(f"No restaurant found matching: {name_fragment}")
            return None

        if len(matches) > 1:
            names = ", ".join(f"{r.name} ({r.location})" for r in matches)
            msg = f"'{name_fragment}' matches {len(matches)} restaurants: {names}"
            raise ValueError(msg)

        change = self._plan(matches[0])
        if change.changed and not dry_run:
            self._write(change, strategy)
            logger.info(f"Updated soups for {change.name}: {', '.join(change.new_soup_types)}")

        return change

    def assign_cuisines(self, limit: int = 2, dry_run: bool = True) -> Counter:
        """Rank and store cuisines for every restaurant.

        Args:
            limit: Maximum cuisines per restaurant
            dry_run: Compute the distribution without writing

        Returns:
            Counter of assigned cuisine labels
        """
        distribution: Counter = Counter()
        restaurants = self.store.list_restaurants()

        for record in restaurants:
            cuisines = [
                c.value for c in rank_cuisines(record.to_signal(), limit, self.taxonomy)
            ]
            distribution.update(cuisines)
            if not dry_run:
                self.store.set_cuisines(record.id, cuisines)

        logger.info(
            f"Assigned cuisines to {len(restaurants)} restaurants"
            f"{' (dry run)' if dry_run else ''}"
        )
        return distribution

    def soup_distribution(self) -> list[tuple[str, int]]:
        """Stored soup types by number of restaurants, most common first."""
        counts = Counter(
            soup for record in self.store.list_restaurants() for soup in set(record.soup_types)
        )
        return counts.most_common()

    def cuisine_coverage(self) -> CoverageReport:
        """Count restaurants with and without assigned cuisines."""
        restaurants = self.store.list_restaurants()
        with_cuisines = sum(1 for record in restaurants if record.cuisines)
        return CoverageReport(
            total=len(restaurants),
            with_cuisines=with_cuisines,
            without_cuisines=len(restaurants) - with_cuisines,
        )

    def restaurants_without_soups(self) -> list[RestaurantRecord]:
        """Restaurants with no soups listed."""
        return [record for record in self.store.list_restaurants() if not record.soup_types]
