"""Maintenance report over a restaurants export.

Usage:
    python main.py audit                  # soups needing review
    python main.py distribution           # soup and cuisine coverage
    python main.py restaurant "Pho 88"    # re-detect one restaurant
    python main.py update [--apply]       # re-detect every restaurant
    python main.py cuisines [--apply]     # rank and assign cuisines
"""

import logging
import sys

from findsoup.config import get_config, setup_logging
from findsoup.services.audit_service import AuditService
from findsoup.services.restaurant_store import InMemoryRestaurantStore

logger = logging.getLogger(__name__)


def _print_audit(service: AuditService, limit: int) -> None:
    issues = service.audit_assignments()
    print(f"\n=== SOUP ASSIGNMENTS NEEDING REVIEW ({len(issues)}) ===\n")
    for issue in issues[:limit]:
        print(f"⚠️  {issue.name} ({issue.location})")
        print(f"   Soups: {', '.join(issue.soup_types)}")
        for warning in issue.warnings:
            print(f"   - {warning}")
    if len(issues) > limit:
        print(f"\n... and {len(issues) - limit} more")


def _print_distribution(service: AuditService, limit: int) -> None:
    distribution = service.soup_distribution()
    print(f"\nTop {limit} Most Common Soup Types:")
    for index, (soup_type, count) in enumerate(distribution[:limit], start=1):
        print(f"  {index:2}. {soup_type:<25} - {count} restaurants")
    print(f"\nTotal unique soup types: {len(distribution)}")
    print(f"Restaurants without soups: {len(service.restaurants_without_soups())}")

    coverage = service.cuisine_coverage()
    print(f"\nRestaurants WITH cuisine: {coverage.with_cuisines} ({coverage.percentage}%)")
    print(f"Restaurants WITHOUT cuisine: {coverage.without_cuisines}")


def main() -> None:
    config = get_config()
    setup_logging(config)

    args = sys.argv[1:]
    if not args or not config.restaurants_file:
        print(__doc__)
        print("Set RESTAURANTS_FILE to a JSON export of the restaurants table.")
        sys.exit(1)

    command, rest = args[0], args[1:]
    apply = "--apply" in rest
    store = InMemoryRestaurantStore.from_json_file(config.restaurants_file)
    service = AuditService(store)

    if command == "audit":
        _print_audit(service, config.audit_report_limit)
    elif command == "distribution":
        _print_distribution(service, config.audit_report_limit)
    elif command == "restaurant" and rest:
        try:
            change = service.fix_restaurant(rest[0], dry_run=not apply)
        except ValueError as e:
            print(f"\n{e}")
            print("Use a longer part of the name to pick one restaurant.")
            sys.exit(1)

        if change is None:
            print(f"No restaurant found matching: {rest[0]}")
        else:
            print(f"\n{change.name}")
            print(f"  Current:  {', '.join(change.old_soup_types) or 'none'}")
            print(f"  Detected: {', '.join(change.new_soup_types)}")
    elif command == "update":
        summary = service.apply_soup_updates(dry_run=not apply)
        print(f"\nProcessed: {summary.processed}")
        print(f"Changed:   {summary.changed}")
        print(f"Errors:    {summary.errors}")
    elif command == "cuisines":
        distribution = service.assign_cuisines(config.max_cuisines, dry_run=not apply)
        print("\n=== CUISINE DISTRIBUTION ===\n")
        for cuisine, count in distribution.most_common():
            print(f"{cuisine}: {count} restaurants")
    else:
        print(__doc__)
        sys.exit(1)

    if apply:
        store.to_json_file(config.restaurants_file)


if __name__ == "__main__":
    main()
