"""Restaurant directory storage.

The directory itself lives in a hosted database; maintenance jobs only need
the handful of operations below, so they depend on the protocol rather than
on a database client.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

from findsoup.models import RestaurantRecord

logger = logging.getLogger(__name__)


class RestaurantStore(Protocol):
    """Operations the maintenance jobs need from the directory."""

    def list_restaurants(self) -> list[RestaurantRecord]: ...

    def get_restaurant(self, restaurant_id: str) -> RestaurantRecord: ...

    def find_by_name(self, fragment: str) -> list[RestaurantRecord]: ...

    def save(self, record: RestaurantRecord) -> None: ...

    def set_cuisines(self, restaurant_id: str, cuisines: list[str]) -> None: ...

    def replace_soups(self, restaurant_id: str, soup_types: list[str]) -> None: ...

    def merge_soups(self, restaurant_id: str, soup_types: list[str]) -> list[str]: ...


class InMemoryRestaurantStore:
    """Dictionary-backed store for tests, local runs and JSON exports."""

    def __init__(self, records: list[RestaurantRecord] | None = None) -> None:
        """Initialize the store.

        Args:
            records: Initial restaurants, later ids replace earlier ones
        """
        self._records: dict[str, RestaurantRecord] = {}
        for record in records or []:
            self.save(record)

    @classmethod
    def from_json_file(cls, path: Path | str) -> "InMemoryRestaurantStore":
        """Load a JSON array of restaurant records.

        Args:
            path: JSON export of the restaurants table

        Returns:
            Store holding the records

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a JSON array
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Restaurants file not found: {path}")

        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            msg = f"Expected a JSON array of restaurants in {path}"
            raise ValueError(msg)

        store = cls([RestaurantRecord.model_validate(row) for row in data])
        logger.info(f"Loaded {len(store)} restaurants from {path}")
        return store

    def to_json_file(self, path: Path | str) -> None:
        """Write every record back as a JSON array."""
        path = Path(path)
        rows = [record.model_dump(mode="json") for record in self.list_restaurants()]
        path.write_text(json.dumps(rows, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info(f"Saved {len(rows)} restaurants to {path}")

    def __len__(self) -> int:
        return len(self._records)

    def list_restaurants(self) -> list[RestaurantRecord]:
        """All restaurants sorted by name."""
        return sorted(self._records.values(), key=lambda r: r.name.lower())

    def get_restaurant(self, restaurant_id: str) -> RestaurantRecord:
        """Get a restaurant by id.

        Raises:
            KeyError: If no restaurant has this id
        """
        try:
            return self._records[restaurant_id]
        except KeyError:
            raise KeyError(f"Unknown restaurant id: {restaurant_id}") from None

    def find_by_name(self, fragment: str) -> list[RestaurantRecord]:
        """Restaurants whose name contains the fragment, case-insensitive."""
        needle = fragment.lower()
        return [r for r in self.list_restaurants() if needle in r.name.lower()]

    def save(self, record: RestaurantRecord) -> None:
        """Insert or replace a restaurant."""
        self._records[record.id] = record.model_copy(deep=True)

    def set_cuisines(self, restaurant_id: str, cuisines: list[str]) -> None:
        """Overwrite a restaurant's cuisines."""
        record = self.get_restaurant(restaurant_id)
        self._records[restaurant_id] = record.model_copy(update={"cuisines": list(cuisines)})
        logger.debug(f"Set cuisines for {record.name}: {', '.join(cuisines)}")

    def replace_soups(self, restaurant_id: str, soup_types: list[str]) -> None:
        """Delete every listed soup, then insert the new ones."""
        record = self.get_restaurant(restaurant_id)
        new_soups = list(dict.fromkeys(soup_types))
        self._records[restaurant_id] = record.model_copy(update={"soup_types": new_soups})
        logger.debug(f"Replaced soups for {record.name}: {', '.join(new_soups)}")

    def merge_soups(self, restaurant_id: str, soup_types: list[str]) -> list[str]:
        """Insert the soups not listed yet.

        Returns:
            Soup types actually added
        """
        record = self.get_restaurant(restaurant_id)
        added = [s for s in dict.fromkeys(soup_types) if s not in record.soup_types]
        if added:
            self._records[restaurant_id] = record.model_copy(
                update={"soup_types": [*record.soup_types, *added]}
            )
            logger.debug(f"Added soups for {record.name}: {', '.join(added)}")
        return added
