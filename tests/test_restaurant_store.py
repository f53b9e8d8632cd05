"""Tests for the in-memory restaurant store."""

import json

import pytest

from findsoup.models import RestaurantRecord
from findsoup.services.restaurant_store import InMemoryRestaurantStore


class TestInMemoryRestaurantStore:
    """Test InMemoryRestaurantStore functionality."""

    @pytest.fixture
    def store(self):
        """Create a store with a few restaurants."""
        return InMemoryRestaurantStore(
            [
                RestaurantRecord(id="1", name="Pho 88", city="Portland", state="OR"),
                RestaurantRecord(
                    id="2", name="Joe's American Grill", soup_types=["Chicken Noodle"]
                ),
                RestaurantRecord(id="3", name="Pho Saigon"),
            ]
        )

    def test_list_sorted_by_name(self, store):
        """Test listing restaurants."""
        names = [r.name for r in store.list_restaurants()]
        assert names == ["Joe's American Grill", "Pho 88", "Pho Saigon"]
        assert len(store) == 3

    def test_get_restaurant(self, store):
        """Test lookup by id."""
        assert store.get_restaurant("1").name == "Pho 88"

    def test_get_unknown_restaurant(self, store):
        """Test that unknown ids raise KeyError."""
        with pytest.raises(KeyError):
            store.get_restaurant("missing")

    def test_find_by_name(self, store):
        """Test case-insensitive name search."""
        assert [r.id for r in store.find_by_name("PHO")] == ["1", "3"]
        assert store.find_by_name("ramen") == []

    def test_save_replaces(self, store):
        """Test that saving an existing id replaces it."""
        store.save(RestaurantRecord(id="1", name="Pho 99"))

        assert store.get_restaurant("1").name == "Pho 99"
        assert len(store) == 3

    def test_saved_record_is_copied(self, store):
        """Test that callers cannot mutate stored rows by reference."""
        record = RestaurantRecord(id="9", name="Cafe Luna")
        store.save(record)
        record.soup_types.append("Tomato")

        assert store.get_restaurant("9").soup_types == []

    def test_set_cuisines(self, store):
        """Test overwriting cuisines."""
        store.set_cuisines("1", ["vietnamese"])
        assert store.get_restaurant("1").cuisines == ["vietnamese"]

    def test_replace_soups(self, store):
        """Test delete-then-reinsert."""
        store.replace_soups("2", ["Tomato", "Tomato", "Chili"])
        assert store.get_restaurant("2").soup_types == ["Tomato", "Chili"]

    def test_merge_soups(self, store):
        """Test skip-if-exists."""
        added = store.merge_soups("2", ["Chicken Noodle", "Tomato"])

        assert added == ["Tomato"]
        assert store.get_restaurant("2").soup_types == ["Chicken Noodle", "Tomato"]

    def test_merge_soups_nothing_new(self, store):
        """Test merging soups that are all present."""
        assert store.merge_soups("2", ["Chicken Noodle"]) == []

    def test_write_unknown_restaurant(self, store):
        """Test that writes to unknown ids raise KeyError."""
        with pytest.raises(KeyError):
            store.replace_soups("missing", ["Pho"])


class TestJsonFiles:
    """Test loading and saving JSON exports."""

    def test_from_json_file(self, tmp_path):
        """Test loading a JSON array."""
        path = tmp_path / "restaurants.json"
        path.write_text(
            json.dumps([{"id": "1", "name": "Pho 88", "soup_types": ["Pho"]}]),
            encoding="utf-8",
        )

        store = InMemoryRestaurantStore.from_json_file(path)

        assert store.get_restaurant("1").soup_types == ["Pho"]

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            InMemoryRestaurantStore.from_json_file(tmp_path / "nope.json")

    def test_not_an_array(self, tmp_path):
        """Test that a JSON object is rejected."""
        path = tmp_path / "restaurants.json"
        path.write_text('{"id": "1"}', encoding="utf-8")

        with pytest.raises(ValueError, match="JSON array"):
            InMemoryRestaurantStore.from_json_file(path)

    def test_save_and_reload(self, tmp_path):
        """Test writing the store back to disk."""
        path = tmp_path / "restaurants.json"
        store = InMemoryRestaurantStore([RestaurantRecord(id="1", name="Phở Hòa")])
        store.replace_soups("1", ["Pho"])

        store.to_json_file(path)
        reloaded = InMemoryRestaurantStore.from_json_file(path)

        assert reloaded.get_restaurant("1").name == "Phở Hòa"
        assert reloaded.get_restaurant("1").soup_types == ["Pho"]
