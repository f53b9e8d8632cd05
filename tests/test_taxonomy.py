"""Tests for loading and validating the classification tables."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

import findsoup.taxonomy as taxonomy_module
from findsoup.models import CuisineFamily, CuisineLabel
from findsoup.taxonomy import DATA_DIR, TABLE_FILES, Taxonomy, get_taxonomy, load_taxonomy


def _bundled_tables() -> dict:
    return {
        key: json.loads((DATA_DIR / filename).read_text(encoding="utf-8"))
        for key, filename in TABLE_FILES.items()
    }


def _write_tables(directory: Path, tables: dict) -> None:
    for key, filename in TABLE_FILES.items():
        (directory / filename).write_text(json.dumps(tables[key]), encoding="utf-8")


class TestLoadTaxonomy:
    """Test loading the bundled and custom tables."""

    def test_load_bundled_tables(self):
        """Test that the bundled tables load and are consistent."""
        taxonomy = load_taxonomy()

        assert taxonomy.version.startswith("2024")
        assert CuisineLabel.VIETNAMESE in taxonomy.cuisines.cuisines
        assert taxonomy.soup("Pho") is not None
        assert taxonomy.soup("Borscht") is None

    def test_families(self):
        """Test the fixed Asian/Western partition."""
        taxonomy = load_taxonomy()

        for cuisine in ("vietnamese", "japanese", "chinese", "thai", "korean"):
            assert taxonomy.cuisine_family(CuisineLabel(cuisine)) == CuisineFamily.ASIAN
        for cuisine in ("american", "french", "italian"):
            assert taxonomy.cuisine_family(CuisineLabel(cuisine)) == CuisineFamily.WESTERN

        assert taxonomy.cuisine_family(CuisineLabel.MEXICAN) is None

    def test_soup_family(self):
        """Test soup families derived from the catalog."""
        taxonomy = load_taxonomy()

        assert taxonomy.soup_family("Ramen") == CuisineFamily.ASIAN
        assert taxonomy.soup_family("Tomato") == CuisineFamily.WESTERN
        assert taxonomy.soup_family("Tortilla") is None
        assert taxonomy.soup_family("House Special") is None
        assert taxonomy.soup_family("Not A Soup") is None

    def test_priority(self):
        """Test priorities, with unlisted labels ranking last."""
        taxonomy = load_taxonomy()

        assert taxonomy.priority(CuisineLabel.JAPANESE) < taxonomy.priority(CuisineLabel.AMERICAN)
        assert taxonomy.priority(CuisineLabel.AMERICAN) < taxonomy.priority(CuisineLabel.CAFE)
        assert taxonomy.priority(CuisineLabel.UNKNOWN) == 99

    def test_taxonomy_immutable(self):
        """Test that the taxonomy is frozen."""
        taxonomy = load_taxonomy()

        with pytest.raises((ValidationError, AttributeError)):
            taxonomy.soups = None

    def test_load_custom_directory(self, tmp_path):
        """Test loading tables from another directory."""
        tables = _bundled_tables()
        tables["soups"]["version"] = "test"
        _write_tables(tmp_path, tables)

        taxonomy = load_taxonomy(tmp_path)

        assert taxonomy.soups.version == "test"

    def test_missing_file(self, tmp_path):
        """Test that a missing table file fails loudly."""
        with pytest.raises(FileNotFoundError):
            load_taxonomy(tmp_path)

    def test_get_taxonomy_is_cached(self, monkeypatch):
        """Test that the process-wide taxonomy is loaded once."""
        monkeypatch.setattr(taxonomy_module, "taxonomy", None)

        first = get_taxonomy()
        second = get_taxonomy()

        assert first is second


class TestTableValidation:
    """Test rejection of inconsistent tables."""

    @pytest.fixture
    def tables(self):
        """Fresh copy of the bundled tables."""
        return _bundled_tables()

    def test_unknown_cuisine(self, tables):
        """Test that unknown cuisine ids are rejected."""
        tables["soups"]["soup_types"][0]["cuisines"] = ["martian"]

        with pytest.raises(ValidationError):
            Taxonomy.model_validate(tables)

    def test_duplicate_soup_names(self, tables):
        """Test that duplicate soup names are rejected."""
        tables["soups"]["soup_types"].append(dict(tables["soups"]["soup_types"][0]))

        with pytest.raises(ValidationError, match="Duplicate soup types"):
            Taxonomy.model_validate(tables)

    def test_fallback_references_unknown_soup(self, tables):
        """Test that defaults must name catalog soups."""
        tables["fallbacks"]["cuisine_defaults"]["thai"] = ["Green Curry"]

        with pytest.raises(ValidationError, match="unknown soups"):
            Taxonomy.model_validate(tables)

    def test_soup_straddling_families(self, tables):
        """Test that a soup cannot be both Asian and Western."""
        tables["soups"]["soup_types"].append(
            {"name": "Fusion Broth", "keywords": ["fusion broth"], "cuisines": ["thai", "french"]}
        )

        with pytest.raises(ValidationError, match="mixes cuisine families"):
            Taxonomy.model_validate(tables)

    def test_cuisine_in_two_families(self, tables):
        """Test that families must be disjoint."""
        tables["cuisines"]["families"]["western"].append("thai")

        with pytest.raises(ValidationError, match="more than one family"):
            Taxonomy.model_validate(tables)

    def test_invalid_pattern(self, tables):
        """Test that broken regexes are rejected at load time."""
        tables["fallbacks"]["name_pattern_defaults"][0]["pattern"] = "pho("

        with pytest.raises(ValidationError, match="Invalid pattern"):
            Taxonomy.model_validate(tables)
