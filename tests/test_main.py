"""Tests for the maintenance report entry point."""

import json
import sys

import pytest

import findsoup.config as config_module
import main
from findsoup.config import Config


@pytest.fixture
def restaurants_file(tmp_path, monkeypatch):
    """Export with two restaurants sharing a name fragment."""
    path = tmp_path / "restaurants.json"
    path.write_text(
        json.dumps(
            [
                {"id": "1", "name": "Pho 88", "city": "Portland", "state": "OR"},
                {"id": "2", "name": "Pho Saigon", "city": "Seattle", "state": "WA"},
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setattr(
        config_module, "config", Config(_env_file=None, restaurants_file=path)
    )
    return path


class TestRestaurantCommand:
    """Test the single-restaurant command."""

    def test_ambiguous_name_exits_cleanly(self, restaurants_file, monkeypatch, capsys):
        """Test that a fragment matching several restaurants prints a message."""
        monkeypatch.setattr(sys, "argv", ["main.py", "restaurant", "Pho"])

        with pytest.raises(SystemExit) as exc_info:
            main.main()

        output = capsys.readouterr().out
        assert exc_info.value.code == 1
        assert "matches 2 restaurants" in output
        assert "Use a longer part of the name" in output

    def test_single_match(self, restaurants_file, monkeypatch, capsys):
        """Test that a unique fragment reports the detected soups."""
        monkeypatch.setattr(sys, "argv", ["main.py", "restaurant", "Pho 88"])

        main.main()

        output = capsys.readouterr().out
        assert "Pho 88" in output
        assert "Detected: Pho" in output

    def test_no_match(self, restaurants_file, monkeypatch, capsys):
        """Test the message for an unknown restaurant."""
        monkeypatch.setattr(sys, "argv", ["main.py", "restaurant", "Golden Spoon"])

        main.main()

        assert "No restaurant found matching: Golden Spoon" in capsys.readouterr().out
