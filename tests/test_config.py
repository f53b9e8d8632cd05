"""Tests for configuration and logging setup."""

import logging

import pytest
from pydantic import ValidationError

import findsoup.config as config_module
from findsoup.config import Config, get_config, setup_logging


class TestConfig:
    """Test Config loading."""

    def test_defaults(self, monkeypatch):
        """Test default values."""
        monkeypatch.delenv("MAX_CUISINES", raising=False)
        cfg = Config(_env_file=None)

        assert cfg.server_port == 8080
        assert cfg.max_cuisines == 2
        assert cfg.audit_report_limit == 20
        assert cfg.taxonomy_dir is None

    def test_environment_override(self, monkeypatch, tmp_path):
        """Test reading settings from environment variables."""
        monkeypatch.setenv("SERVER_PORT", "9000")
        monkeypatch.setenv("TAXONOMY_DIR", str(tmp_path))

        cfg = Config(_env_file=None)

        assert cfg.server_port == 9000
        assert cfg.taxonomy_dir == tmp_path

    def test_invalid_max_cuisines(self):
        """Test that at least one cuisine must be kept."""
        with pytest.raises(ValidationError):
            Config(_env_file=None, max_cuisines=0)

    def test_missing_paths_warn(self, tmp_path, caplog):
        """Test warnings for configured paths that do not exist."""
        with caplog.at_level(logging.WARNING, logger="findsoup.config"):
            Config(_env_file=None, restaurants_file=tmp_path / "missing.json")

        assert "not found" in caplog.text
        assert "empty store" in caplog.text

    def test_missing_taxonomy_dir_warns(self, tmp_path, caplog):
        """Test that a missing tables directory is reported as fatal to loading."""
        with caplog.at_level(logging.WARNING, logger="findsoup.config"):
            Config(_env_file=None, taxonomy_dir=tmp_path / "tables")

        assert "does not exist" in caplog.text
        assert "loading classification tables will fail" in caplog.text
        assert "bundled" not in caplog.text


    def test_get_config_singleton(self, monkeypatch):
        """Test that get_config returns one shared instance."""
        monkeypatch.setattr(config_module, "config", None)

        assert get_config() is get_config()


class TestSetupLogging:
    """Test logging configuration."""

    def test_quiets_http_libraries(self):
        """Test that noisy libraries are raised to WARNING."""
        setup_logging(Config(_env_file=None, log_level="DEBUG"))

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("uvicorn.access").level == logging.WARNING
