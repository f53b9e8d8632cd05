"""Configuration management for FindSoupNearMe using Pydantic."""

import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server Configuration
    server_host: str = Field(default="0.0.0.0", description="Server host")
    server_port: int = Field(default=8080, description="Server port")
    server_url: str = Field(
        default="http://localhost:8080",
        description="Server URL for CLI to connect to API",
    )

    # Data Configuration
    taxonomy_dir: Path | None = Field(
        None, description="Directory overriding the bundled classification tables"
    )
    restaurants_file: Path | None = Field(
        None, description="JSON file of restaurant records loaded into the store"
    )

    # Classification Configuration
    max_cuisines: int = Field(
        default=2, gt=0, description="Cuisines kept when assigning to a restaurant"
    )
    audit_report_limit: int = Field(
        default=20, gt=0, description="Issues printed in an audit summary"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")

    def model_post_init(self, __context) -> None:
        """Validate configuration after initialization."""
        if self.taxonomy_dir and not self.taxonomy_dir.is_dir():
            logger.warning(
                f"TAXONOMY_DIR {self.taxonomy_dir} does not exist - "
                "loading classification tables will fail"
            )

        if self.restaurants_file and not self.restaurants_file.exists():
            logger.warning(
                f"RESTAURANTS_FILE {self.restaurants_file} not found - "
                "the server starts with an empty store and reports cannot run"
            )


# Global config instance
config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global config
    if config is None:
        config = Config()
    return config


def setup_logging(cfg: Config | None = None) -> None:
    """Configure logging for the application."""
    if cfg is None:
        cfg = get_config()

    log_level = getattr(logging, cfg.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from external libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
