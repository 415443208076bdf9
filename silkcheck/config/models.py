"""
Pydantic-based configuration models for silkcheck.

Configuration is read from the environment (and an optional .env file) using
Pydantic BaseSettings, so the catalog location and logging behaviour can be
changed without touching code.
"""

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from silkcheck.structured_logging.enhanced_logging_config import get_logger
from silkcheck.structured_logging.logging_utilities import VALID_ENVIRONMENTS, detect_environment

logger = get_logger(__name__)

BUNDLED_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "catalog"


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    environment: str = Field(default_factory=detect_environment, description="Logging environment")
    level: str = Field(default="INFO", description="Log level")
    disable_logging: bool = Field(default=False, description="Disable console logging")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate logging environment."""
        if v not in VALID_ENVIRONMENTS:
            logger.error("Invalid logging environment", environment=v, valid_environments=VALID_ENVIRONMENTS)
            raise ValueError(f"Environment must be one of {VALID_ENVIRONMENTS}, got '{v}'")
        return v

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}, got '{v}'")
        return v_upper

    model_config = {"env_prefix": "LOGGING_", "case_sensitive": False, "extra": "ignore"}

    def to_dict(self) -> dict[str, Any]:
        """Convert to the dict format expected by setup_logging."""
        return {
            "environment": self.environment,
            "level": self.level,
            "disable_logging": self.disable_logging,
        }


class CatalogConfig(BaseSettings):
    """Catalog source configuration."""

    path: Path = Field(default=BUNDLED_CATALOG_PATH, description="Directory holding catalog JSON files")
    strict: bool = Field(default=False, description="Raise on the first invalid catalog entry")

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: Path) -> Path:
        """Reject an empty path; existence is checked when the catalog is loaded."""
        if not str(v).strip():
            raise ValueError("Catalog path cannot be empty")
        return v

    model_config = {"env_prefix": "CATALOG_", "case_sensitive": False, "extra": "ignore"}


class AppConfig(BaseSettings):
    """
    Composite application configuration.

    Aggregates all other configs. Access via the get_config() function.
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "case_sensitive": False, "extra": "ignore"}

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary, as consumed by setup_logging."""
        return {
            "logging": self.logging.to_dict(),
            "catalog": {
                "path": str(self.catalog.path),
                "strict": self.catalog.strict,
            },
        }
