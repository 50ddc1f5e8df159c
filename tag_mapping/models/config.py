# =============================================================================
# Configuration Models Module
# =============================================================================
# Provides the Pydantic Settings model for the mapping compiler:
# - MappingSettings: Mapping file location and log level
# =============================================================================

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["MappingSettings", "get_settings"]


class MappingSettings(BaseSettings):
    """
    Configuration for the mapping compiler.

    Maps environment variables:
    - TAG_MAPPING_FILE → mapping_file
    - TAG_MAPPING_LOG_LEVEL → log_level

    Attributes:
        mapping_file: Default mapping document path (default: None)
        log_level: Log level used by the command-line tools (default: "INFO")
    """

    mapping_file: Path | None = Field(
        None, validation_alias="TAG_MAPPING_FILE", description="Mapping document path"
    )
    log_level: str = Field(
        "INFO", validation_alias="TAG_MAPPING_LOG_LEVEL", description="Log level for scripts"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore unrelated env vars from shared .env files
    )


@lru_cache
def get_settings() -> MappingSettings:
    """Get cached settings instance."""
    return MappingSettings()
