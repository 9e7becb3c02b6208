"""
Runtime settings for the aggregator process itself.

These come from the environment (or a local .env file) and only steer the
command line front end and logging. The aggregator configuration proper
lives in the TOML document handled by aggregator.core.config.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = "aggregator.toml"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="AGGREGATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    env: str = Field(default="local", description="Environment: local/cloud")
    log_level: str = Field(default="INFO")
    logging_config: Optional[str] = Field(
        default=None, description="Path to a logging.yaml dictConfig file"
    )
    config_path: str = Field(default=DEFAULT_CONFIG_PATH)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v

    @property
    def is_local(self) -> bool:
        return self.env == "local"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
