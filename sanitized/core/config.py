"""
Library configuration from environment variables.
All settings use the SANITIZED_ prefix (e.g. SANITIZED_PRE_VALIDATE_ON_PATCH).
"""
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Sanitizer settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SANITIZED_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service configuration
    service_env: Literal["dev", "staging", "prod"] = Field(
        default="dev",
        description="Environment; controls log verbosity"
    )

    # Pipeline policy
    pre_validate_on_patch: bool = Field(
        default=False,
        description=(
            "Run the record's pre_validate hook on the merged mapping during patch. "
            "False = only construction and post_validate run on patch."
        )
    )
    construction_error_message: str = Field(
        default="Bad request",
        min_length=1,
        description="Client-facing message when a record type does not describe construction errors"
    )

    # Logging
    log_dropped_keys: bool = Field(
        default=True,
        description="Log names (never values) of keys stripped by permit at debug level"
    )

    @field_validator("construction_error_message", mode="before")
    @classmethod
    def strip_construction_error_message(cls, v: str) -> str:
        """Reject whitespace-only messages."""
        if isinstance(v, str):
            v = v.strip()
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
