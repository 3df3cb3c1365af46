"""Configuration management for pesh."""

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

OverflowPolicy = Literal["reject", "truncate"]


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="PESH_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Parser bounds
    max_commands: int = Field(default=10, ge=2, description="Maximum command segments per line")
    max_args: int = Field(default=10, ge=1, description="Maximum arguments per segment, program name included")
    overflow: OverflowPolicy = Field(default="reject", description="What to do when a bound is exceeded")

    # Read loop
    prompt: str = Field(default="{cwd}$ ", description="Prompt template, {cwd} is the working directory")

    # Logging Configuration
    log_level: str = Field(default="WARNING", description="Log level")
    log_format: Literal["text", "rich"] = Field(default="text", description="Log format")

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.upper()

    def render_prompt(self, cwd: str) -> str:
        return self.prompt.replace("{cwd}", cwd)


def get_settings(**overrides: Any) -> Settings:
    """Get application settings.

    Args:
        **overrides: Field values that take precedence over the environment

    Returns:
        Settings instance
    """
    return Settings(**overrides)


@lru_cache(maxsize=1)
def default_settings() -> Settings:
    """Settings read from the environment once per process."""
    return get_settings()
