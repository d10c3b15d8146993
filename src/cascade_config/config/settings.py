"""Settings for the configuration loader itself."""
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.cascade_config.config.environment import DEFAULT_ENV_NAME_VARIABLES, DEFAULT_ENVIRONMENT
from src.cascade_config.config.locator import DEFAULT_EXTENSIONS, SUBSTITUTION_FILE_STEM
from src.cascade_config.config.parsers import supported_formats


class LoaderSettings(BaseSettings):
    """Loader tunables.

    Settings are loaded from ``CASCADE_CONFIG_*`` environment variables with
    defaults matching the standard ``config/`` layout.
    """

    model_config = SettingsConfigDict(
        env_prefix="CASCADE_CONFIG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config_dir: str = Field(
        default="config",
        description="Directory holding the configuration files"
    )
    extensions: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTENSIONS),
        description="File extensions tried for each base name, in order"
    )
    env_name_variables: List[str] = Field(
        default_factory=lambda: list(DEFAULT_ENV_NAME_VARIABLES),
        description="Variables naming the active environment, in priority order"
    )
    default_environment: str = Field(
        default=DEFAULT_ENVIRONMENT,
        description="Environment used when no variable names one"
    )
    substitution_file_stem: str = Field(
        default=SUBSTITUTION_FILE_STEM,
        description="Base name of the environment substitution map file"
    )

    @field_validator("extensions")
    @classmethod
    def validate_extensions(cls, v: List[str]) -> List[str]:
        """Only extensions with a registered parser are allowed."""
        unknown = [ext for ext in v if ext not in supported_formats()]
        if unknown:
            raise ValueError(f"Unsupported config extensions: {', '.join(unknown)}")
        if not v:
            raise ValueError("extensions must not be empty")
        return v

    @field_validator("default_environment")
    @classmethod
    def validate_default_environment(cls, v: str) -> str:
        """Default environment must be a non-empty name."""
        if not v:
            raise ValueError("default_environment must not be empty")
        return v
