"""Custom exceptions for the configuration loader."""

from src.cascade_config.exceptions.base import CascadeConfigError

from src.cascade_config.exceptions.config import (
    ConfigError,
    ConfigPermissionError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigMergeError,
    SubstitutionParseError,
    IllegalSubstitutionLeafError,
    PropertyNotDefinedError,
)

__all__ = [
    # Base exception
    "CascadeConfigError",
    # Configuration exceptions
    "ConfigError",
    "ConfigPermissionError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigMergeError",
    # Substitution exceptions
    "SubstitutionParseError",
    "IllegalSubstitutionLeafError",
    # Query exceptions
    "PropertyNotDefinedError",
]
