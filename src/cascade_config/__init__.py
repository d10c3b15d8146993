"""Layered configuration loading with environment substitution."""

from src.cascade_config.config import (  # noqa: F401
    Capabilities,
    Config,
    ConfigLoader,
    LoaderSettings,
    load_config,
)
from src.cascade_config.exceptions import (  # noqa: F401
    CascadeConfigError,
    IllegalSubstitutionLeafError,
    PropertyNotDefinedError,
    SubstitutionParseError,
)

__all__ = [
    "Capabilities",
    "Config",
    "ConfigLoader",
    "LoaderSettings",
    "load_config",
    "CascadeConfigError",
    "IllegalSubstitutionLeafError",
    "PropertyNotDefinedError",
    "SubstitutionParseError",
]
