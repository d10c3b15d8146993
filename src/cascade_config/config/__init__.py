"""Configuration loading utilities."""

from src.cascade_config.config.tree import ValueKind, classify, clone_tree  # noqa: F401
from src.cascade_config.config.paths import MISSING, get_path, set_path  # noqa: F401
from src.cascade_config.config.merger import ConfigMerger, extend_deep  # noqa: F401
from src.cascade_config.config.parsers import ConfigFileParser  # noqa: F401
from src.cascade_config.config.substitutor import EnvSubstitutor, substitute_deep  # noqa: F401
from src.cascade_config.config.locator import ConfigCandidate, ConfigLocator  # noqa: F401
from src.cascade_config.config.environment import (  # noqa: F401
    Capabilities,
    resolve_environment_name,
    resolve_variables,
)
from src.cascade_config.config.settings import LoaderSettings  # noqa: F401
from src.cascade_config.config.loader import ConfigLoader, LoadState  # noqa: F401
from src.cascade_config.config.facade import Config, load_config  # noqa: F401

__all__ = [
    # Value model
    "ValueKind",
    "classify",
    "clone_tree",
    # Path access
    "MISSING",
    "get_path",
    "set_path",
    # Merging
    "ConfigMerger",
    "extend_deep",
    # Parsing
    "ConfigFileParser",
    # Environment variable substitution
    "EnvSubstitutor",
    "substitute_deep",
    # Config discovery
    "ConfigCandidate",
    "ConfigLocator",
    "Capabilities",
    "resolve_environment_name",
    "resolve_variables",
    "LoaderSettings",
    # Loading
    "ConfigLoader",
    "LoadState",
    "Config",
    "load_config",
]
