"""Environment-name discovery and variable sources."""
import logging
import os
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Mapping, Optional, Sequence


logger = logging.getLogger(__name__)

DEFAULT_ENV_NAME_VARIABLES = ("NODE_CONFIG_ENV", "NODE_ENV")
DEFAULT_ENVIRONMENT = "development"

READ_CONFIG = "read:config"
READ_ENV = "read:env"


@dataclass(frozen=True)
class Capabilities:
    """What the loader is allowed to touch.

    Resolved by the embedding application before loading. ``request`` is an
    optional async callback asked once for a denied capability (e.g. to prompt
    the user); it returns True when the capability is granted.

    Args:
        can_read_config: Config directory may be read
        can_read_env: Process environment may be read
        request: Callback taking a capability name ("read:config")
    """
    can_read_config: bool = True
    can_read_env: bool = True
    request: Optional[Callable[[str], Awaitable[bool]]] = None

    @classmethod
    def denied(cls) -> "Capabilities":
        """Capabilities with every permission refused."""
        return cls(can_read_config=False, can_read_env=False)


def resolve_environment_name(
    overrides: Optional[Mapping[str, str]] = None,
    capabilities: Optional[Capabilities] = None,
    env_name_variables: Sequence[str] = DEFAULT_ENV_NAME_VARIABLES,
    default: str = DEFAULT_ENVIRONMENT,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Determine the active environment name.

    Each candidate variable is checked in the override mapping first, then in
    the process environment; the first non-empty value wins.

    Args:
        overrides: Construction-time override mapping
        capabilities: Whether the process environment may be read
        env_name_variables: Variable names, in priority order
        default: Fallback environment name
        environ: Process environment (default: os.environ)

    Returns:
        Environment name
    """
    capabilities = capabilities or Capabilities()
    environ = os.environ if environ is None else environ

    for var_name in env_name_variables:
        if overrides and overrides.get(var_name):
            logger.debug(
                f"Environment name from override: {var_name}",
                extra={"var_name": var_name, "origin": "override"},
            )
            return overrides[var_name]

        if capabilities.can_read_env and environ.get(var_name):
            logger.debug(
                f"Environment name from process environment: {var_name}",
                extra={"var_name": var_name, "origin": "environ"},
            )
            return environ[var_name]

    return default


def resolve_variables(
    overrides: Optional[Mapping[str, str]] = None,
    capabilities: Optional[Capabilities] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[Dict[str, str]]:
    """Build the variable source used for substitution.

    Args:
        overrides: Construction-time override mapping (wins on collision)
        capabilities: Whether the process environment may be read
        environ: Process environment (default: os.environ)

    Returns:
        Merged variables, or None when no source is available at all
    """
    capabilities = capabilities or Capabilities()
    environ = os.environ if environ is None else environ

    variables: Optional[Dict[str, str]] = None

    if capabilities.can_read_env:
        variables = dict(environ)

    if overrides is not None:
        if variables is None:
            variables = {}
        variables.update(overrides)

    return variables
