"""Queryable configuration object."""
import logging
from typing import Any, Dict, Mapping, Optional

from src.cascade_config.config.environment import Capabilities
from src.cascade_config.config.loader import ConfigLoader
from src.cascade_config.config.paths import MISSING, PathLike, get_path, split_path
from src.cascade_config.config.settings import LoaderSettings
from src.cascade_config.config.tree import clone_tree
from src.cascade_config.exceptions.config import PropertyNotDefinedError


logger = logging.getLogger(__name__)


class Config:
    """Read-only view over a merged configuration tree.

    Build one with ``await Config.create(...)``; the tree is never mutated
    after loading, so a Config can be shared between tasks and threads.

    Example:
        config = await Config.create(env={"NODE_ENV": "production"})
        port = config.get("server.port")
        if config.has("db.replica"):
            ...
    """

    def __init__(self, tree: Optional[Dict[str, Any]] = None, environment: Optional[str] = None):
        self._tree: Dict[str, Any] = tree if tree is not None else {}
        self._environment = environment

    @classmethod
    async def create(
        cls,
        env: Optional[Mapping[str, str]] = None,
        capabilities: Optional[Capabilities] = None,
        settings: Optional[LoaderSettings] = None,
    ) -> "Config":
        """Load the configuration cascade and wrap the result.

        Args:
            env: Override mapping, wins over the process environment
            capabilities: Permissions granted by the embedding application
            settings: Loader settings

        Returns:
            Ready Config

        Raises:
            SubstitutionParseError: A typed substitution variable failed to parse
            IllegalSubstitutionLeafError: A substitution map has an illegal leaf
        """
        loader = ConfigLoader(env=env, capabilities=capabilities, settings=settings)
        tree = await loader.load()
        return cls(tree, environment=loader.environment)

    @property
    def environment(self) -> Optional[str]:
        """Environment name the cascade was resolved for (None if never resolved)."""
        return self._environment

    def get(self, path: PathLike) -> Any:
        """Return the value at ``path``.

        Raises:
            PropertyNotDefinedError: Nothing is defined at ``path``
        """
        value = get_path(self._tree, path)

        if value is MISSING:
            property_path = path if isinstance(path, str) else ".".join(split_path(path))
            logger.debug(
                f"Configuration property not defined: {property_path}",
                extra={"property_path": property_path},
            )
            raise PropertyNotDefinedError(property_path)

        return value

    def has(self, path: PathLike) -> bool:
        """Return whether anything (including None) is defined at ``path``."""
        return get_path(self._tree, path) is not MISSING

    def __contains__(self, path: PathLike) -> bool:
        return self.has(path)

    def as_dict(self) -> Dict[str, Any]:
        """Return a deep copy of the whole tree."""
        return clone_tree(self._tree)

    def __repr__(self) -> str:
        return f"Config(environment={self._environment!r}, keys={sorted(self._tree)!r})"


async def load_config(
    env: Optional[Mapping[str, str]] = None,
    capabilities: Optional[Capabilities] = None,
    config_dir: Optional[str] = None,
) -> Config:
    """Convenience function to load config.

    Args:
        env: Override mapping
        capabilities: Permissions granted by the embedding application
        config_dir: Path to config directory

    Returns:
        Ready Config

    Example:
        config = await load_config(config_dir="deploy/config")
        config.get("db.host")
    """
    settings = LoaderSettings(config_dir=config_dir) if config_dir else None
    return await Config.create(env=env, capabilities=capabilities, settings=settings)
