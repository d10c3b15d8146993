"""Config merger for layering configuration trees."""
import logging
from typing import Any, Dict, MutableMapping, Optional
from collections.abc import Mapping

from src.cascade_config.config.tree import ValueKind, classify, clone_tree
from src.cascade_config.exceptions.config import ConfigMergeError


logger = logging.getLogger(__name__)


class ConfigMerger:
    """Deep merges configuration trees in place.

    Merge rules, applied per key of the source:
    - Atomics (dates, regexes, pending computations): assigned by reference
    - Mapping over mapping: merged recursively, destination-only keys kept
    - Lists, mappings over non-mappings, other objects: cloned and replaced
    - Scalars (int, str, bool, None, etc.): overridden by value

    Example:
        into = {"db": {"host": "localhost", "port": 5432}}
        merger.extend_deep(into, {"db": {"port": 6543}, "hosts": ["a"]})

        into == {"db": {"host": "localhost", "port": 6543}, "hosts": ["a"]}
    """

    def extend_deep(
        self,
        into: MutableMapping[str, Any],
        source: Optional[Mapping],
    ) -> MutableMapping[str, Any]:
        """Deep merge ``source`` into ``into``.

        Args:
            into: Destination tree (mutated)
            source: Tree to merge from (not modified, never aliased)

        Returns:
            The mutated ``into``

        Raises:
            ConfigMergeError: If ``source`` is not a mapping
        """
        if source is None:
            return into

        if not isinstance(source, Mapping):
            raise ConfigMergeError(
                message=f"Cannot merge {type(source).__name__} into a config tree",
                source_type=type(source).__name__,
            )

        for key, value in source.items():
            kind = classify(value)

            if kind is ValueKind.ATOMIC:
                into[key] = value
            elif kind is ValueKind.CONTAINER and classify(into.get(key)) is ValueKind.CONTAINER:
                self.extend_deep(into[key], value)
            elif kind is ValueKind.SCALAR:
                into[key] = value
            else:
                into[key] = clone_tree(value)

        return into

    def merge_multiple(self, *configs: Optional[Mapping]) -> Dict[str, Any]:
        """Merge multiple configs in order (left to right, right wins).

        Args:
            *configs: Trees to merge; None entries are skipped

        Returns:
            New merged tree; inputs are not modified
        """
        result: Dict[str, Any] = {}

        for config in configs:
            self.extend_deep(result, config)

        logger.debug(
            "Configs merged",
            extra={"config_count": len(configs), "result_keys": len(result)},
        )

        return result


def extend_deep(
    into: MutableMapping[str, Any],
    source: Optional[Mapping],
) -> MutableMapping[str, Any]:
    """Convenience function for in-place deep merging."""
    merger = ConfigMerger()
    return merger.extend_deep(into, source)
