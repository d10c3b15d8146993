"""Environment variable substitution driven by a substitution map."""
import logging
from typing import Any, Dict, List, Mapping, Optional

from src.cascade_config.config.parsers import ConfigFileParser
from src.cascade_config.config.paths import set_path
from src.cascade_config.config.tree import ValueKind, classify
from src.cascade_config.exceptions.config import (
    ConfigParseError,
    IllegalSubstitutionLeafError,
    SubstitutionParseError,
)


logger = logging.getLogger(__name__)

NAME_FIELD = "__name"
FORMAT_FIELD = "__format"


class EnvSubstitutor:
    """Builds a config tree from a substitution map and a variable source.

    A substitution map mirrors the shape of the config. Its leaves are either
    variable names or descriptors asking for the variable to be parsed:

        {
            "db": {"host": "DB_HOST", "password": "DB_PASS"},
            "features": {"__name": "FEATURES", "__format": "json5"},
        }

    Only paths whose variable is set and non-empty appear in the result.
    A mapping carrying both ``__name`` and ``__format`` is always treated
    as a descriptor, so those two keys cannot be used as ordinary config keys
    inside a substitution map.
    """

    def __init__(self, parser: Optional[ConfigFileParser] = None):
        """Initialize environment substitutor.

        Args:
            parser: Parser used for typed descriptors
        """
        self.parser = parser or ConfigFileParser()

    def substitute_deep(
        self,
        substitution_map: Mapping[str, Any],
        variables: Mapping[str, str],
        source: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Resolve a substitution map against ``variables``.

        Args:
            substitution_map: Map whose leaves name variables
            variables: Flat name -> value source (usually the environment)
            source: File the map came from, for error messages

        Returns:
            New tree containing only the resolved paths

        Raises:
            SubstitutionParseError: A descriptor's value failed to parse
            IllegalSubstitutionLeafError: A leaf is not a name or descriptor
        """
        result: Dict[str, Any] = {}
        self._substitute_vars(substitution_map, variables, [], result, source)

        logger.debug(
            "Substitution map resolved",
            extra={"source": source, "resolved_keys": len(result)},
        )

        return result

    def _substitute_vars(
        self,
        node: Any,
        variables: Mapping[str, str],
        path_to: List[str],
        result: Dict[str, Any],
        source: Optional[str],
    ) -> None:
        if classify(node) is ValueKind.SEQUENCE:
            items = ((str(index), item) for index, item in enumerate(node))
        else:
            items = node.items()

        for prop, value in items:
            path = path_to + [prop]
            kind = classify(value)

            if isinstance(value, str):
                resolved = self._resolve(variables, value)
                if resolved is not None:
                    set_path(result, path, resolved)
            elif kind is ValueKind.CONTAINER and NAME_FIELD in value and FORMAT_FIELD in value:
                parsed = self._parse_descriptor(value, variables, source)
                if parsed is not None:
                    set_path(result, path, parsed)
            elif kind in (ValueKind.CONTAINER, ValueKind.SEQUENCE):
                self._substitute_vars(value, variables, path, result, source)
            else:
                raise IllegalSubstitutionLeafError(
                    path=".".join(path),
                    type_name=type(value).__name__,
                    config_file=source,
                )

    @staticmethod
    def _resolve(variables: Mapping[str, str], name: str) -> Optional[str]:
        value = variables.get(name)
        if value is None or value == "":
            return None
        return value

    def _parse_descriptor(
        self,
        descriptor: Mapping[str, Any],
        variables: Mapping[str, str],
        source: Optional[str],
    ) -> Any:
        var_name = descriptor[NAME_FIELD]
        format_name = descriptor[FORMAT_FIELD]

        raw = self._resolve(variables, var_name) if isinstance(var_name, str) else None
        if raw is None:
            return None

        try:
            return self.parser.parse(raw, str(format_name))
        except ConfigParseError as e:
            logger.error(
                f"Failed to parse substitution variable: {var_name}",
                extra={"var_name": var_name, "format": format_name, "source": source},
            )
            raise SubstitutionParseError(
                var_name=var_name,
                format_name=str(format_name),
                original_error=e.original_error or e,
                config_file=source,
            ) from e


def substitute_deep(
    substitution_map: Mapping[str, Any],
    variables: Mapping[str, str],
) -> Dict[str, Any]:
    """Convenience function for resolving a substitution map."""
    substitutor = EnvSubstitutor()
    return substitutor.substitute_deep(substitution_map, variables)
