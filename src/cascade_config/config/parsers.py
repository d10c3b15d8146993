"""Structured-text parsers for configuration files and variables."""
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import json5
import yaml

from src.cascade_config.exceptions.config import ConfigNotFoundError, ConfigParseError


logger = logging.getLogger(__name__)


def _parse_yaml(text: str) -> Any:
    return yaml.safe_load(text)


# Format tag -> parser. "json" is strict; "json5" accepts comments,
# trailing commas, unquoted keys and single quotes.
PARSERS: Dict[str, Callable[[str], Any]] = {
    "json": json.loads,
    "json5": json5.loads,
    "yaml": _parse_yaml,
    "yml": _parse_yaml,
}


def supported_formats() -> list:
    """Return the known format tags."""
    return list(PARSERS)


class ConfigFileParser:
    """Reads and parses configuration text into Python structures."""

    def parse(
        self,
        text: str,
        format_name: str,
        source: Optional[str] = None,
    ) -> Any:
        """Parse raw text with the parser registered for ``format_name``.

        Args:
            text: Raw structured text
            format_name: Format tag ("json", "json5", "yaml", "yml")
            source: File path or variable name, for error messages

        Returns:
            Parsed value (any JSON-compatible type)

        Raises:
            ConfigParseError: Unknown format or invalid syntax
        """
        parser = PARSERS.get(format_name)
        if parser is None:
            raise ConfigParseError(
                message=f"Unknown format: {format_name}",
                config_file=source,
            )

        try:
            return parser(text)
        except (ValueError, yaml.YAMLError) as e:
            line_number = getattr(e, "lineno", None)
            column_number = getattr(e, "colno", None)
            mark = getattr(e, "problem_mark", None)
            if mark is not None:
                line_number = mark.line + 1
                column_number = mark.column + 1

            raise ConfigParseError(
                message=f"Failed to parse {format_name}: {e}",
                config_file=source,
                line_number=line_number,
                column_number=column_number,
                original_error=e,
            )

    def load(self, path: Path, format_name: Optional[str] = None) -> Any:
        """Read and parse a config file.

        Args:
            path: Path to the file
            format_name: Format tag; defaults to the file extension

        Returns:
            Parsed file contents; an empty document yields None

        Raises:
            ConfigNotFoundError: File missing or unreadable
            ConfigParseError: File contents are invalid
        """
        format_name = format_name or path.suffix.lstrip(".")

        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            raise ConfigNotFoundError(
                message=f"Failed to read config file: {e}",
                config_file=str(path),
                original_error=e,
            )
        except UnicodeDecodeError as e:
            raise ConfigParseError(
                message=f"Config file is not valid UTF-8: {e}",
                config_file=str(path),
                original_error=e,
            )

        if not text.strip():
            logger.debug(f"Config file is empty: {path}", extra={"path": str(path)})
            return None

        data = self.parse(text, format_name, source=str(path))

        logger.debug(
            f"Config file parsed: {path}",
            extra={"path": str(path), "format": format_name, "type": type(data).__name__},
        )

        return data
