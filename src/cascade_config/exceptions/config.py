"""Configuration-related exceptions."""
from typing import Optional

from src.cascade_config.exceptions.base import CascadeConfigError


class ConfigError(CascadeConfigError):
    """Base exception for configuration errors.

    Args:
        message: Human-readable error message
        config_file: Path to config file
        error_code: Machine-readable error code
        details: Additional error context
        original_error: Wrapped exception, if any
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        error_code: str = "CONFIG_ERROR",
        details: Optional[dict] = None,
        original_error: Optional[Exception] = None,
    ):
        self.config_file = config_file
        self.original_error = original_error
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            original=original_error,
        )

    def __str__(self) -> str:
        parts = [self.message]
        if self.config_file:
            parts.append(f"Config: {self.config_file}")
        return " | ".join(parts)


class ConfigPermissionError(ConfigError):
    """Reading the configuration directory is not permitted."""

    def __init__(
        self,
        message: str = "Permission to read configuration denied",
        config_dir: Optional[str] = None,
    ):
        details = {}
        if config_dir is not None:
            details["config_dir"] = config_dir
        super().__init__(message, None, "CONFIG_PERMISSION_DENIED", details)


class ConfigNotFoundError(ConfigError):
    """Configuration file not found or not readable."""

    def __init__(
        self,
        message: str = "Configuration file not found",
        config_file: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, config_file, "CONFIG_NOT_FOUND", None, original_error)


class ConfigParseError(ConfigError):
    """Failed to parse configuration file."""

    def __init__(
        self,
        message: str = "Failed to parse config file",
        config_file: Optional[str] = None,
        line_number: Optional[int] = None,
        column_number: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        details = {}
        if line_number is not None:
            details["line"] = line_number
        if column_number is not None:
            details["column"] = column_number
        super().__init__(message, config_file, "CONFIG_PARSE_FAILED", details, original_error)


class ConfigMergeError(ConfigError):
    """Failed to merge configuration trees."""

    def __init__(
        self,
        message: str = "Failed to merge configurations",
        source_type: Optional[str] = None,
    ):
        details = {}
        if source_type is not None:
            details["source_type"] = source_type
        super().__init__(message, None, "CONFIG_MERGE_FAILED", details)


class SubstitutionParseError(ConfigError):
    """A typed substitution variable could not be parsed.

    The message is prefixed with the variable name and format so the
    offending entry in the substitution map is easy to find.
    """

    def __init__(
        self,
        var_name: str,
        format_name: str,
        original_error: Optional[Exception] = None,
        config_file: Optional[str] = None,
    ):
        reason = str(original_error) if original_error else "unknown error"
        message = f"__format parser error in {var_name} ({format_name}): {reason}"
        details = {"var_name": var_name, "format": format_name}
        super().__init__(message, config_file, "SUBSTITUTION_PARSE_FAILED", details, original_error)
        self.var_name = var_name
        self.format_name = format_name


class IllegalSubstitutionLeafError(ConfigError):
    """A substitution map contains a leaf that is neither a name nor a descriptor."""

    def __init__(
        self,
        path: str,
        type_name: str,
        config_file: Optional[str] = None,
    ):
        message = f"Illegal key type for substitution map at {path}: {type_name}"
        details = {"path": path, "type": type_name}
        super().__init__(message, config_file, "ILLEGAL_SUBSTITUTION_LEAF", details)
        self.path = path
        self.type_name = type_name


class PropertyNotDefinedError(ConfigError):
    """Requested configuration property does not exist."""

    def __init__(self, property_path: str):
        message = f'Configuration property "{property_path}" is not defined'
        super().__init__(message, None, "PROPERTY_NOT_DEFINED", {"path": property_path})
        self.property_path = property_path
