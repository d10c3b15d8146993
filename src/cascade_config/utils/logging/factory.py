"""Logger factory for creating configured loggers."""
import logging
import logging.handlers
import sys
from typing import Optional

from src.cascade_config.utils.logging.context import ContextFilter, _service_name_var
from src.cascade_config.utils.logging.formatters import StructuredJSONFormatter

_logger = logging.getLogger(__name__)


# Global configuration
_service_name_global: Optional[str] = None


def configure_logging(
    service_name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    enable_console: bool = True,
) -> None:
    """Configure global logging settings.

    Args:
        service_name: Service name for all logs
        level: Global log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (optional)
        enable_console: Enable console output (stderr)
    """
    global _service_name_global

    _service_name_global = service_name

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    formatter = StructuredJSONFormatter(service_name=service_name)
    context_filter = ContextFilter()

    handlers = []

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        handlers.append(console_handler)

    if log_file:
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        )
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)

    _logger.info(
        "Logging configured",
        extra={
            "service_name": service_name,
            "level": logging.getLevelName(level),
            "log_file": log_file,
            "handlers_count": len(handlers),
        },
    )


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance with configured handlers
    """
    logger = logging.getLogger(name)

    if _service_name_global and _service_name_var.get(None) is None:
        _service_name_var.set(_service_name_global)

    return logger


def disable_logging() -> None:
    """Disable all logging (use NullHandler).

    Useful for tests and for CLI output that must stay machine-readable.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(logging.NullHandler())
