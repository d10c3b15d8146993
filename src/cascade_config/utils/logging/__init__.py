"""Structured JSON logging utility."""

from src.cascade_config.utils.logging.context import (  # noqa: F401
    ContextFilter,
    get_context,
    get_correlation_id,
    get_operation_name,
    get_service_name,
    log_context,
)
from src.cascade_config.utils.logging.factory import (  # noqa: F401
    configure_logging,
    disable_logging,
    get_logger,
)
from src.cascade_config.utils.logging.formatters import StructuredJSONFormatter  # noqa: F401

__all__ = [
    # Context management
    "ContextFilter",
    "get_context",
    "get_correlation_id",
    "get_operation_name",
    "get_service_name",
    "log_context",
    # Factory
    "configure_logging",
    "disable_logging",
    "get_logger",
    # Formatters
    "StructuredJSONFormatter",
]
