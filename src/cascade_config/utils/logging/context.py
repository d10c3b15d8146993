"""Log context management using contextvars for async-safe metadata."""
import contextvars
import logging
import uuid
from typing import Any, Dict, Optional


# Context variables for async-safe context propagation
_correlation_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "correlation_id", default=None
)
_service_name_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "service_name", default=None
)
_operation_name_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "operation_name", default=None
)
_extra_context_var: contextvars.ContextVar[Optional[Dict[str, Any]]] = contextvars.ContextVar(
    "extra_context", default=None
)
_logger = logging.getLogger(__name__)


def get_correlation_id() -> Optional[str]:
    """Get current correlation ID from context."""
    return _correlation_id_var.get(None)


def get_service_name() -> Optional[str]:
    """Get current service name from context."""
    return _service_name_var.get(None)


def get_operation_name() -> Optional[str]:
    """Get current operation name from context."""
    return _operation_name_var.get(None)


def get_context() -> Dict[str, Any]:
    """Get all context values as a dictionary."""
    context = {
        "correlation_id": get_correlation_id(),
        "service_name": get_service_name(),
        "operation_name": get_operation_name(),
    }
    context.update(_extra_context_var.get(None) or {})
    return context


class ContextFilter(logging.Filter):
    """Attach the current log context to every record as ``extra_context``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.extra_context = get_context()
        return True


class log_context:
    """Async context manager for adding metadata to logs.

    Example:
        async with log_context(operation_name="config_load", config_dir="config"):
            logger.info("Loading configuration")
            # All logs in this scope carry operation_name and config_dir
    """

    def __init__(
        self,
        correlation_id: Optional[str] = None,
        service_name: Optional[str] = None,
        operation_name: Optional[str] = None,
        **extra_context: Any,
    ):
        """Initialize log context.

        Args:
            correlation_id: Correlation ID (generated when omitted)
            service_name: Service name
            operation_name: Operation name (e.g., "config_load")
            **extra_context: Additional context key-value pairs
        """
        self.correlation_id = correlation_id or str(uuid.uuid4())
        self.service_name = service_name
        self.operation_name = operation_name
        self.extra_context = extra_context
        self._tokens: list = []

    async def __aenter__(self) -> "log_context":
        """Enter context and set variables."""
        self._tokens = [
            (_correlation_id_var, _correlation_id_var.set(self.correlation_id)),
            (_operation_name_var, _operation_name_var.set(self.operation_name)),
            (_extra_context_var, _extra_context_var.set(self.extra_context)),
        ]
        if self.service_name is not None:
            self._tokens.append((_service_name_var, _service_name_var.set(self.service_name)))

        _logger.debug(
            "Context entered",
            extra={
                "correlation_id": self.correlation_id,
                "operation_name": self.operation_name,
                "extra_keys": list(self.extra_context.keys()),
            },
        )

        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context and restore previous context."""
        for var, token in reversed(self._tokens):
            var.reset(token)
        self._tokens = []

        _logger.debug(
            "Context exited",
            extra={
                "correlation_id": self.correlation_id,
                "operation_name": self.operation_name,
                "exc_type": str(exc_type) if exc_type else None,
            },
        )
