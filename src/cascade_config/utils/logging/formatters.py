"""Structured JSON log formatters."""
import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Dict


# Attributes every LogRecord has; anything else arrived through ``extra``
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "extra_context"}


def _serialize_value(value: Any) -> Any:
    """Safely serialize value to JSON-compatible type."""
    if value is None:
        return None
    elif isinstance(value, (str, int, float, bool)):
        return value
    elif isinstance(value, (list, dict)):
        return value
    elif hasattr(value, "isoformat"):
        # Handle datetime objects
        return value.isoformat()
    else:
        try:
            return str(value)
        except Exception:
            return f"<unserializable: {type(value).__name__}>"

# Sensitive data patterns to redact
_SENSITIVE_PATTERNS = (
    "api_key",
    "password",
    "passwd",
    "token",
    "secret",
    "authorization",
    "bearer",
)


def _redact_sensitive(data: Any) -> Any:
    """Redact sensitive values from data.

    Args:
        data: Data to redact (can be dict, list, or primitive)

    Returns:
        Redacted data with sensitive values replaced with [REDACTED]
    """
    if isinstance(data, dict):
        redacted = {}
        for key, value in data.items():
            key_lower = str(key).lower()
            if any(pattern in key_lower for pattern in _SENSITIVE_PATTERNS):
                redacted[key] = "[REDACTED]"
            elif isinstance(value, (dict, list)):
                redacted[key] = _redact_sensitive(value)
            else:
                redacted[key] = value
        return redacted
    elif isinstance(data, list):
        return [_redact_sensitive(item) for item in data]
    else:
        return data


class StructuredJSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Formats log records as JSON with consistent fields:
    - timestamp (ISO 8601 UTC)
    - level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - service_name (from context)
    - logger_name (module name)
    - message (log message)
    - correlation_id, operation_name (from context)
    - any ``extra`` fields passed to the logging call
    - exception and stack_trace (if applicable)
    """

    def __init__(self, service_name: str = "unknown"):
        """Initialize formatter.

        Args:
            service_name: Default service name (can be overridden by context)
        """
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a JSON line."""
        context = getattr(record, "extra_context", None) or {}

        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "service_name": context.get("service_name") or self.service_name,
            "logger_name": record.name,
            "message": record.getMessage(),
            "correlation_id": context.get("correlation_id"),
            "operation_name": context.get("operation_name"),
        }

        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            log_entry["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "module": exc_type.__module__ if exc_type else None,
            }
            if exc_tb:
                log_entry["stack_trace"] = traceback.format_exception(exc_type, exc_value, exc_tb)

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        }
        extra_fields.update(
            {k: v for k, v in context.items() if k not in ("service_name", "correlation_id", "operation_name")}
        )
        log_entry.update(_redact_sensitive(extra_fields))

        log_entry_serializable = {key: _serialize_value(value) for key, value in log_entry.items()}

        try:
            return json.dumps(log_entry_serializable, default=str)
        except (TypeError, ValueError) as e:
            return json.dumps({
                "error": "Failed to serialize log entry",
                "original_message": record.getMessage(),
                "serialization_error": str(e),
            })
