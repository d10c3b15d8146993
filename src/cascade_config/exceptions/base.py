"""Root of the cascade-config exception hierarchy."""
from typing import Any, Dict, Optional


class CascadeConfigError(Exception):
    """Raised for any failure while loading or querying configuration.

    Catching this one class covers every error the package raises itself.

    Args:
        message: What went wrong, in plain words
        error_code: Stable identifier for log filtering (e.g. "CONFIG_PARSE_FAILED")
        details: Structured context such as paths or variable names
        original: Lower-level exception this one wraps
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original: Optional[Exception] = None,
    ):
        self.message = message
        self.error_code = error_code or "CASCADE_CONFIG_ERROR"
        self.details = dict(details) if details else {}
        self.original = original

        text = f"[{self.error_code}] {message}"
        if original is not None:
            text = f"{text} (from {type(original).__name__}: {original})"

        super().__init__(text)

    def to_dict(self) -> Dict[str, Any]:
        """Structured form of the error; ``original_type`` only when wrapping."""
        payload: Dict[str, Any] = {
            "exception_type": type(self).__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": dict(self.details),
        }
        if self.original is not None:
            payload["original_type"] = type(self.original).__name__
        return payload
