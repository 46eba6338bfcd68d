"""
Exception hierarchy for the biography core.
Every error carries a machine-readable code and a context dict for logging.
"""

from typing import Any, Dict, Optional


class BiographyError(Exception):
    """Base exception for all biography errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
        }


class ValidationError(BiographyError):
    """Raised when caller input is malformed or outside a closed set."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        context = {}
        if field is not None:
            context["field"] = field
            context["value"] = repr(value)
        super().__init__(message=message, error_code="VALIDATION_ERROR", context=context)


class UpstreamGenerationError(BiographyError):
    """Raised when the text-generation service fails or is unreachable."""

    def __init__(self, message: str, model: Optional[str] = None, details: Optional[str] = None):
        context = {}
        if model:
            context["model"] = model
        if details:
            context["details"] = details
        super().__init__(message=message, error_code="UPSTREAM_GENERATION_ERROR", context=context)


class NotFoundError(BiographyError):
    """Raised when a shared biography cannot be served."""

    def __init__(self, public_id: Any):
        super().__init__(
            message="Biography not found",
            error_code="NOT_FOUND",
            context={"public_id": public_id},
        )
