"""
Unified exception definitions for the aggregator.

All custom exceptions inherit from AggregatorError for easy catching.
"""

from typing import Any, Optional


class AggregatorError(Exception):
    """Base exception for all aggregator errors."""

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "AGGREGATOR_ERROR"
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for logging/serialization."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigError(AggregatorError):
    """Structural or semantic configuration errors."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="CONFIG_ERROR", **kwargs)


class ParseError(AggregatorError):
    """The settings document could not be read or decoded."""

    def __init__(self, message: str, *, path: str, **kwargs):
        details = kwargs.pop("details", {})
        details["path"] = path
        super().__init__(message, code="PARSE_ERROR", details=details, **kwargs)
        self.path = path


class KeyLoadError(AggregatorError):
    """
    The configured OpenPGP key could not be loaded.

    Raised from the key cache; once raised for a configuration the same
    instance is raised again on every later request.
    """

    def __init__(self, message: str, *, path: str, **kwargs):
        details = kwargs.pop("details", {})
        details["path"] = path
        super().__init__(message, code="KEY_LOAD_ERROR", details=details, **kwargs)
        self.path = path
