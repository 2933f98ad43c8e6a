"""
Exceptions raised while turning command-line arguments into modified URLs.

Every error carries a human readable message (what gets printed on stderr)
plus a details mapping and the low-level exception that caused it, if any.
"""

from typing import Any
import logging

logger = logging.getLogger(__name__)


class UrlToolError(Exception):
    """Base exception for all urltool errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None,
                 original_exception: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        return self.message


class URLParseError(UrlToolError):
    """Raised when an argument is not a valid URL-reference."""
    pass


class InvalidPortError(UrlToolError):
    """Raised when the -P value is not a non-negative integer."""
    pass


class RelativeResolutionError(UrlToolError):
    """Raised when the -r target cannot be resolved against a URL."""
    pass


class NoURLsError(UrlToolError):
    """Raised when a group of modifiers is not preceded by any URL."""
    pass


def wrap_error(original_error: Exception, context: str,
               details: dict[str, Any] | None = None,
               error_class: type[UrlToolError] | None = None) -> UrlToolError:
    """
    Convert a low-level exception into the matching UrlToolError type.

    Args:
        original_error: The exception that occurred
        context: What was being done, e.g. 'parse URL "a b"'
        details: Additional details about the error
        error_class: The UrlToolError subclass to raise; picked from the
            exception type when not given

    Returns:
        A UrlToolError subclass whose message is "unable to <context>: <cause>"
    """
    if isinstance(original_error, UrlToolError):
        return original_error

    enhanced_details = {
        "original_error_type": type(original_error).__name__,
        "context": context,
        **(details or {})
    }
    message = f"unable to {context}: {original_error}"

    if error_class is None:
        error_class = URLParseError if isinstance(original_error, ValueError) else UrlToolError
    error = error_class(message, enhanced_details, original_error)

    logger.debug(f"{type(error).__name__}: {message} ({enhanced_details})")
    return error
