"""Custom exceptions for getver.

Provides structured error handling with categorized exceptions
and a standardized error response format shared by the CLI and the API.
"""

from typing import Optional, Dict, Any


class GetverException(Exception):
    """Base exception for all getver errors.

    Provides structured error response format with:
    - error_code: Machine-readable error identifier
    - message: Human-readable error description
    - details: Optional additional context
    """

    error_code: str = "GETVER_ERROR"
    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Return structured error response dict."""
        response = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


# ============ Validation Errors (4xx) ============


class ValidationError(GetverException):
    """Input validation failed."""

    error_code = "VALIDATION_ERROR"
    status_code = 400


class InvalidURLError(ValidationError):
    """URL cannot be parsed or has no host."""

    error_code = "INVALID_URL"

    def __init__(self, url: str, reason: str = "Invalid URL"):
        super().__init__(f"{reason}: {url}", details={"url": url, "reason": reason})


class CrawlDepthError(ValidationError):
    """Requested crawl depth is above the configured maximum."""

    error_code = "CRAWL_DEPTH_EXCEEDED"

    def __init__(self, depth: int, max_depth: int):
        super().__init__(
            f"Maximum crawl depth is {max_depth}.",
            details={"depth": depth, "max_depth": max_depth},
        )


# ============ Result Errors ============


class ResultError(GetverException):
    """Base class for errors about the produced result list."""

    error_code = "RESULT_ERROR"
    status_code = 404


class NoResultsError(ResultError):
    """The crawl finished without a single candidate."""

    error_code = "NO_RESULTS"

    def __init__(self, url: str):
        super().__init__(f"No version candidates found for {url}", details={"url": url})


class NotEnoughResultsError(ResultError):
    """A 1-based selection points past the end of the result list."""

    error_code = "NOT_ENOUGH_RESULTS"

    def __init__(self, index: int, available: int):
        super().__init__(
            f"Not enough results to retrieve result number {index}.",
            details={"index": index, "available": available},
        )
        self.index = index
        self.available = available


# ============ Utility Functions ============


def error_response(exception: GetverException) -> tuple:
    """Create Flask JSON response from exception.

    Returns:
        Tuple of (response_dict, status_code) ready for jsonify
    """
    return exception.to_dict(), exception.status_code
