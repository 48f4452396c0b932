"""Custom exceptions for grocery_planner.

This module defines the error hierarchy used by the ingredient extraction
pipeline and its collaborators.

Only three of these ever reach a caller:
- MissingInputError: no URL or document was supplied
- FetchFailedError: the upstream page returned a non-success status
- NetworkError: the page could not be fetched at all

MalformedStructuredDataError and NormalizerUnavailableError are raised
internally and absorbed by ``fallback.try_or_default`` into a degraded but
successful result.

Example:
    >>> try:
    ...     raise FetchFailedError("Failed to fetch URL", status=404, url="https://x")
    ... except GroceryPlannerError as e:
    ...     print(e)
    Failed to fetch URL (status=404, url='https://x')
"""


class GroceryPlannerError(Exception):
    """Base exception for all grocery_planner errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about where/when the error occurred
    """

    def __init__(self, message: str, **context: str | int | float | bool | None) -> None:
        """Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error description
            **context: Additional context (e.g., url="https://...", status=404)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """Format error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class MissingInputError(GroceryPlannerError):
    """No URL or document was supplied.

    Rejected before the extraction pipeline runs.
    """

    pass


class FetchFailedError(GroceryPlannerError):
    """The upstream document fetch returned a non-success status.

    Attributes:
        status: HTTP status code returned by the upstream server

    Example:
        >>> error = FetchFailedError("Failed to fetch URL", status=503)
        >>> error.status
        503
    """

    def __init__(
        self,
        message: str,
        status: int,
        **context: str | int | float | bool | None,
    ) -> None:
        super().__init__(message, status=status, **context)
        self.status = status


class NetworkError(GroceryPlannerError):
    """Transport-level failure while fetching the document.

    Raised for DNS failures, refused connections, timeouts imposed by the
    HTTP client and similar conditions where no response was received.
    """

    pass


class MalformedStructuredDataError(GroceryPlannerError):
    """An embedded structured-data block could not be decoded.

    Recoverable: the block is skipped and scanning continues.
    """

    pass


class NormalizerUnavailableError(GroceryPlannerError):
    """The ingredient normalizer failed or returned unusable data.

    Recoverable: the raw candidate lines are used instead.

    Example:
        >>> raise NormalizerUnavailableError(
        ...     "Normalizer returned non-success status",
        ...     status=429,
        ... )
    """

    pass


class ConfigurationError(GroceryPlannerError):
    """Error in configuration or settings.

    Raised when:
    - Configuration file is invalid
    - Settings have invalid values
    - Environment variables are malformed
    """

    pass
