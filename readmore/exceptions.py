"""Custom exception hierarchy for readmore.

Exception Hierarchy:
    ReadmoreError (base)
    ├── InvalidDateFormatError - a date bound is not a real YYYY-MM-DD date
    ├── ContentIndexError - the content index failed
    │   ├── ContentIndexUnavailableError (retryable)
    │   └── ContentIndexQueryError
    ├── SelectionNotFoundError - selection against a superseded result set
    └── ConfigurationError - settings/configuration issues

Usage:
    from readmore.exceptions import ContentIndexQueryError

    try:
        # index operation
    except sqlite3.Error as e:
        raise ContentIndexQueryError("Failed to run search", query=sql) from e
"""

from typing import Any, Optional


class ReadmoreError(Exception):
    """Base exception for all readmore errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., IDs, fields)
        retryable: Whether this error might succeed on retry
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Input Errors
# =============================================================================


class InvalidDateFormatError(ReadmoreError):
    """A date bound did not round-trip through YYYY-MM-DD."""

    def __init__(self, field: str, *, value: Optional[str] = None, **context: Any) -> None:
        self.field = field
        if value is not None:
            context["value"] = value
        super().__init__(f"Invalid '{field}': Please use YYYY-MM-DD format.", **context)


# =============================================================================
# Content Index Errors
# =============================================================================


class ContentIndexError(ReadmoreError):
    """Base exception for content index failures."""

    pass


class ContentIndexUnavailableError(ContentIndexError):
    """The content index could not be reached."""

    def __init__(self, message: str = "Content index unavailable", **context: Any) -> None:
        super().__init__(message, retryable=True, **context)


class ContentIndexQueryError(ContentIndexError):
    """The content index rejected or failed a query."""

    def __init__(
        self,
        message: str = "Content index query failed",
        *,
        query: Optional[str] = None,
        **context: Any,
    ) -> None:
        if query:
            context["query"] = query[:100] + "..." if len(query) > 100 else query
        super().__init__(message, **context)


# =============================================================================
# Selection Errors
# =============================================================================


class SelectionNotFoundError(ReadmoreError):
    """The selected identifier is not part of the current result set."""

    def __init__(self, identifier: Any, **context: Any) -> None:
        self.identifier = identifier
        super().__init__("Selected item is not in the current results", identifier=identifier, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(ReadmoreError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)
