"""
Exception hierarchy for the todoctl client.

Every failure the client can hit while turning a command into one HTTP
round-trip is raised as a TodoctlError subclass. None of them are recovered
locally: they propagate to the CLI entry point, which prints the message and
exits non-zero.
"""
from typing import Any


# ============================================================================
# Base Exception Class
# ============================================================================

class TodoctlError(Exception):
    """Base exception for all todoctl errors.

    Attributes:
        message: Human-readable error message
        context: Dictionary of additional context
        original_error: Optional original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None
    ):
        """Initialize todoctl error.

        Args:
            message: Human-readable error message
            context: Optional dictionary of additional context
            original_error: Optional original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_error = original_error

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization.

        Returns:
            Dictionary representation of the exception
        """
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
        }
        if self.context:
            result["context"] = self.context
        if self.original_error:
            result["original_error"] = {
                "type": type(self.original_error).__name__,
                "message": str(self.original_error)
            }
        return result


# ============================================================================
# Client Error Types
# ============================================================================

class UriBuildError(TodoctlError):
    """Raised when a request URI cannot be built from the base URL.

    Raised before any network call is attempted.

    Attributes:
        base_url: The user-supplied base URL
    """

    def __init__(
        self,
        base_url: str,
        *,
        message: str | None = None,
        original_error: Exception | None = None,
        context: dict[str, Any] | None = None
    ):
        if message is None:
            message = f"Invalid base URL '{base_url}': a scheme and authority are required"

        super().__init__(message, context=context, original_error=original_error)
        self.base_url = base_url
        self.context.setdefault("base_url", base_url)


class TransportError(TodoctlError):
    """Raised when the HTTP round-trip fails (connect, DNS, send or receive).

    Attributes:
        method: HTTP method of the failed request
        url: Target URL of the failed request
    """

    def __init__(
        self,
        method: str,
        url: str,
        *,
        message: str | None = None,
        original_error: Exception | None = None,
        context: dict[str, Any] | None = None
    ):
        if message is None:
            detail = str(original_error) if original_error else "request failed"
            message = f"{method} {url} failed: {detail or type(original_error).__name__}"

        super().__init__(message, context=context, original_error=original_error)
        self.method = method
        self.url = url
        self.context.setdefault("method", method)
        self.context.setdefault("url", url)


class DecodeError(TodoctlError):
    """Raised when response bytes are not valid text.

    Covers a body that is not UTF-8 and a Content-Type header value that is
    not visible ASCII.
    """


class FormatError(TodoctlError):
    """Raised when a response claims JSON but the body does not parse.

    Attributes:
        content_type: Content-Type the server sent
    """

    def __init__(
        self,
        content_type: str,
        *,
        message: str | None = None,
        original_error: Exception | None = None,
        context: dict[str, Any] | None = None
    ):
        if message is None:
            message = f"Response declared '{content_type}' but body is not valid JSON"
            if original_error:
                message = f"{message}: {original_error}"

        super().__init__(message, context=context, original_error=original_error)
        self.content_type = content_type
        self.context.setdefault("content_type", content_type)
