"""Errors raised by the assistant clients.

Validation problems are raised before any request is made. Relay failures
are split by cause so the UI can word them differently, and a flashcard
reply that cannot be parsed is kept apart from both.
"""


class AssistantError(Exception):
    """Base class for assistant client errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputValidationError(AssistantError, ValueError):
    """The input was rejected before contacting any service."""


class RelayError(AssistantError):
    """The AI relay did not return usable content."""

    code = "upstream_error"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitedError(RelayError):
    code = "rate_limited"


class QuotaExhaustedError(RelayError):
    code = "quota_exhausted"


class UpstreamError(RelayError):
    code = "upstream_error"


class NotConfiguredError(RelayError):
    """The relay has no route to the gateway (missing key or unreachable)."""

    code = "not_configured"


class RelayUnavailableError(RelayError):
    """The relay itself could not be reached."""

    code = "relay_unavailable"


class FlashcardParseError(AssistantError):
    """The AI answered, but not with a usable flashcard list."""
