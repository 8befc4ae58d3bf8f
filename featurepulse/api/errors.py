"""
Error taxonomy for the FeaturePulse API.

Every failure surfaced by the client is a :class:`FeaturePulseError`.
Retryability is a property of the kind: network failures and 5xx server
errors are retryable, everything else is not.
"""
from __future__ import annotations

from typing import Any, Optional


class FeaturePulseError(Exception):
    """Base exception for FeaturePulse SDK errors."""

    code = "featurepulse_error"
    default_message = "An unknown FeaturePulse error occurred"
    recovery_suggestion: Optional[str] = None

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def retryable(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.message == other.message  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.message))


class MissingAPIKeyError(FeaturePulseError):
    """API key is missing or empty."""

    code = "missing_credential"
    default_message = "API key is required. Configure it via SDKConfig(api_key=...)"
    recovery_suggestion = "Set your API key in your app's initialization code"


class InvalidURLError(FeaturePulseError):
    """The request URL could not be constructed."""

    code = "invalid_request_target"
    default_message = "Failed to construct a valid URL"
    recovery_suggestion = "Check that the base URL is correctly configured"


class InvalidResponseError(FeaturePulseError):
    """Transport returned something that is not an HTTP response."""

    code = "invalid_response"
    default_message = "Received an invalid response from the server"
    recovery_suggestion = "Try again later or contact support if the issue persists"


class ServerError(FeaturePulseError):
    """Server answered outside 200-299 with no more specific mapping."""

    code = "server_error"

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = int(status_code)
        super().__init__(message or f"Server returned error code {self.status_code}")

    @property
    def retryable(self) -> bool:
        return self.status_code >= 500

    @property
    def recovery_suggestion(self) -> str:  # type: ignore[override]
        if self.status_code >= 500:
            return "The server is experiencing issues. Please try again later"
        return "Check your request and try again"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ServerError):
            return NotImplemented
        return self.status_code == other.status_code

    def __hash__(self) -> int:
        return hash((ServerError, self.status_code))


class DecodingError(FeaturePulseError):
    """Response body is not JSON, or not the expected shape."""

    code = "decoding_error"
    default_message = "Failed to decode the server response"
    recovery_suggestion = "Try again later or contact support if the issue persists"

    def __init__(self, message: Optional[str] = None, details: Optional[Any] = None):
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details is None:
            return self.message
        return f"{self.message} | details={self.details!r}"


class AlreadyVotedError(FeaturePulseError):
    """HTTP 409 on vote: the server already holds a vote from this device."""

    code = "already_voted"
    default_message = "You have already voted for this feature request"
    recovery_suggestion = "You can only vote once per feature request"


class PaymentRequiredError(FeaturePulseError):
    """HTTP 403 on create: the user's tier does not allow new requests."""

    code = "permission_denied"
    default_message = "A subscription is required to create feature requests"
    recovery_suggestion = "Upgrade your subscription to submit feature requests"


class NetworkError(FeaturePulseError):
    """DNS failure, timeout, connection reset and similar transport problems."""

    code = "network_error"
    recovery_suggestion = "Check your internet connection and try again"

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Network error: {cause}")

    @property
    def retryable(self) -> bool:
        return True


def is_retryable(error: BaseException) -> bool:
    return isinstance(error, FeaturePulseError) and error.retryable
