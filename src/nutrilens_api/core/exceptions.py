"""Custom exception classes for the API."""

from enum import Enum
from typing import Any


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(self, message: str, status_code: int = 400, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class GatewayErrorKind(str, Enum):
    """Failure classes surfaced by the analysis gateway."""

    MISSING_INPUT = "missing_input"
    UPSTREAM_RATE_LIMITED = "upstream_rate_limited"
    UPSTREAM_BILLING_EXHAUSTED = "upstream_billing_exhausted"
    UPSTREAM_FAILURE = "upstream_failure"
    MALFORMED_UPSTREAM_RESPONSE = "malformed_upstream_response"
    INTERNAL_ERROR = "internal_error"


class GatewayError(APIError):
    """
    Error raised while handling a nutrition analysis request.

    Each subclass fixes its kind and HTTP status so callers can tell
    failures apart by status code alone.
    """

    kind: GatewayErrorKind = GatewayErrorKind.INTERNAL_ERROR
    default_status_code: int = 500

    def __init__(self, message: str, details: Any = None):
        super().__init__(
            message=message,
            status_code=self.default_status_code,
            details=details,
        )


class MissingInputError(GatewayError):
    """Required request field is absent or empty."""

    kind = GatewayErrorKind.MISSING_INPUT
    default_status_code = 400


class UpstreamRateLimitedError(GatewayError):
    """AI gateway answered 429."""

    kind = GatewayErrorKind.UPSTREAM_RATE_LIMITED
    default_status_code = 429

    def __init__(
        self,
        message: str = "Rate limit exceeded. Please try again in a moment.",
        details: Any = None,
    ):
        super().__init__(message, details)


class UpstreamBillingExhaustedError(GatewayError):
    """AI gateway answered 402."""

    kind = GatewayErrorKind.UPSTREAM_BILLING_EXHAUSTED
    default_status_code = 402

    def __init__(
        self,
        message: str = "AI credits depleted. Please add more credits to continue.",
        details: Any = None,
    ):
        super().__init__(message, details)


class UpstreamFailureError(GatewayError):
    """Any other non-2xx answer, or the gateway could not be reached."""

    kind = GatewayErrorKind.UPSTREAM_FAILURE


class MalformedUpstreamResponseError(GatewayError):
    """Gateway answered 2xx but without a usable structured payload."""

    kind = GatewayErrorKind.MALFORMED_UPSTREAM_RESPONSE

    def __init__(
        self,
        message: str = "Failed to extract nutrition data",
        details: Any = None,
    ):
        super().__init__(message, details)


class InternalError(GatewayError):
    """Unclassified failure inside the service."""

    kind = GatewayErrorKind.INTERNAL_ERROR

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        details: Any = None,
    ):
        super().__init__(message, details)


class ServiceNotConfiguredError(InternalError):
    """No API key is configured for the AI gateway."""

    def __init__(self, message: str = "AI service not configured", details: Any = None):
        super().__init__(message, details)
