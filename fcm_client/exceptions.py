"""
Custom exception classes with context for fcm-client.

All exceptions inherit from FCMClientError and support attaching
contextual information for better debugging and logging.

Per-token failures inside a bulk topic-management response are NOT
exceptions; they are reported as data in TopicManagementResponse.
"""

from __future__ import annotations

from datetime import timedelta


class FCMClientError(Exception):
    """
    Base exception for fcm-client.

    Attributes:
        message: Human-readable error message
        context: Optional dictionary with additional context for logging/debugging
    """

    def __init__(self, message: str, context: dict[str, object] | None = None):
        """
        Initialize exception with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dictionary with contextual information
                    (operation name, endpoint, status code, etc.)
        """
        super().__init__(message)
        self.context = context or {}


class ConstructionError(FCMClientError):
    """
    Client construction failed.

    Raised by FCMClient.create when credentials, the project id or the
    settings cannot be acquired. No partially built client is returned.

    Example:
        raise ConstructionError(
            "Cannot detect Google Cloud project id",
            context={"checked": ["GOOGLE_CLOUD_PROJECT", "GCP_PROJECT"]}
        )
    """


class ConfigurationError(ConstructionError):
    """
    Configuration error.

    Raised when the settings file cannot be read, parsed or validated.
    """


class TransportError(FCMClientError):
    """
    The HTTP round trip failed before a response was received.

    Wraps httpx network, timeout and protocol errors. The httpx
    exception is kept both as ``__cause__`` and as ``cause``.
    """

    def __init__(
        self,
        message: str,
        cause: Exception | None = None,
        context: dict[str, object] | None = None,
    ):
        super().__init__(message, context)
        self.cause = cause


class AuthError(FCMClientError):
    """
    Authentication failed.

    Raised when the credentials cannot produce a bearer token, or when the
    API rejects the token (401). Not retried or refreshed again here.

    Check that:
        1. GOOGLE_APPLICATION_CREDENTIALS points to a valid service account file
        2. the service account is allowed to use Firebase Cloud Messaging
    """


class DecodeError(FCMClientError):
    """
    Response body did not match the expected response shape.

    Attributes:
        reason: Why decoding failed
        body: Raw response text, for debugging
    """

    def __init__(
        self,
        reason: str,
        body: str = "",
        context: dict[str, object] | None = None,
    ):
        super().__init__(f"Unable to decode response body: {reason}", context)
        self.reason = reason
        self.body = body


class ApiError(FCMClientError):
    """
    The API answered with a non-success status.

    Attributes:
        status_code: HTTP status code returned by the API
        details: Response body text, when the API sent one
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        details: str | None = None,
        context: dict[str, object] | None = None,
    ):
        super().__init__(message, context)
        self.status_code = status_code
        self.details = details


class InvalidRequestError(ApiError):
    """The API rejected the request (400 or another 4xx status)."""


class ServerError(ApiError):
    """
    The API failed internally (5xx).

    ``retry_after`` is set when the API sent a Retry-After header. Retrying
    is left to the caller.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        details: str | None = None,
        retry_after: timedelta | None = None,
        context: dict[str, object] | None = None,
    ):
        super().__init__(message, status_code, details, context)
        self.retry_after = retry_after


class UnexpectedStatusError(ApiError):
    """The API answered with a status this client does not handle."""
