# ruff: noqa: D107
"""Provider transport exceptions.

None of these reach the user as an HTTP error during a turn: the
orchestrator turns them into the assistant message's content.
"""

from typing import Any

from .base import BaseAppException


class ProviderError(BaseAppException):
    """Base exception for remote provider failures."""

    status_code = 502
    error_code = "PROVIDER_ERROR"
    default_message = "Provider request failed"


class InvalidEndpointError(ProviderError):
    """Exception raised when the provider base URL cannot be turned into a request URL."""

    error_code = "INVALID_ENDPOINT"
    default_message = "Invalid provider endpoint"


class NoContentError(ProviderError):
    """Exception raised when a well-formed response carries no message content."""

    error_code = "NO_CONTENT"
    default_message = "The provider returned no content"


class TransportFailureError(ProviderError):
    """Exception raised on network, timeout or connection failures."""

    error_code = "TRANSPORT_FAILURE"
    default_message = "Could not reach the provider"


class DecodeFailureError(ProviderError):
    """Exception raised when the response body does not match the expected schema."""

    error_code = "DECODE_FAILURE"
    default_message = "Could not decode the provider response"


class ProviderResponseError(ProviderError):
    """Exception raised when the provider answers with an error status."""

    error_code = "PROVIDER_RESPONSE_ERROR"
    default_message = "The provider rejected the request"

    def __init__(
        self,
        message: str | None = None,
        status: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = dict(details or {})
        if status:
            details["status"] = status
        super().__init__(message, details)
