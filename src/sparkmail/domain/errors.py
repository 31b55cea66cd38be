"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Raised before any network call when required settings (such as the
    SparkPost API key) are absent. Typically caught at CLI boundaries to
    provide user-friendly error messages.

    Example:
        >>> from sparkmail.domain.errors import ConfigurationError
        >>> err = ConfigurationError("There was no API key set for the SparkPost adapter.")
        >>> str(err)
        'There was no API key set for the SparkPost adapter.'
    """


class DeliveryError(Exception):
    """Email delivery failed before a response could be obtained.

    Raised when the HTTP transport fails (connection refused, timeout, TLS
    errors). The message never contains the API key.

    Example:
        >>> from sparkmail.domain.errors import DeliveryError
        >>> err = DeliveryError("Connection refused by api.sparkpost.com")
        >>> str(err)
        'Connection refused by api.sparkpost.com'
    """


class ApiError(DeliveryError):
    """The provider answered with a non-success HTTP status.

    Carries the status code, the raw response body and the (filtered) params
    that were sent so callers can log or inspect the failure. The message is
    built by the transport with credentials already redacted.

    Example:
        >>> err = ApiError("boom", service_name="SparkPost", status_code=500, response_body="Error!!")
        >>> err.status_code
        500
        >>> isinstance(err, DeliveryError)
        True
    """

    def __init__(
        self,
        message: str,
        *,
        service_name: str,
        status_code: int,
        response_body: str,
        params: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.service_name = service_name
        self.status_code = status_code
        self.response_body = response_body
        self.params: dict[str, Any] = dict(params or {})


__all__ = [
    "ApiError",
    "ConfigurationError",
    "DeliveryError",
]
