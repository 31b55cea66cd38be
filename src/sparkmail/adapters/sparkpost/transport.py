"""SparkPost HTTP transport.

Posts a transmission to the SparkPost API via httpx and turns non-success
responses into :class:`~sparkmail.domain.errors.ApiError` with the API key
redacted.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx
import orjson

from sparkmail.domain.email import Email
from sparkmail.domain.errors import ApiError, DeliveryError

from .config import SparkPostConfig, handle_config
from .payload import build_transmission

logger = logging.getLogger(__name__)

SERVICE_NAME = "SparkPost"
FILTERED = "[FILTERED]"


@dataclass(frozen=True, slots=True)
class TransmissionResponse:
    """Successful response from the transmissions endpoint."""

    status_code: int
    body: str

    @property
    def data(self) -> Any:
        """Decoded JSON body, or None when the body is not JSON.

        Example:
            >>> TransmissionResponse(200, '{"results": {"id": "1"}}').data
            {'results': {'id': '1'}}
            >>> TransmissionResponse(200, "SENT").data is None
            True
        """
        try:
            return orjson.loads(self.body)
        except orjson.JSONDecodeError:
            return None


def redact(text: str, api_key: str) -> str:
    """Replace every occurrence of *api_key* in *text* with ``[FILTERED]``.

    Example:
        >>> redact("bad key 123_abc", "123_abc")
        'bad key [FILTERED]'
    """
    if not api_key:
        return text
    return text.replace(api_key, FILTERED)


def build_request_headers(api_key: str, config: SparkPostConfig) -> httpx.Headers:
    """Headers for the transmissions request.

    Configured extras are applied after the defaults. Header names match
    case-insensitively, so an extra ``content-type`` replaces the default
    rather than adding a second one.

    Example:
        >>> cfg = SparkPostConfig(api_key="k", request_headers={"content-type": "application/json; charset=utf-8"})
        >>> headers = build_request_headers("k", cfg)
        >>> headers.get_list("Content-Type")
        ['application/json; charset=utf-8']
        >>> headers["authorization"]
        'k'
    """
    headers = httpx.Headers({"Content-Type": "application/json", "Authorization": api_key})
    for name, value in config.request_headers.items():
        headers[name] = value
    return headers


def _inspect(value: Any, depth: int = 0) -> str:
    """Render sent params as ``"name" => value`` pairs for error messages.

    Scalars are JSON encoded; mappings and lists are indented two spaces
    per level.

    Example:
        >>> print(_inspect({"key": "[FILTERED]", "options": {"sandbox": True}, "tags": []}))
        {
          "key" => "[FILTERED]",
          "options" => {
            "sandbox" => true
          },
          "tags" => []
        }
    """
    pad = "  " * (depth + 1)
    closing = "  " * depth
    if isinstance(value, Mapping):
        if not value:
            return "{}"
        pairs = [f"{pad}{_inspect(str(k))} => {_inspect(v, depth + 1)}" for k, v in value.items()]
        return "{\n" + ",\n".join(pairs) + f"\n{closing}}}"
    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        items = [f"{pad}{_inspect(v, depth + 1)}" for v in value]
        return "[\n" + ",\n".join(items) + f"\n{closing}]"
    return orjson.dumps(value).decode("utf-8")


def _api_error_message(status_code: int, response_body: str, params: dict[str, Any], api_key: str) -> str:
    sent = _inspect(params)
    message = (
        f"There was a problem sending the email through the {SERVICE_NAME} API.\n\n"
        f"Response status: {status_code}\n\n"
        f"Here is the response:\n\n{response_body!r}\n\n"
        f"Here are the params we sent:\n\n{sent}\n"
    )
    return redact(message, api_key)


def _raise_api_error(response: httpx.Response, params: dict[str, Any], api_key: str) -> None:
    """Raise ApiError for a non-success response, with credentials filtered."""
    filtered_params = {**params, "key": FILTERED}
    response_body = redact(response.text, api_key)
    logger.error(
        "SparkPost rejected transmission",
        extra={"status_code": response.status_code, "response_body": response_body},
    )
    raise ApiError(
        _api_error_message(response.status_code, response_body, filtered_params, api_key),
        service_name=SERVICE_NAME,
        status_code=response.status_code,
        response_body=response_body,
        params=filtered_params,
    )


def _post(
    client: httpx.Client | None,
    url: str,
    body: bytes,
    headers: httpx.Headers,
    timeout: float,
) -> httpx.Response:
    if client is not None:
        return client.post(url, content=body, headers=headers, timeout=timeout)
    with httpx.Client(timeout=timeout) as owned:
        return owned.post(url, content=body, headers=headers)


def deliver(
    email: Email,
    config: SparkPostConfig,
    *,
    client: httpx.Client | None = None,
) -> TransmissionResponse:
    """Send *email* through the SparkPost transmissions API.

    Args:
        email: Message to deliver.
        config: Adapter configuration (API key, base URI, extra headers).
        client: Optional httpx client to reuse; a short-lived client is
            opened per call otherwise.

    Returns:
        The successful response.

    Raises:
        ConfigurationError: No API key configured. No request is made.
        ApiError: SparkPost answered with a non-2xx status.
        DeliveryError: The request could not be completed (network failure).

    Side Effects:
        One HTTP POST. Logs the attempt at INFO and failures at ERROR.
    """
    api_key = handle_config(config)
    params = build_transmission(email)
    url = config.transmissions_url

    logger.info(
        "Sending transmission",
        extra={
            "url": url,
            "recipient_count": len(params["recipients"]),
            "subject": email.subject,
            "attachment_count": len(email.attachments),
        },
    )

    try:
        response = _post(client, url, orjson.dumps(params), build_request_headers(api_key, config), config.timeout)
    except httpx.TransportError as exc:
        logger.debug("SparkPost transport failed", exc_info=True)
        raise DeliveryError(redact(f"Could not reach {SERVICE_NAME} at {url}: {exc}", api_key)) from exc

    if not response.is_success:
        _raise_api_error(response, params, api_key)

    logger.info("Transmission accepted", extra={"status_code": response.status_code})
    return TransmissionResponse(status_code=response.status_code, body=response.text)


__all__ = [
    "FILTERED",
    "SERVICE_NAME",
    "TransmissionResponse",
    "build_request_headers",
    "deliver",
    "redact",
]
