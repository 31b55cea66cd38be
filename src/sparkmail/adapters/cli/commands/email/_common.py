"""Shared helpers for the delivery CLI commands.

Config override handling, address parsing and the mapping from delivery
errors to exit codes.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from email.utils import parseaddr
from typing import Any

import rich_click as click
from pydantic import ValidationError

from sparkmail import __init__conf__
from sparkmail.adapters.sparkpost.config import SparkPostConfig
from sparkmail.adapters.sparkpost.transport import TransmissionResponse
from sparkmail.domain.email import Address
from sparkmail.domain.errors import ApiError, ConfigurationError, DeliveryError

from ...constants import DEVELOPMENT_MODE_ENV
from ...exit_codes import ExitCode

logger = logging.getLogger(__name__)


def filter_sentinels(**kwargs: Any) -> dict[str, Any]:
    """Drop unset options (None or empty tuple); turn tuples into lists.

    Example:
        >>> filter_sentinels(api_key=None, base_uri="http://localhost", recipients=())
        {'base_uri': 'http://localhost'}
    """
    result: dict[str, Any] = {}
    for k, v in kwargs.items():
        if v is None or v == ():
            continue
        result[k] = list(v) if isinstance(v, tuple) else v
    return result


def parse_request_header(ctx: click.Context, param: click.Parameter, values: tuple[str, ...]) -> dict[str, str]:
    """Click callback turning ``NAME=VALUE`` strings into a header dict.

    Raises:
        click.BadParameter: When an item has no ``=`` or an empty name.
    """
    headers: dict[str, str] = {}
    for raw in values:
        name, sep, value = raw.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected NAME=VALUE, got {raw!r}", ctx=ctx, param=param)
        headers[name.strip()] = value
    return headers


def parse_address(value: str) -> Address:
    """Accept ``email`` or ``Display Name <email>``.

    Example:
        >>> parse_address("Jane Doe <jane@example.com>")
        Address(name='Jane Doe', email='jane@example.com')
        >>> parse_address("jane@example.com")
        Address(name=None, email='jane@example.com')
    """
    name, address = parseaddr(value)
    if not address:
        return Address(name=None, email=value)
    return Address(name=name or None, email=address)


def apply_validated_overrides(base_config: SparkPostConfig, overrides: dict[str, Any]) -> SparkPostConfig:
    """Merge CLI overrides and re-run validation.

    ``request_headers`` from the command line extend the configured ones;
    other overrides replace the configured value.

    Raises:
        ValidationError: When an override is invalid (e.g. negative timeout).
    """
    if not overrides:
        return base_config
    merged = base_config.model_dump()
    extra_headers = overrides.pop("request_headers", None)
    if extra_headers:
        merged["request_headers"] = {**merged["request_headers"], **extra_headers}
    merged.update(overrides)
    return SparkPostConfig.model_validate(merged)


def handle_validation_error(exc: ValidationError) -> None:
    """Report an invalid option value and exit with INVALID_ARGUMENT."""
    _handle_send_error(exc, "Invalid configuration", "Invalid option value", exit_code=ExitCode.INVALID_ARGUMENT)


def require_sender(from_address: str | None) -> Address:
    """Return the sender, exiting with CONFIG_ERROR when none is known."""
    if from_address:
        return parse_address(from_address)
    logger.error("No sender address configured")
    click.echo(
        "\nError: No sender address. Pass --from or set sparkpost.from_address in your config file.", err=True
    )
    click.echo(f"See: {__init__conf__.shell_command} config --section sparkpost", err=True)
    raise SystemExit(ExitCode.CONFIG_ERROR)


def execute_with_delivery_error_handling(
    *,
    operation: Callable[[], TransmissionResponse],
    recipients: list[str],
) -> None:
    """Run a delivery and map its failures onto exit codes.

    Most specific first:

    1. ConfigurationError -> CONFIG_ERROR (78)
    2. ValueError -> INVALID_ARGUMENT (22)
    3. FileNotFoundError -> FILE_NOT_FOUND (2)
    4. DeliveryError (including ApiError) -> DELIVERY_FAILURE (69)
    5. anything else -> GENERAL_ERROR (1), re-raised when DEVELOPMENT_MODE is set

    Raises:
        SystemExit: On any failure.
    """
    try:
        response = operation()
    except ConfigurationError as exc:
        _handle_send_error(exc, "Delivery configuration error", "Configuration error", exit_code=ExitCode.CONFIG_ERROR)
    except ValueError as exc:
        _handle_send_error(
            exc, "Invalid email parameters", "Invalid email parameters", exit_code=ExitCode.INVALID_ARGUMENT
        )
    except FileNotFoundError as exc:
        _handle_send_error(exc, "Attachment file not found", "Attachment file not found", exit_code=ExitCode.FILE_NOT_FOUND)
    except ApiError as exc:
        _handle_send_error(
            exc, f"{exc.service_name} rejected the email", "Failed to send email", exit_code=ExitCode.DELIVERY_FAILURE
        )
    except DeliveryError as exc:
        _handle_send_error(exc, "Delivery failed", "Failed to send email", exit_code=ExitCode.DELIVERY_FAILURE)
    except Exception as exc:
        if os.environ.get(DEVELOPMENT_MODE_ENV):
            raise
        _handle_send_error(
            exc,
            "Unexpected error sending email",
            "Unexpected error",
            exit_code=ExitCode.GENERAL_ERROR,
            log_traceback=True,
        )
    else:
        _report_success(response, recipients)


def _transmission_id(response: TransmissionResponse) -> str | None:
    """Return ``results.id`` from a SparkPost reply, when present.

    Example:
        >>> _transmission_id(TransmissionResponse(200, '{"results": {"id": "11668787484950529"}}'))
        '11668787484950529'
        >>> _transmission_id(TransmissionResponse(200, "SENT")) is None
        True
    """
    data = response.data
    if not isinstance(data, dict):
        return None
    results = data.get("results")
    if not isinstance(results, dict):
        return None
    transmission_id = results.get("id")
    return str(transmission_id) if transmission_id is not None else None


def _report_success(response: TransmissionResponse, recipients: list[str]) -> None:
    transmission_id = _transmission_id(response)
    click.echo("\nEmail sent successfully!")
    if transmission_id:
        click.echo(f"Transmission id: {transmission_id}")
    logger.info(
        "Email sent via CLI",
        extra={"recipients": recipients, "status_code": response.status_code, "transmission_id": transmission_id},
    )


def _handle_send_error(
    exc: Exception,
    log_message: str,
    user_message: str,
    *,
    exit_code: ExitCode = ExitCode.GENERAL_ERROR,
    log_traceback: bool = False,
) -> None:
    """Log, tell the user, and exit with *exit_code*.

    Raises:
        SystemExit: Always.
    """
    logger.error(
        log_message,
        extra={"error": str(exc), "error_type": type(exc).__name__},
        exc_info=log_traceback,
    )
    click.echo(f"\nError: {user_message} - {exc}", err=True)
    raise SystemExit(exit_code)


__all__ = [
    "apply_validated_overrides",
    "execute_with_delivery_error_handling",
    "filter_sentinels",
    "handle_validation_error",
    "parse_address",
    "parse_request_header",
    "require_sender",
]
