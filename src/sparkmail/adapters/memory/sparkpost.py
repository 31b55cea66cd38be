"""In-memory SparkPost adapter for testing.

Provides a spy that satisfies the DeliverEmail protocol but performs no HTTP
requests. It still builds the real transmission payload, so tests can assert
on exactly what would have been sent.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from sparkmail.domain.email import Email

from ..sparkpost.config import SparkPostConfig, handle_config
from ..sparkpost.payload import build_transmission
from ..sparkpost.transport import TransmissionResponse


@dataclass(frozen=True, slots=True)
class CapturedTransmission:
    """One recorded call to :meth:`TransmissionSpy.deliver`."""

    email: Email
    config: SparkPostConfig
    payload: dict[str, Any]


def _empty_transmissions() -> list[CapturedTransmission]:
    return []


@dataclass
class TransmissionSpy:
    """Captures deliveries for test assertions.

    Each test should create its own spy to avoid cross-test pollution.

    Attributes:
        transmissions: Recorded deliveries, in call order.
        raise_exception: When set, ``deliver`` raises it after recording.
        response: Response returned on success.

    Example:
        >>> from sparkmail.domain.email import new_email
        >>> spy = TransmissionSpy()
        >>> spy.deliver(new_email(to="a@b.com"), SparkPostConfig(api_key="k")).status_code
        200
        >>> len(spy.transmissions)
        1
    """

    transmissions: list[CapturedTransmission] = field(default_factory=_empty_transmissions)
    raise_exception: Exception | None = None
    response: TransmissionResponse = field(
        default_factory=lambda: TransmissionResponse(status_code=200, body='{"results": {"id": "spy"}}')
    )

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.transmissions.clear()
        self.raise_exception = None

    def deliver(
        self,
        email: Email,
        config: SparkPostConfig,
        *,
        client: httpx.Client | None = None,
    ) -> TransmissionResponse:
        """Record the delivery and return the canned response.

        Raises:
            ConfigurationError: When the config has no API key, as production does.
            Exception: ``raise_exception`` when set.
        """
        handle_config(config)
        self.transmissions.append(CapturedTransmission(email=email, config=config, payload=build_transmission(email)))
        if self.raise_exception is not None:
            raise self.raise_exception
        return self.response


def load_sparkpost_config_from_dict_in_memory(config_dict: Mapping[str, Any]) -> SparkPostConfig:
    """Parse SparkPost config from dict using the real Pydantic model."""
    section = config_dict.get("sparkpost", {})
    return SparkPostConfig.model_validate(section if section else {})


__all__ = [
    "CapturedTransmission",
    "TransmissionSpy",
    "load_sparkpost_config_from_dict_in_memory",
]
