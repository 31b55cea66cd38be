"""Application ports - callable Protocol definitions for adapter functions.

Each Protocol class defines a ``__call__`` method whose signature exactly
matches the corresponding adapter function. Module-level functions satisfy
these protocols automatically via structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``,
    ``SparkPostConfig``, ``TransmissionResponse``, ``httpx.Client``) are
    imported under ``TYPE_CHECKING`` only.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.email import Email
from ..domain.enums import OutputFormat

if TYPE_CHECKING:
    import httpx
    from lib_layered_config import Config

    from ..adapters.sparkpost.config import SparkPostConfig
    from ..adapters.sparkpost.transport import TransmissionResponse


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class DisplayConfig(Protocol):
    """Display the provided configuration in the requested format."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class DeliverEmail(Protocol):
    """Deliver a single email through SparkPost."""

    def __call__(
        self,
        email: Email,
        config: SparkPostConfig,
        *,
        client: httpx.Client | None = ...,
    ) -> TransmissionResponse: ...


class LoadSparkPostConfigFromDict(Protocol):
    """Load SparkPostConfig from a configuration dictionary."""

    def __call__(self, config_dict: Mapping[str, Any]) -> SparkPostConfig: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "DeliverEmail",
    "DisplayConfig",
    "GetConfig",
    "InitLogging",
    "LoadSparkPostConfigFromDict",
]
