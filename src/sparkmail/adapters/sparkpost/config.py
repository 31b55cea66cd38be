"""SparkPost configuration model and loader.

Provides the SparkPostConfig Pydantic model for validated, immutable adapter
settings, the loader that builds it from a configuration dictionary, and
:func:`handle_config`, which enforces that an API key is present.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from sparkmail.domain.errors import ConfigurationError

DEFAULT_BASE_URI = "https://api.sparkpost.com"


class SparkPostConfig(BaseModel):
    """Validated, immutable SparkPost adapter configuration.

    Example:
        >>> config = SparkPostConfig(api_key="123_abc", request_headers={"X-MSYS-SUBACCOUNT": "123"})
        >>> config.base_uri
        'https://api.sparkpost.com'
        >>> config.request_headers
        {'X-MSYS-SUBACCOUNT': '123'}
    """

    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    base_uri: str = DEFAULT_BASE_URI
    request_headers: dict[str, str] = Field(default_factory=dict)
    timeout: float = 30.0

    # Defaults used by the CLI when composing a message
    from_address: str | None = None
    recipients: list[str] = Field(default_factory=list)

    @field_validator("api_key", "from_address", mode="before")
    @classmethod
    def _coerce_empty_string_to_none(cls, v: Any) -> Any:
        """Treat empty or whitespace-only strings from config files as "not set"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("base_uri", mode="before")
    @classmethod
    def _coerce_blank_base_uri(cls, v: Any) -> Any:
        """Fall back to the public endpoint when the override is blank.

        Examples:
            >>> SparkPostConfig._coerce_blank_base_uri("")
            'https://api.sparkpost.com'
            >>> SparkPostConfig._coerce_blank_base_uri("http://localhost:4000/")
            'http://localhost:4000/'
        """
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_BASE_URI
        return v

    @field_validator("request_headers", mode="before")
    @classmethod
    def _coerce_header_pairs(cls, v: Any) -> Any:
        """Accept a table or a list of ``[name, value]`` pairs.

        TOML tables arrive as dicts; lists of pairs keep the order callers
        wrote them in.

        Examples:
            >>> SparkPostConfig._coerce_header_pairs([["X-MSYS-SUBACCOUNT", "123"]])
            {'X-MSYS-SUBACCOUNT': '123'}
            >>> SparkPostConfig._coerce_header_pairs(None)
            {}
        """
        if v is None:
            return {}
        if isinstance(v, list):
            pairs = cast(list[Any], v)
            headers: dict[str, Any] = {}
            for pair in pairs:
                if not isinstance(pair, (list, tuple)) or len(cast(list[Any], pair)) != 2:
                    raise ValueError(f"request header must be a [name, value] pair, got {pair!r}")
                name, value = cast(tuple[Any, Any], tuple(pair))
                headers[str(name)] = value
            return headers
        return v

    @field_validator("recipients", mode="before")
    @classmethod
    def _coerce_string_to_list(cls, v: Any) -> list[str]:
        """Coerce single strings (e.g. from environment variables) to lists.

        Examples:
            >>> SparkPostConfig._coerce_string_to_list("ops@example.com")
            ['ops@example.com']
            >>> SparkPostConfig._coerce_string_to_list("")
            []
        """
        if isinstance(v, str):
            return [v] if v.strip() else []
        if isinstance(v, list):
            return cast(list[str], v)
        return []

    @model_validator(mode="after")
    def _validate_timeout(self) -> SparkPostConfig:
        """Reject non-positive timeouts."""
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        return self

    @property
    def transmissions_url(self) -> str:
        """Full URL of the transmissions endpoint.

        Example:
            >>> SparkPostConfig(base_uri="http://localhost:4000/").transmissions_url
            'http://localhost:4000/api/v1/transmissions'
        """
        return f"{self.base_uri.rstrip('/')}/api/v1/transmissions"

    def __repr__(self) -> str:
        """Return string representation with api_key and header values redacted.

        Header names stay visible; their values may carry credentials such
        as subaccount tokens.

        Example:
            >>> config = SparkPostConfig(api_key="secret123", request_headers={"X-MSYS-SUBACCOUNT": "42"})
            >>> "secret123" in repr(config)
            False
            >>> "request_headers={'X-MSYS-SUBACCOUNT': '[REDACTED]'}" in repr(config)
            True
        """
        fields: list[str] = []
        for name, value in self:
            if name == "api_key" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            elif name == "request_headers":
                masked = {header: "[REDACTED]" for header in value}
                fields.append(f"{name}={masked!r}")
            else:
                fields.append(f"{name}={value!r}")
        return f"SparkPostConfig({', '.join(fields)})"

    __str__ = __repr__


def handle_config(config: SparkPostConfig) -> str:
    """Return the API key, failing fast when it is missing.

    Args:
        config: Adapter configuration to check.

    Returns:
        The configured API key.

    Raises:
        ConfigurationError: When no API key is set.

    Example:
        >>> handle_config(SparkPostConfig(api_key="123_abc"))
        '123_abc'
        >>> handle_config(SparkPostConfig())  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ConfigurationError: There was no API key set for the SparkPost adapter.
    """
    if config.api_key is None:
        raise ConfigurationError(
            "There was no API key set for the SparkPost adapter. "
            "Set sparkpost.api_key in your configuration. "
            f"Here are the config options that were passed in: {config!r}"
        )
    return config.api_key


def load_sparkpost_config_from_dict(config_dict: Mapping[str, Any]) -> SparkPostConfig:
    """Load SparkPostConfig from the ``sparkpost`` section of a config dict.

    Args:
        config_dict: Configuration dictionary typically from lib_layered_config.

    Returns:
        Validated configuration with defaults for missing values.

    Example:
        >>> cfg = load_sparkpost_config_from_dict({"sparkpost": {"api_key": "123_abc"}})
        >>> cfg.api_key
        '123_abc'
        >>> load_sparkpost_config_from_dict({}).api_key is None
        True
    """
    section: Any = config_dict.get("sparkpost", {})
    return SparkPostConfig.model_validate(section if section else {})


__all__ = [
    "DEFAULT_BASE_URI",
    "SparkPostConfig",
    "handle_config",
    "load_sparkpost_config_from_dict",
]
