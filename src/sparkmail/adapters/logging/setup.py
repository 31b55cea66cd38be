"""Centralized logging initialization for all entry points.

Single place that turns the ``[lib_log_rich]`` config section into a
lib_log_rich runtime, so module execution, console scripts and tests share
the same setup and initialization happens exactly once.

Contents:
    * :class:`LoggingConfigModel` - validation model for the config section.
    * :func:`init_logging` - idempotent logging initialization.
"""

from __future__ import annotations

import logging
from typing import cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from sparkmail import __init__conf__

#: Client libraries that would repeat every SparkPost request at INFO.
_QUIET_LOGGERS = ("httpx", "httpcore")


class LoggingConfigModel(BaseModel):
    """Pydantic model for the ``[lib_log_rich]`` config section.

    Extra fields pass through to ``lib_log_rich.runtime.RuntimeConfig``.

    Example:
        >>> LoggingConfigModel(service="sparkmail", environment="staging").environment
        'staging'
        >>> LoggingConfigModel().environment
        'prod'
    """

    service: str | None = None
    environment: str = "prod"

    model_config = ConfigDict(extra="allow")


def _build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    """Map the ``[lib_log_rich]`` section onto a RuntimeConfig.

    ``service`` defaults to the package name when not configured.
    """
    log_raw: object = config.get("lib_log_rich", default={})
    parsed = LoggingConfigModel.model_validate(cast("dict[str, object]", log_raw) if log_raw else {})

    service = parsed.service or __init__conf__.name
    extra_config = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)

    return lib_log_rich.runtime.RuntimeConfig(
        service=service,
        environment=parsed.environment,
        **extra_config,
    )


def init_logging(config: Config) -> None:
    """Initialize the lib_log_rich runtime once and bridge stdlib logging.

    Loads .env files so LOG_* variables are honoured, then configures the
    runtime from *config*. Subsequent calls return immediately. Adapter
    modules log through ``logging.getLogger(__name__)``; the bridge routes
    those records into lib_log_rich.

    Args:
        config: Already-loaded layered configuration object.

    Example:
        >>> from lib_layered_config import Config
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = [
    "LoggingConfigModel",
    "init_logging",
]
