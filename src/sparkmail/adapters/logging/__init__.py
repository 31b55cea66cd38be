"""lib_log_rich runtime setup driven by the ``[lib_log_rich]`` config section."""

from __future__ import annotations

from .setup import LoggingConfigModel, init_logging

__all__ = ["LoggingConfigModel", "init_logging"]
