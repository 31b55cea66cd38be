"""lib_layered_config integration: load the layered config and print it."""

from __future__ import annotations

from .display import display_config
from .loader import clear_config_cache, get_config, get_default_config_path

__all__ = [
    "clear_config_cache",
    "display_config",
    "get_config",
    "get_default_config_path",
]
