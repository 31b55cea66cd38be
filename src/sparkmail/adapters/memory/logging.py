"""Logging stand-in for tests: lib_log_rich is never started."""

from __future__ import annotations

from lib_layered_config import Config


def init_logging_in_memory(config: Config) -> None:
    """Accept *config* and do nothing."""


__all__ = ["init_logging_in_memory"]
