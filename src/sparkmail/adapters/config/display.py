"""Display configuration - delegates to lib_layered_config.

Flushes pending log output first so log lines do not interleave with the
configuration dump. Secret-looking keys such as ``sparkpost.api_key`` are
redacted by lib_layered_config itself.
"""

from __future__ import annotations

import lib_log_rich.runtime
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as _lib_display
from rich.console import Console

from sparkmail.domain.enums import OutputFormat


def display_config(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
    profile: str | None = None,
) -> None:
    """Display configuration using lib_layered_config's Rich display.

    Args:
        config: Already-loaded layered configuration object to display.
        output_format: HUMAN for TOML-like display or JSON.
        section: Optional section name to display only that section.
        console: Optional Rich Console for output, mainly for tests.
        profile: Optional profile name to include in provenance comments.

    Raises:
        ValueError: If a section was requested that doesn't exist.
    """
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()

    lib_format = LibOutputFormat(output_format.value)
    _lib_display(config, output_format=lib_format, section=section, profile=profile, console=console)


__all__ = ["display_config"]
