"""Subcommands of the ``sparkmail`` group."""

from __future__ import annotations

from .config import cli_config
from .email import cli_send_email
from .info import cli_fail, cli_info

__all__ = [
    "cli_config",
    "cli_fail",
    "cli_info",
    "cli_send_email",
]
