"""Command-line interface for sparkmail.

Contents:
    * :mod:`.root` - the ``sparkmail`` group and its global options
    * :mod:`.main` - process entry returning an exit code
    * :mod:`.context` - per-invocation state for subcommands
    * :mod:`.tracebacks` - ``--traceback`` handling via lib_cli_exit_tools
    * :mod:`.commands` - ``info``, ``fail``, ``config`` and ``send-email``
"""

from __future__ import annotations

from .commands import cli_config, cli_fail, cli_info, cli_send_email
from .context import CLIContext, get_cli_context, store_cli_context
from .exit_codes import ExitCode
from .main import main
from .root import cli
from .tracebacks import (
    TracebackState,
    apply_traceback_preferences,
    restore_traceback_state,
    snapshot_traceback_state,
)

__all__ = [
    "CLIContext",
    "ExitCode",
    "TracebackState",
    "apply_traceback_preferences",
    "cli",
    "cli_config",
    "cli_fail",
    "cli_info",
    "cli_send_email",
    "get_cli_context",
    "main",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
]
