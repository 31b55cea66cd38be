"""Traceback switches shared with lib_cli_exit_tools.

``--traceback`` flips two process-wide settings. :func:`~.main.main` takes a
snapshot before each run and puts it back afterwards, so an embedding caller
never inherits the flag from a previous invocation.
"""

from __future__ import annotations

from typing import Final, NamedTuple

import lib_cli_exit_tools

#: Characters of a failure message printed without ``--traceback``.
SUMMARY_LIMIT: Final[int] = 500

#: Characters printed when ``--traceback`` is active.
VERBOSE_LIMIT: Final[int] = 10_000


class TracebackState(NamedTuple):
    """The two lib_cli_exit_tools flags ``--traceback`` controls."""

    enabled: bool
    force_color: bool


def apply_traceback_preferences(enabled: bool) -> None:
    """Turn full tracebacks, and forced colour with them, on or off.

    Example:
        >>> saved = snapshot_traceback_state()
        >>> apply_traceback_preferences(True)
        >>> snapshot_traceback_state()
        TracebackState(enabled=True, force_color=True)
        >>> restore_traceback_state(saved)
    """
    lib_cli_exit_tools.config.traceback = bool(enabled)
    lib_cli_exit_tools.config.traceback_force_color = bool(enabled)


def snapshot_traceback_state() -> TracebackState:
    settings = lib_cli_exit_tools.config
    return TracebackState(
        enabled=bool(getattr(settings, "traceback", False)),
        force_color=bool(getattr(settings, "traceback_force_color", False)),
    )


def restore_traceback_state(state: tuple[bool, bool]) -> None:
    """Put back flags captured by :func:`snapshot_traceback_state`."""
    enabled, force_color = state
    lib_cli_exit_tools.config.traceback = enabled
    lib_cli_exit_tools.config.traceback_force_color = force_color


def report_exception(exc: BaseException) -> int:
    """Print *exc* through lib_cli_exit_tools and return its exit code.

    The message is truncated to :data:`SUMMARY_LIMIT` characters unless
    tracebacks are enabled.
    """
    verbose = snapshot_traceback_state().enabled
    lib_cli_exit_tools.print_exception_message(
        trace_back=verbose,
        length_limit=VERBOSE_LIMIT if verbose else SUMMARY_LIMIT,
    )
    return lib_cli_exit_tools.get_system_exit_code(exc)


__all__ = [
    "SUMMARY_LIMIT",
    "VERBOSE_LIMIT",
    "TracebackState",
    "apply_traceback_preferences",
    "report_exception",
    "restore_traceback_state",
    "snapshot_traceback_state",
]
