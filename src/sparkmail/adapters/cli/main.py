"""Process-level entry: run the group and turn every outcome into an exit code.

Shared by the ``sparkmail`` console script and ``python -m sparkmail``.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

import lib_log_rich.runtime
import rich_click as click

from sparkmail import __init__conf__

from .exit_codes import ExitCode
from .tracebacks import report_exception, restore_traceback_state, snapshot_traceback_state

if TYPE_CHECKING:
    from sparkmail.composition import AppServices


def _invoke(args: list[str], services_factory: Callable[[], AppServices]) -> int:
    from .root import cli

    try:
        cli.main(args=args, prog_name=__init__conf__.shell_command, obj=services_factory, standalone_mode=False)
    except click.exceptions.Exit as exc:
        return exc.exit_code
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except BaseException as exc:  # noqa: BLE001
        return report_exception(exc)
    return ExitCode.SUCCESS


def _shutdown_logging() -> None:
    # Worker threads share the runtime; only the main thread may stop it.
    if threading.current_thread() is threading.main_thread() and lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.shutdown()


def main(
    argv: Sequence[str] | None = None,
    *,
    restore_traceback: bool = True,
    services_factory: Callable[[], AppServices] | None = None,
) -> int:
    """Run ``sparkmail`` with *argv* and return the process exit code.

    Args:
        argv: Arguments without the program name; None reads ``sys.argv``.
        restore_traceback: Put the traceback flags back as they were before.
        services_factory: Builds the AppServices for this run, normally
            :func:`sparkmail.composition.build_production`.

    Raises:
        ValueError: If no services_factory is given.
    """
    if services_factory is None:
        raise ValueError("services_factory is required; pass sparkmail.composition.build_production")

    args = list(argv) if argv is not None else sys.argv[1:]
    saved = snapshot_traceback_state()
    try:
        return _invoke(args, services_factory)
    finally:
        if restore_traceback:
            restore_traceback_state(saved)
        _shutdown_logging()


__all__ = ["main"]
