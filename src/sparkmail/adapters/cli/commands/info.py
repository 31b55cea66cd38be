"""``sparkmail info`` and the ``sparkmail fail`` smoke test."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from sparkmail import __init__conf__

from ..constants import CLICK_CONTEXT_SETTINGS

logger = logging.getLogger(__name__)


@click.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Show package name, version and where it came from."""
    with lib_log_rich.runtime.bind(job_id="cli-info", extra={"command": "info"}):
        logger.debug("Printing package metadata")
        __init__conf__.print_info()


@click.command("fail", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_fail() -> None:
    """Raise RuntimeError to check exit codes and traceback output."""
    with lib_log_rich.runtime.bind(job_id="cli-fail", extra={"command": "fail"}):
        logger.warning("Raising on purpose")
        raise RuntimeError("I should fail")


__all__ = ["cli_fail", "cli_info"]
