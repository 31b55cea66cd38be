"""``sparkmail config``: print the merged configuration."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from sparkmail.domain.enums import OutputFormat

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)


@click.command("config", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="human (TOML-like, with provenance) or json",
)
@click.option("--section", default=None, metavar="NAME", help="Only show one section, e.g. 'sparkpost'")
@click.option("--profile", default=None, metavar="NAME", help="Reload configuration for this profile instead")
@click.pass_context
def cli_config(ctx: click.Context, output_format: str, section: str | None, profile: str | None) -> None:
    """Show the configuration sparkmail would use.

    Sources merge as defaults, app, host, user, .env, then environment
    variables. ``sparkpost.api_key`` is masked.
    """
    cli_ctx = get_cli_context(ctx)
    config, effective_profile = cli_ctx.config_for(profile)
    fmt = OutputFormat(output_format.lower())

    with lib_log_rich.runtime.bind(job_id="cli-config", extra={"command": "config", "profile": effective_profile}):
        logger.info("Displaying configuration", extra={"section": section, "format": fmt.value})
        click.echo()
        try:
            cli_ctx.services.display_config(config, output_format=fmt, section=section, profile=effective_profile)
        except ValueError as exc:
            click.echo(f"\nError: {exc}", err=True)
            raise SystemExit(ExitCode.INVALID_ARGUMENT) from exc


__all__ = ["cli_config"]
