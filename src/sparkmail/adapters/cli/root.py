"""The ``sparkmail`` command group.

Its callback runs before every subcommand: it builds the services from the
factory Click received as ``obj``, loads the layered configuration for
``--profile``, starts logging and leaves a :class:`~.context.CLIContext`
for the subcommand.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import rich_click as click

from sparkmail import __init__conf__

from .commands import cli_config, cli_fail, cli_info, cli_send_email
from .constants import CLICK_CONTEXT_SETTINGS
from .context import store_cli_context
from .tracebacks import apply_traceback_preferences

if TYPE_CHECKING:
    from sparkmail.composition import AppServices


def _build_services(ctx: click.Context) -> AppServices:
    factory = ctx.obj
    if not callable(factory):
        raise RuntimeError("No services factory in Click obj; run the CLI through sparkmail.adapters.cli.main")
    return factory()  # type: ignore[no-any-return]


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    default=False,
    help="Print the full Python traceback when a command fails",
)
@click.option(
    "--profile",
    metavar="NAME",
    default=None,
    help="Configuration profile to load (e.g. 'staging')",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, profile: str | None) -> None:
    services = _build_services(ctx)
    config = services.get_config(profile=profile)
    services.init_logging(config)
    store_cli_context(ctx, traceback=traceback, config=config, services=services, profile=profile)
    apply_traceback_preferences(traceback)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


for _command in (cli_info, cli_fail, cli_config, cli_send_email):
    cli.add_command(_command)


__all__ = ["cli"]
