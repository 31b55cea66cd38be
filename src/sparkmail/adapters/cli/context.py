"""State the root group hands down to subcommands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import rich_click as click
from lib_layered_config import Config

if TYPE_CHECKING:
    from sparkmail.adapters.sparkpost.config import SparkPostConfig
    from sparkmail.composition import AppServices


@dataclass(slots=True)
class CLIContext:
    """Everything a subcommand needs from the root invocation.

    ``config`` is the layered configuration loaded for ``profile``;
    ``services`` are the port implementations picked by the entry point.
    """

    traceback: bool
    config: Config
    services: AppServices
    profile: str | None = None

    def sparkpost_config(self) -> SparkPostConfig:
        """Validate the ``[sparkpost]`` section of the loaded configuration."""
        return self.services.load_sparkpost_config_from_dict(self.config.as_dict())

    def config_for(self, profile: str | None) -> tuple[Config, str | None]:
        """Return the config and profile in effect for a subcommand.

        A subcommand-level ``--profile`` reloads the configuration; without
        one the root's config is reused.
        """
        if profile:
            return self.services.get_config(profile=profile), profile
        return self.config, self.profile


def store_cli_context(
    ctx: click.Context,
    *,
    traceback: bool,
    config: Config,
    services: AppServices,
    profile: str | None = None,
) -> CLIContext:
    """Replace the services factory in ``ctx.obj`` with a :class:`CLIContext`."""
    cli_ctx = CLIContext(traceback=traceback, config=config, services=services, profile=profile)
    ctx.obj = cli_ctx
    return cli_ctx


def get_cli_context(ctx: click.Context) -> CLIContext:
    """Find the :class:`CLIContext` stored by the root group.

    Raises:
        RuntimeError: When the command runs outside the ``sparkmail`` group.
    """
    cli_ctx = ctx.find_object(CLIContext)
    if cli_ctx is None:
        raise RuntimeError("sparkmail commands must be invoked through the root `cli` group")
    return cli_ctx


__all__ = [
    "CLIContext",
    "get_cli_context",
    "store_cli_context",
]
