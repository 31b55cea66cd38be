"""Static package metadata surfaced to CLI commands and documentation.

Values here mirror ``pyproject.toml``; keep them in sync when bumping the
version.
"""

from __future__ import annotations

name = "sparkmail"
title = "Deliver email through the SparkPost transmissions API"
version = "0.1.0"
homepage = "https://github.com/sparkmail/sparkmail"
author = "sparkmail contributors"
author_email = "maintainers@sparkmail.dev"
shell_command = "sparkmail"

#: Identifiers used by lib_layered_config to locate configuration files.
LAYEREDCONF_VENDOR = "sparkmail"
LAYEREDCONF_APP = "sparkmail"
LAYEREDCONF_SLUG = "sparkmail"


def print_info() -> None:
    """Print the summarised metadata block used by the ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for sparkmail:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))
