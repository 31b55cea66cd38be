"""Values shared by every sparkmail command."""

from __future__ import annotations

from typing import Final

#: Click settings applied to the group and each subcommand.
CLICK_CONTEXT_SETTINGS: Final[dict[str, object]] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

#: When this environment variable is set, unexpected ``send-email`` errors
#: propagate with their traceback instead of becoming exit code 1.
DEVELOPMENT_MODE_ENV: Final[str] = "DEVELOPMENT_MODE"

__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "DEVELOPMENT_MODE_ENV",
]
