"""Email delivery CLI commands.

Contents:
    * :func:`.send_email.cli_send_email` - Compose and deliver an email through SparkPost.
"""

from __future__ import annotations

from ._common import filter_sentinels
from .send_email import cli_send_email

__all__ = ["cli_send_email", "filter_sentinels"]
