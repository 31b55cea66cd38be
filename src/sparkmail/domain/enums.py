"""Enumerations shared between the CLI and the config adapter."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """How ``sparkmail config`` renders the merged configuration.

    A ``str`` subclass, so members compare equal to the Click choice values.

    Example:
        >>> OutputFormat("json") is OutputFormat.JSON
        True
        >>> OutputFormat.HUMAN == "human"
        True
    """

    HUMAN = "human"
    JSON = "json"


__all__ = ["OutputFormat"]
