"""POSIX-conventional exit codes for CLI error paths.

Every ``SystemExit`` raised by a CLI command carries one of these values
instead of a bare ``1``. Signal codes are informational only;
``lib_cli_exit_tools`` translates signals itself.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes used by sparkmail.

    Values follow sysexits.h and errno conventions where applicable:

    * 0-1: generic success / failure
    * 2: ENOENT (missing attachment file)
    * 22: EINVAL
    * 69: EX_UNAVAILABLE (SparkPost rejected or unreachable)
    * 78: EX_CONFIG (no API key, no sender)
    * 128+N: signal N (informational only)

    Example:
        >>> int(ExitCode.DELIVERY_FAILURE)
        69
        >>> ExitCode.CONFIG_ERROR
        <ExitCode.CONFIG_ERROR: 78>
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    FILE_NOT_FOUND = 2
    INVALID_ARGUMENT = 22
    DELIVERY_FAILURE = 69
    CONFIG_ERROR = 78
    SIGNAL_INT = 130
    BROKEN_PIPE = 141
    SIGNAL_TERM = 143


__all__ = ["ExitCode"]
