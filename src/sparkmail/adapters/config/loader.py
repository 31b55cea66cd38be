"""Layered configuration for sparkmail.

Merge order, lowest precedence first: the bundled ``defaultconfig.toml``,
app, host and user config files, ``.env``, then environment variables of the
form ``SPARKMAIL___<SECTION>__<KEY>`` (``SPARKMAIL___SPARKPOST__API_KEY``
is the usual way to supply the key).
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from lib_layered_config import DEFAULT_MAX_PROFILE_LENGTH, Config, read_config, validate_profile_name

from sparkmail import __init__conf__

_DEFAULT_CONFIG = Path(__file__).with_name("defaultconfig.toml")


def get_default_config_path() -> Path:
    """Path of the defaults shipped inside the package.

    Example:
        >>> get_default_config_path().name
        'defaultconfig.toml'
    """
    return _DEFAULT_CONFIG


@lru_cache(maxsize=4)
def _read_layers(profile: str | None, start_dir: str | None) -> Config:
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        profile=profile,
        default_file=_DEFAULT_CONFIG,
        start_dir=start_dir,
    )


def get_config(*, profile: str | None = None, start_dir: str | None = None) -> Config:
    """Return the merged configuration, read once per (profile, start_dir).

    Args:
        profile: Adds a ``profile/<name>/`` level to every config path,
            e.g. ``staging``.
        start_dir: Where ``.env`` discovery starts; defaults to the cwd.

    Raises:
        ValueError: When *profile* is not a safe profile name.

    Example:
        >>> isinstance(get_config(), Config)
        True
    """
    if profile is not None:
        validate_profile_name(profile, max_length=DEFAULT_MAX_PROFILE_LENGTH)
    return _read_layers(profile, start_dir)


def clear_config_cache() -> None:
    """Forget cached configurations so the next call reads from disk again."""
    _read_layers.cache_clear()


get_config.cache_clear = clear_config_cache  # type: ignore[attr-defined]


__all__ = [
    "clear_config_cache",
    "get_config",
    "get_default_config_path",
]
