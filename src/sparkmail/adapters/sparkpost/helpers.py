"""SparkPost-specific message params.

Each helper returns a new :class:`~sparkmail.domain.email.Email` with a
provider param set. The payload builder merges these params into the
transmission (``tags`` go onto every recipient).

Example:
    >>> from sparkmail.domain.email import new_email
    >>> email = mark_transactional(tag(new_email(to="a@b.com"), "welcome"))
    >>> dict(email.message_params)
    {'tags': ['welcome'], 'options': {'transactional': True}}
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any, cast

from sparkmail.domain.email import Email

ParamKey = str | tuple[str, ...]


def put_param(email: Email, key: ParamKey, value: Any) -> Email:
    """Return a copy of *email* with a message param set.

    A tuple key addresses a nested param, creating intermediate dicts.

    Raises:
        TypeError: When an intermediate key already holds a non-dict value.

    Example:
        >>> from sparkmail.domain.email import new_email
        >>> email = put_param(new_email(), ("options", "ip_pool"), "transactional")
        >>> dict(email.message_params)
        {'options': {'ip_pool': 'transactional'}}
    """
    path = (key,) if isinstance(key, str) else tuple(key)
    if not path or not all(path):
        raise ValueError(f"Invalid param key {key!r}")

    params = _copy_params(email.message_params)
    node = params
    for part in path[:-1]:
        existing = node.setdefault(part, {})
        if not isinstance(existing, dict):
            raise TypeError(f"Expected dict at param {part!r}, got {type(existing).__name__}")
        node = cast(dict[str, Any], existing)
    node[path[-1]] = value
    return replace(email, message_params=params)


def _copy_params(params: Mapping[str, Any]) -> dict[str, Any]:
    """Copy nested dicts so the original email stays untouched."""
    copied: dict[str, Any] = {}
    for key, value in params.items():
        copied[key] = _copy_params(cast(Mapping[str, Any], value)) if isinstance(value, Mapping) else value
    return copied


def tag(email: Email, tags: str | Iterable[str]) -> Email:
    """Tag every recipient of *email* with *tags*."""
    tag_list = [tags] if isinstance(tags, str) else list(tags)
    return put_param(email, "tags", tag_list)


def mark_transactional(email: Email) -> Email:
    """Mark *email* as transactional (unsubscribe links are not honoured)."""
    return put_param(email, ("options", "transactional"), True)


def disable_open_tracking(email: Email) -> Email:
    return put_param(email, ("options", "open_tracking"), False)


def disable_click_tracking(email: Email) -> Email:
    return put_param(email, ("options", "click_tracking"), False)


def put_metadata(email: Email, key: str, value: Any) -> Email:
    """Attach transmission-level metadata, echoed back in SparkPost webhooks."""
    return put_param(email, ("metadata", key), value)


def put_substitution_data(email: Email, key: str, value: Any) -> Email:
    return put_param(email, ("substitution_data", key), value)


def set_campaign_id(email: Email, campaign_id: str) -> Email:
    return put_param(email, "campaign_id", campaign_id)


__all__ = [
    "ParamKey",
    "disable_click_tracking",
    "disable_open_tracking",
    "mark_transactional",
    "put_metadata",
    "put_param",
    "put_substitution_data",
    "set_campaign_id",
    "tag",
]
