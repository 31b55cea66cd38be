"""Translate an :class:`~sparkmail.domain.email.Email` into a SparkPost transmission.

The transmission is a plain dict ready for JSON serialization::

    {
        "content": {"from", "subject", "text", "html", "reply_to", "headers", "attachments"},
        "recipients": [{"address": {...}, "tags": [...]}, ...],
        ...message params (options, metadata, ...)
    }
"""

from __future__ import annotations

import base64
from collections.abc import Iterable, Mapping
from typing import Any, cast

from sparkmail.domain.email import Address, Attachment, Email

REPLY_TO_HEADER = "reply-to"
CC_HEADER = "CC"
TAGS_PARAM = "tags"


def build_transmission(email: Email) -> dict[str, Any]:
    """Build the JSON-serializable transmission payload for *email*.

    Example:
        >>> from sparkmail.domain.email import new_email
        >>> payload = build_transmission(new_email(sender="foo@bar.com", to=["to@bar.com"], subject="Hi"))
        >>> payload["content"]["from"]
        {'name': None, 'email': 'foo@bar.com'}
        >>> payload["recipients"]
        [{'address': {'name': None, 'email': 'to@bar.com'}}]
    """
    transmission: dict[str, Any] = {
        "content": {
            "from": _format_address(email.sender) if email.sender is not None else None,
            "subject": email.subject,
            "text": email.text_body,
            "html": email.html_body,
            "reply_to": _extract_reply_to(email.headers),
            "headers": _content_headers(email),
            "attachments": [_format_attachment(attachment) for attachment in email.attachments],
        },
        "recipients": _recipients(email),
    }
    return _apply_message_params(transmission, email.message_params)


def _format_address(address: Address) -> dict[str, Any]:
    return {"name": address.name, "email": address.email}


def _format_attachment(attachment: Attachment) -> dict[str, str]:
    """Encode one attachment; filename and type pass through unchanged.

    Example:
        >>> _format_attachment(Attachment("a.txt", "text/plain", b"Test Attachment\\n"))
        {'type': 'text/plain', 'name': 'a.txt', 'data': 'VGVzdCBBdHRhY2htZW50Cg=='}
    """
    return {
        "type": attachment.content_type,
        "name": attachment.filename,
        "data": base64.b64encode(attachment.data).decode("ascii"),
    }


def _extract_reply_to(headers: Mapping[str, str]) -> str | None:
    for name, value in headers.items():
        if name.lower() == REPLY_TO_HEADER:
            return value
    return None


def _join_emails(addresses: Iterable[Address]) -> str:
    return ",".join(address.email for address in addresses)


def _content_headers(email: Email) -> dict[str, str]:
    """Headers sent in ``content.headers``.

    Reply-To is dropped (it travels as ``content.reply_to``). When the email
    has cc recipients and no explicit CC header, a CC header listing them is
    added so clients display the carbon copy.

    Example:
        >>> from sparkmail.domain.email import new_email
        >>> _content_headers(new_email(cc=["cc@bar.com"], headers={"Reply-To": "r@foo.com"}))
        {'CC': 'cc@bar.com'}
    """
    headers = {name: value for name, value in email.headers.items() if name.lower() != REPLY_TO_HEADER}
    if email.cc and not any(name.lower() == CC_HEADER.lower() for name in headers):
        headers[CC_HEADER] = _join_emails(email.cc)
    return headers


def _recipients(email: Email) -> list[dict[str, Any]]:
    """All recipients: to first, then cc, then bcc.

    Carbon-copy recipients carry ``header_to`` so SparkPost shows the
    primary recipients in their To header.
    """
    header_to = _join_emails(email.to)
    recipients: list[dict[str, Any]] = [{"address": _format_address(address)} for address in email.to]
    for address in (*email.cc, *email.bcc):
        recipients.append({"address": {**_format_address(address), "header_to": header_to}})
    return recipients


def _apply_message_params(transmission: dict[str, Any], params: Mapping[str, Any]) -> dict[str, Any]:
    """Merge provider params into the transmission.

    ``tags`` is copied onto every recipient entry; everything else is
    deep-merged at the top level.
    """
    for key, value in params.items():
        if key == TAGS_PARAM:
            tags = [value] if isinstance(value, str) else list(cast(Iterable[str], value))
            for recipient in transmission["recipients"]:
                recipient[TAGS_PARAM] = list(tags)
        else:
            transmission[key] = _deep_merge(transmission.get(key), value)
    return transmission


def _deep_merge(existing: Any, incoming: Any) -> Any:
    """Merge *incoming* into *existing* when both are dicts, else replace.

    Example:
        >>> _deep_merge({"a": 1, "b": {"c": 2}}, {"b": {"d": 3}})
        {'a': 1, 'b': {'c': 2, 'd': 3}}
        >>> _deep_merge({"a": 1}, 5)
        5
    """
    if isinstance(existing, dict) and isinstance(incoming, Mapping):
        merged = dict(cast(dict[str, Any], existing))
        for key, value in cast(Mapping[str, Any], incoming).items():
            merged[key] = _deep_merge(merged.get(key), value)
        return merged
    if isinstance(incoming, Mapping):
        return _deep_merge({}, incoming)
    return incoming


__all__ = ["build_transmission"]
