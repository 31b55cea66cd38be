"""Provider-neutral email message model.

An :class:`Email` is an immutable value: every composition helper returns a
new instance. Adapters translate it into whatever their provider expects.

Contents:
    * :class:`Address` - Display name plus address.
    * :class:`Attachment` - Filename, MIME type and raw bytes.
    * :class:`Email` - The message itself.
    * :func:`new_email` - Build an Email, normalising address inputs.
    * :func:`put_header` / :func:`put_attachment` - Composition helpers.
"""

from __future__ import annotations

import mimetypes
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Union

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True, slots=True)
class Address:
    """A mailbox: optional display name and the address itself.

    Example:
        >>> Address("Jane", "jane@example.com").email
        'jane@example.com'
        >>> Address(None, "noreply@example.com").name is None
        True
    """

    name: str | None
    email: str


@dataclass(frozen=True, slots=True)
class Attachment:
    """A file attached to an email, held in memory."""

    filename: str
    content_type: str
    data: bytes

    @classmethod
    def from_path(cls, path: str | Path, content_type: str | None = None) -> Attachment:
        """Read *path* into an Attachment, guessing the MIME type from its name.

        Raises:
            FileNotFoundError: When *path* does not exist.

        Example:
            >>> import tempfile, os
            >>> with tempfile.TemporaryDirectory() as tmp:
            ...     p = Path(tmp) / "notes.txt"
            ...     _ = p.write_bytes(b"hi")
            ...     att = Attachment.from_path(p)
            >>> (att.filename, att.content_type, att.data)
            ('notes.txt', 'text/plain', b'hi')
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise FileNotFoundError(f"Attachment not found: {file_path}")
        if content_type is None:
            guessed, _ = mimetypes.guess_type(file_path.name)
            content_type = guessed or DEFAULT_CONTENT_TYPE
        return cls(filename=file_path.name, content_type=content_type, data=file_path.read_bytes())


AddressInput = Union[Address, str, tuple[str | None, str]]
"""Anything :func:`normalize_address` accepts."""


def _empty_params() -> dict[str, Any]:
    return {}


@dataclass(frozen=True, slots=True)
class Email:
    """A generic, provider-neutral email message.

    ``message_params`` holds provider-specific settings (tags, sending
    options, metadata). Adapters decide how to map them.
    """

    sender: Address | None = None
    to: tuple[Address, ...] = ()
    cc: tuple[Address, ...] = ()
    bcc: tuple[Address, ...] = ()
    subject: str | None = None
    text_body: str | None = None
    html_body: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    attachments: tuple[Attachment, ...] = ()
    message_params: Mapping[str, Any] = field(default_factory=_empty_params)


def normalize_address(value: AddressInput) -> Address:
    """Turn a string, ``(name, email)`` pair or Address into an Address.

    Example:
        >>> normalize_address("foo@bar.com")
        Address(name=None, email='foo@bar.com')
        >>> normalize_address(("Foo", "foo@bar.com"))
        Address(name='Foo', email='foo@bar.com')
    """
    if isinstance(value, Address):
        return value
    if isinstance(value, str):
        return Address(name=None, email=value)
    if isinstance(value, tuple) and len(value) == 2:
        name, email = value
        return Address(name=name, email=email)
    raise TypeError(f"Cannot interpret {value!r} as an email address")


def normalize_addresses(value: AddressInput | Iterable[AddressInput] | None) -> tuple[Address, ...]:
    """Normalise a single address or a collection of addresses.

    A bare string or ``(name, email)`` pair is treated as one address.

    Example:
        >>> normalize_addresses("a@example.com")
        (Address(name=None, email='a@example.com'),)
        >>> normalize_addresses(None)
        ()
    """
    if value is None:
        return ()
    if isinstance(value, (str, Address)) or (isinstance(value, tuple) and _is_pair(value)):
        return (normalize_address(value),)  # type: ignore[arg-type]
    return tuple(normalize_address(item) for item in value)  # type: ignore[union-attr]


def _is_pair(value: tuple[Any, ...]) -> bool:
    """Return True for a ``(name, email)`` pair as opposed to a tuple of addresses."""
    return len(value) == 2 and (value[0] is None or isinstance(value[0], str)) and isinstance(value[1], str)


def new_email(
    *,
    sender: AddressInput | None = None,
    to: AddressInput | Iterable[AddressInput] | None = None,
    cc: AddressInput | Iterable[AddressInput] | None = None,
    bcc: AddressInput | Iterable[AddressInput] | None = None,
    subject: str | None = None,
    text_body: str | None = None,
    html_body: str | None = None,
    headers: Mapping[str, str] | None = None,
    attachments: Iterable[Attachment] | None = None,
) -> Email:
    """Build an :class:`Email` with normalised addresses.

    Example:
        >>> email = new_email(sender=("From", "from@foo.com"), to=["a@b.com"], subject="Hi")
        >>> email.sender
        Address(name='From', email='from@foo.com')
        >>> email.to
        (Address(name=None, email='a@b.com'),)
    """
    return Email(
        sender=normalize_address(sender) if sender is not None else None,
        to=normalize_addresses(to),
        cc=normalize_addresses(cc),
        bcc=normalize_addresses(bcc),
        subject=subject,
        text_body=text_body,
        html_body=html_body,
        headers=dict(headers or {}),
        attachments=tuple(attachments or ()),
    )


def put_header(email: Email, name: str, value: str) -> Email:
    """Return a copy of *email* with header *name* set to *value*."""
    return replace(email, headers={**email.headers, name: value})


def put_attachment(email: Email, attachment: Attachment | str | Path) -> Email:
    """Return a copy of *email* with *attachment* appended.

    Paths are read from disk via :meth:`Attachment.from_path`.

    Raises:
        FileNotFoundError: When a path is given and the file does not exist.
    """
    if not isinstance(attachment, Attachment):
        attachment = Attachment.from_path(attachment)
    return replace(email, attachments=(*email.attachments, attachment))


__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "Address",
    "AddressInput",
    "Attachment",
    "Email",
    "new_email",
    "normalize_address",
    "normalize_addresses",
    "put_attachment",
    "put_header",
]
