"""Domain layer - pure business logic with no I/O or framework dependencies.

Contents:
    * :mod:`.email` - Provider-neutral email message model
    * :mod:`.enums` - Domain enumerations (OutputFormat)
    * :mod:`.errors` - Domain exception types
"""

from __future__ import annotations

from .email import (
    Address,
    Attachment,
    Email,
    new_email,
    normalize_address,
    normalize_addresses,
    put_attachment,
    put_header,
)
from .enums import OutputFormat
from .errors import ApiError, ConfigurationError, DeliveryError

__all__ = [
    # Email model
    "Address",
    "Attachment",
    "Email",
    "new_email",
    "normalize_address",
    "normalize_addresses",
    "put_attachment",
    "put_header",
    # Enums
    "OutputFormat",
    # Errors
    "ApiError",
    "ConfigurationError",
    "DeliveryError",
]
