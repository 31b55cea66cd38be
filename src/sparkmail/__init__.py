"""Deliver email through the SparkPost transmissions API.

Public surface:
- Domain: the generic message model and its errors
- SparkPost adapter: payload builder, sender and provider helpers
- Composition: layered configuration loading
- Metadata: package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# SparkPost adapter
from .adapters.sparkpost import (
    SparkPostConfig,
    TransmissionResponse,
    build_transmission,
    deliver,
    disable_click_tracking,
    disable_open_tracking,
    handle_config,
    mark_transactional,
    put_metadata,
    put_param,
    put_substitution_data,
    set_campaign_id,
    tag,
)

# Composition exports (wired adapters)
from .composition import get_config

# Domain exports
from .domain import (
    Address,
    ApiError,
    Attachment,
    ConfigurationError,
    DeliveryError,
    Email,
    new_email,
    put_attachment,
    put_header,
)

__all__ = [
    "Address",
    "ApiError",
    "Attachment",
    "ConfigurationError",
    "DeliveryError",
    "Email",
    "SparkPostConfig",
    "TransmissionResponse",
    "build_transmission",
    "deliver",
    "disable_click_tracking",
    "disable_open_tracking",
    "get_config",
    "handle_config",
    "mark_transactional",
    "new_email",
    "print_info",
    "put_attachment",
    "put_header",
    "put_metadata",
    "put_param",
    "put_substitution_data",
    "set_campaign_id",
    "tag",
]
