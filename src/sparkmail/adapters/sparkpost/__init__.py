"""SparkPost adapter - transmissions over the SparkPost HTTP API.

Structure:
    * :mod:`.config` - Adapter configuration model and loader
    * :mod:`.payload` - Email to transmission mapping
    * :mod:`.transport` - HTTP delivery and error redaction
    * :mod:`.helpers` - Provider-specific message params

Contents:
    * :class:`.config.SparkPostConfig` - Adapter configuration container
    * :func:`.config.load_sparkpost_config_from_dict` - Config dict loader
    * :func:`.payload.build_transmission` - Payload builder
    * :func:`.transport.deliver` - Primary sending interface
"""

from __future__ import annotations

from .config import SparkPostConfig, handle_config, load_sparkpost_config_from_dict
from .helpers import (
    disable_click_tracking,
    disable_open_tracking,
    mark_transactional,
    put_metadata,
    put_param,
    put_substitution_data,
    set_campaign_id,
    tag,
)
from .payload import build_transmission
from .transport import FILTERED, TransmissionResponse, deliver

__all__ = [
    "FILTERED",
    "SparkPostConfig",
    "TransmissionResponse",
    "build_transmission",
    "deliver",
    "disable_click_tracking",
    "disable_open_tracking",
    "handle_config",
    "load_sparkpost_config_from_dict",
    "mark_transactional",
    "put_metadata",
    "put_param",
    "put_substitution_data",
    "set_campaign_id",
    "tag",
]
