"""Composition root wiring adapters to application ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Configuration services
from ..adapters.config.display import display_config
from ..adapters.config.loader import get_config

# Logging services
from ..adapters.logging.setup import init_logging

# Delivery services
from ..adapters.sparkpost.config import load_sparkpost_config_from_dict
from ..adapters.sparkpost.transport import deliver

# Static conformance assertions; pyright checks each adapter against its Protocol.
if TYPE_CHECKING:
    from ..adapters.memory.sparkpost import TransmissionSpy
    from ..application.ports import (
        DeliverEmail,
        DisplayConfig,
        GetConfig,
        InitLogging,
        LoadSparkPostConfigFromDict,
    )

    _assert_get_config: GetConfig = get_config
    _assert_display_config: DisplayConfig = display_config
    _assert_deliver_email: DeliverEmail = deliver
    _assert_load_sparkpost_config_from_dict: LoadSparkPostConfigFromDict = load_sparkpost_config_from_dict
    _assert_init_logging: InitLogging = init_logging


@dataclass(frozen=True, slots=True)
class AppServices:
    """Frozen container holding all application port implementations."""

    get_config: GetConfig
    display_config: DisplayConfig
    deliver_email: DeliverEmail
    load_sparkpost_config_from_dict: LoadSparkPostConfigFromDict
    init_logging: InitLogging


def build_production() -> AppServices:
    """Wire production adapters into an AppServices container."""
    return AppServices(
        get_config=get_config,
        display_config=display_config,
        deliver_email=deliver,
        load_sparkpost_config_from_dict=load_sparkpost_config_from_dict,
        init_logging=init_logging,
    )


def build_testing(*, spy: TransmissionSpy | None = None) -> AppServices:
    """Wire in-memory adapters into an AppServices container.

    Args:
        spy: Optional TransmissionSpy that records deliveries. A fresh one is
            created when None; pass your own to assert on what was sent.
    """
    from ..adapters.memory import (
        TransmissionSpy,
        display_config_in_memory,
        get_config_in_memory,
        init_logging_in_memory,
        load_sparkpost_config_from_dict_in_memory,
    )

    transmission_spy = spy if spy is not None else TransmissionSpy()

    return AppServices(
        get_config=get_config_in_memory,
        display_config=display_config_in_memory,
        deliver_email=transmission_spy.deliver,
        load_sparkpost_config_from_dict=load_sparkpost_config_from_dict_in_memory,
        init_logging=init_logging_in_memory,
    )


__all__ = [
    # Configuration
    "get_config",
    "display_config",
    # Delivery
    "deliver",
    "load_sparkpost_config_from_dict",
    # Logging
    "init_logging",
    # Composition
    "AppServices",
    "build_production",
    "build_testing",
]
