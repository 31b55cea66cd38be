"""Adapters layer - infrastructure and framework integrations.

Contents:
    * :mod:`.sparkpost` - SparkPost payload, transport and helpers
    * :mod:`.config` - Configuration loading and display
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory adapters for tests
    * :mod:`.cli` - rich_click CLI
"""

from __future__ import annotations

__all__: list[str] = []
