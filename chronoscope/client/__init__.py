"""Client factory and initialization."""

from __future__ import annotations

import os
from typing import Optional

from ..config import ChronoscopeConfig, load_config
from ..exceptions import ConfigurationError
from .base import HistoryClient
from .http import TemporalHttpClient
from .inmemory import InMemoryHistoryClient


def get_client(
    backend: Optional[str] = None, config: Optional[ChronoscopeConfig] = None
) -> HistoryClient:
    """Factory function to get the configured platform client."""

    config = config or load_config()
    backend = (backend or os.getenv("CHRONOSCOPE_CLIENT") or config.client).lower()

    if backend == "http":
        return TemporalHttpClient(config.temporal)
    elif backend == "inmemory":
        return InMemoryHistoryClient()
    else:
        raise ConfigurationError(f"Unsupported client backend: {backend}")


__all__ = [
    "HistoryClient",
    "InMemoryHistoryClient",
    "TemporalHttpClient",
    "get_client",
]
