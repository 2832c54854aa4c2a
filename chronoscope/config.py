from __future__ import annotations

import os
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field

from .exceptions import ConfigurationError

CLOUD_URL_TEMPLATE = "https://{endpoint}.web.tmprl.cloud"


class TemporalConfig(BaseModel):
    """Connection settings for the workflow platform API."""

    api_key: Optional[str] = None
    endpoint: Optional[str] = None
    base_url: Optional[str] = None
    timeout_seconds: float = 10.0
    max_retries: int = 2

    def resolved_base_url(self) -> str:
        """Return ``base_url`` or the cloud URL derived from ``endpoint``."""
        if self.base_url:
            return self.base_url.rstrip("/")
        if not self.endpoint:
            raise ConfigurationError(
                "Temporal Endpoint is required - set TEMPORAL_ENDPOINT envvar"
            )
        return CLOUD_URL_TEMPLATE.format(endpoint=self.endpoint)


class ChronoscopeConfig(BaseModel):
    """Top-level configuration model."""

    temporal: TemporalConfig = Field(default_factory=TemporalConfig)
    client: Literal["http", "inmemory"] = "http"
    log_level: str = "WARNING"


def load_config(path: Optional[str] = None) -> ChronoscopeConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to CHRONOSCOPE_CONFIG env
            variable or 'config.yaml' in the current directory.
    """

    config_path = path or os.getenv("CHRONOSCOPE_CONFIG", "config.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = ChronoscopeConfig(**data)
    else:
        config = ChronoscopeConfig()

    env_api_key = os.getenv("TEMPORAL_API_KEY")
    if env_api_key:
        config.temporal.api_key = env_api_key
    env_endpoint = os.getenv("TEMPORAL_ENDPOINT")
    if env_endpoint:
        config.temporal.endpoint = env_endpoint
    env_base_url = os.getenv("TEMPORAL_BASE_URL")
    if env_base_url:
        config.temporal.base_url = env_base_url
    return config
