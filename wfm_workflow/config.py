"""Client configuration loaded from YAML and the environment."""

from __future__ import annotations

import os
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field

from .constants import SYNC_TOPIC_PREFIX, TOPIC_PREFIX


class ClientConfig(BaseModel):
    """Workflow client configuration."""

    topic_prefix: str = TOPIC_PREFIX
    sync_topic_prefix: str = SYNC_TOPIC_PREFIX
    options: Dict[str, Any] = Field(
        default_factory=dict, description="Opaque settings forwarded to the bus"
    )


def load_config(path: Optional[str] = None) -> ClientConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to WFM_WORKFLOW_CONFIG
            env variable or 'config.yaml' in the current directory.
    """

    config_path = path or os.getenv("WFM_WORKFLOW_CONFIG", "config.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = ClientConfig(**data)
    else:
        config = ClientConfig()

    env_prefix = os.getenv("WFM_TOPIC_PREFIX")
    if env_prefix:
        config.topic_prefix = env_prefix
    return config
