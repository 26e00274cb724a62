from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field

from .constants import DEFAULT_CONFIG_FILE, DEFAULT_GATE_TIMEOUT

logger = logging.getLogger(__name__)


class EngineConfig(BaseModel):
    """Settings for how gate verdicts are gathered."""

    gate_timeout: Optional[float] = DEFAULT_GATE_TIMEOUT
    default_allow: bool = True


class StaticGateConfig(BaseModel):
    """Declarative gate answering fixed verdicts."""

    name: str
    verdicts: Dict[str, str] = Field(default_factory=dict)
    value_verdicts: Dict[str, str] = Field(default_factory=dict)
    query_suffix: str = ""
    properties: Dict[str, Any] = Field(default_factory=dict)


class AccessGateConfig(BaseModel):
    """Top-level configuration model."""

    engine: EngineConfig = Field(default_factory=EngineConfig)
    log_level: str = "INFO"
    gates: List[StaticGateConfig] = Field(default_factory=list)


def load_config(path: Optional[str] = None) -> AccessGateConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to ACCESSGATE_CONFIG env
            variable or 'accessgate.yaml' in the current directory.
    """

    config_path = path or os.getenv("ACCESSGATE_CONFIG", DEFAULT_CONFIG_FILE)
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = AccessGateConfig(**data)
    else:
        config = AccessGateConfig()

    env_timeout = os.getenv("ACCESSGATE_GATE_TIMEOUT")
    if env_timeout:
        try:
            timeout = float(env_timeout)
        except ValueError:
            logger.warning(
                f"Ignoring ACCESSGATE_GATE_TIMEOUT={env_timeout!r}; "
                f"keeping {config.engine.gate_timeout}"
            )
        else:
            config.engine.gate_timeout = timeout if timeout > 0 else None
    env_log_level = os.getenv("ACCESSGATE_LOG_LEVEL")
    if env_log_level:
        config.log_level = env_log_level.upper()
    return config
