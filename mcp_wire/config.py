"""Configuration management for the wire tools."""

import os
from typing import Any, Dict, Optional
import json
from pydantic_settings import BaseSettings, SettingsConfigDict


class WireConfig(BaseSettings):
    """Main configuration."""

    # Logging
    debug: bool = False
    log_level: str = "info"

    # Output formatting
    indent: Optional[int] = None
    sort_keys: bool = False

    # Metrics
    metrics_enabled: bool = False

    model_config = SettingsConfigDict(
        env_prefix="MCP_WIRE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def from_file(cls, config_file: str) -> "WireConfig":
        """Load configuration from JSON file."""
        with open(config_file, "r") as f:
            config_data = json.load(f)
        return cls(**config_data)

    @classmethod
    def from_env(cls) -> "WireConfig":
        """Load configuration from environment variables."""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()


def load_config(
    config_file: Optional[str] = None,
    use_env: bool = True
) -> WireConfig:
    """Load configuration from file or environment."""

    if config_file and os.path.exists(config_file):
        config = WireConfig.from_file(config_file)
    elif use_env:
        config = WireConfig.from_env()
    else:
        config = WireConfig(_env_file=None)

    return config


def create_sample_config() -> Dict[str, Any]:
    """Create a sample configuration for reference."""
    return {
        "debug": False,
        "log_level": "info",
        "indent": 2,
        "sort_keys": False,
        "metrics_enabled": False,
    }
