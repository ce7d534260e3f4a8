"""Configuration loading, schema, and defaults."""

from leakgate.config.loader import ConfigError, load_config
from leakgate.config.schema import LeakGateConfig

__all__ = [
    "ConfigError",
    "LeakGateConfig",
    "load_config",
]
