"""Configuration management module."""

from etfpulse.core.config.settings import (
    CacheControlConfig,
    ConfigManager,
    EtfPulseConfig,
    LoggingConfig,
    ReconcileConfig,
    SourceConfig,
    TransportConfig,
    get_default_config,
    load_config_from_env,
)

__all__ = [
    "ConfigManager",
    "EtfPulseConfig",
    "SourceConfig",
    "ReconcileConfig",
    "TransportConfig",
    "CacheControlConfig",
    "LoggingConfig",
    "get_default_config",
    "load_config_from_env",
]
