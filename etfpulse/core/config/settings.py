"""Configuration management for the etfpulse service and CLI."""

import os
import tomllib
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger


@dataclass
class SourceConfig:
    """Upstream source locations and provenance names."""

    primary_name: str = "MoneyDJ"
    primary_url_template: str = "https://www.moneydj.com/ETF/X/Basic/Basic0003.xdjhtm?etfid={symbol}"
    market_suffix: str = ".TW"
    secondary_name: str = "TWSE realtime"
    secondary_url: str = "https://mis.twse.com.tw/stock/api/getStockInfo.jsp"
    secondary_exchange: str = "tse"
    user_agent: str = "Mozilla/5.0 (etfpulse; +https://github.com/etfpulse)"

    def __post_init__(self) -> None:
        if "{symbol}" not in self.primary_url_template:
            raise ValueError("primary_url_template must contain '{symbol}'")
        if not self.secondary_url:
            raise ValueError("secondary_url cannot be empty")


@dataclass
class ReconcileConfig:
    """Premium reconciliation settings."""

    divergence_threshold: float = 1.0

    def __post_init__(self) -> None:
        if self.divergence_threshold < 0:
            raise ValueError("divergence_threshold must be non-negative")


@dataclass
class TransportConfig:
    """HTTP transport settings for upstream calls."""

    timeout: float = 15.0
    verify_ssl: bool = True
    max_connections: int = 20

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_connections <= 0:
            raise ValueError("max_connections must be positive")


@dataclass
class CacheControlConfig:
    """Freshness directives attached to successful responses."""

    s_maxage: int = 120
    stale_while_revalidate: int = 300

    def header_value(self) -> str:
        return f"s-maxage={self.s_maxage}, stale-while-revalidate={self.stale_while_revalidate}"


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    file: str | None = None


@dataclass
class EtfPulseConfig:
    """Top level etfpulse configuration."""

    sources: SourceConfig = field(default_factory=SourceConfig)
    reconcile: ReconcileConfig = field(default_factory=ReconcileConfig)
    transport: TransportConfig = field(default_factory=TransportConfig)
    cache_control: CacheControlConfig = field(default_factory=CacheControlConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "EtfPulseConfig":
        """Build a configuration from a nested dictionary."""
        return cls(
            sources=SourceConfig(**config_dict.get("sources", {})),
            reconcile=ReconcileConfig(**config_dict.get("reconcile", {})),
            transport=TransportConfig(**config_dict.get("transport", {})),
            cache_control=CacheControlConfig(**config_dict.get("cache_control", {})),
            logging=LoggingConfig(**config_dict.get("logging", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "sources": asdict(self.sources),
            "reconcile": asdict(self.reconcile),
            "transport": asdict(self.transport),
            "cache_control": asdict(self.cache_control),
            "logging": asdict(self.logging),
        }


class ConfigManager:
    """Loads configuration from a TOML file and ``ETFPULSE_*`` environment variables."""

    def __init__(self, config_path: Path | None = None, *, use_env: bool = True):
        """Create a configuration manager.

        Args:
            config_path: path of the TOML file, defaults to ``~/.etfpulse/config.toml``
            use_env: whether environment variables override file values
        """
        env_path = os.getenv("ETFPULSE_CONFIG")
        self.config_path = config_path or (Path(env_path) if env_path else Path.home() / ".etfpulse" / "config.toml")
        self.config = self._load_config()
        if use_env:
            overrides = load_config_from_env()
            if overrides:
                try:
                    self.update_config(**overrides)
                except (TypeError, ValueError) as e:
                    logger.warning("Ignoring invalid environment overrides: {}", e)

    def _load_config(self) -> EtfPulseConfig:
        if not self.config_path.exists():
            return EtfPulseConfig()

        try:
            with open(self.config_path, "rb") as f:
                config_dict = tomllib.load(f)
            return EtfPulseConfig.from_dict(config_dict)
        except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
            logger.warning("Failed to load config from {}: {}; using defaults", self.config_path, e)
            return EtfPulseConfig()

    def get_config(self) -> EtfPulseConfig:
        return self.config

    def update_config(self, **updates: Any) -> None:
        """Deep-merge ``updates`` into the current configuration."""
        config_dict = self.config.to_dict()

        def deep_update(d: dict[str, Any], u: dict[str, Any]) -> dict[str, Any]:
            for k, v in u.items():
                if isinstance(v, dict):
                    d[k] = deep_update(d.get(k, {}), v)
                else:
                    d[k] = v
            return d

        deep_update(config_dict, updates)
        self.config = EtfPulseConfig.from_dict(config_dict)


def get_default_config() -> EtfPulseConfig:
    """Return the built-in default configuration."""
    return EtfPulseConfig()


def _env_value(name: str, cast: Callable[[str], Any]) -> Any:
    """Read ``name`` and convert it with ``cast``; a malformed value is ignored."""
    raw = os.getenv(name)
    if raw is None:
        return None
    try:
        return cast(raw.strip())
    except ValueError:
        logger.warning("Ignoring malformed {}={!r}; keeping the default", name, raw)
        return None


def _env_bool(raw: str) -> bool:
    lowered = raw.lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def load_config_from_env() -> dict[str, Any]:
    """Collect configuration overrides from ``ETFPULSE_*`` environment variables."""
    sections: dict[str, dict[str, Any]] = {
        "sources": {
            "primary_url_template": _env_value("ETFPULSE_PRIMARY_URL_TEMPLATE", str),
            "secondary_url": _env_value("ETFPULSE_SECONDARY_URL", str),
            "user_agent": _env_value("ETFPULSE_USER_AGENT", str),
        },
        "reconcile": {
            "divergence_threshold": _env_value("ETFPULSE_DIVERGENCE_THRESHOLD", float),
        },
        "transport": {
            "timeout": _env_value("ETFPULSE_HTTP_TIMEOUT", float),
            "verify_ssl": _env_value("ETFPULSE_VERIFY_SSL", _env_bool),
        },
        "cache_control": {
            "s_maxage": _env_value("ETFPULSE_CACHE_S_MAXAGE", int),
            "stale_while_revalidate": _env_value("ETFPULSE_CACHE_STALE_WHILE_REVALIDATE", int),
        },
        "logging": {
            "level": _env_value("ETFPULSE_LOGGING_LEVEL", str),
            "file": _env_value("ETFPULSE_LOGGING_FILE", str),
        },
    }

    config: dict[str, Any] = {}
    for section, values in sections.items():
        present = {key: value for key, value in values.items() if value is not None}
        if present:
            config[section] = present
    return config
