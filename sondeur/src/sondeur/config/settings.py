"""
Sondeur configuration with hybrid YAML + ENV support.

Priority: Environment variables > environment-specific YAML >
default YAML > Pydantic defaults

Nested values can be set from the environment with a double underscore,
e.g. SONDEUR_RETRY__MAX_ATTEMPTS=5.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from shared.resilience import BackoffStrategy, RetryConfig

STRATEGIES = ("sequential", "worker_partition")


class RpcSettings(BaseModel):
    """Single JSON-RPC call settings."""

    request_timeout: float = Field(default=10.0, gt=0.0, le=120.0)
    max_connections: int = Field(default=20, ge=1, le=1000)


class RetrySettings(BaseModel):
    """Retry/fallback schedule: sleep initial_delay * multiplier^attempt."""

    max_attempts: int = Field(default=3, ge=1, le=10)
    initial_delay: float = Field(default=1.0, ge=0.0, le=60.0)
    max_delay: float = Field(default=30.0, ge=0.0, le=300.0)
    backoff_multiplier: float = Field(default=2.0, ge=1.0, le=10.0)
    jitter: bool = Field(default=False)

    def to_retry_config(self, retry_on: tuple = (Exception,)) -> RetryConfig:
        """Build the shared resilience RetryConfig."""
        return RetryConfig(
            max_attempts=self.max_attempts,
            initial_delay=self.initial_delay,
            max_delay=self.max_delay,
            backoff_strategy=BackoffStrategy.EXPONENTIAL,
            backoff_multiplier=self.backoff_multiplier,
            jitter=self.jitter,
            retry_on=retry_on,
        )


class BatchSettings(BaseModel):
    """Balance run settings."""

    worker_count: int = Field(default=4, ge=1, le=256)
    batch_size: int = Field(default=100, ge=1, le=10000)
    batch_delay: float = Field(default=0.05, ge=0.0, le=10.0)
    strategy: str = Field(default="sequential")

    @field_validator("strategy")
    @classmethod
    def validate_strategy(cls, v: str) -> str:
        """Validate execution strategy."""
        v_lower = v.lower().replace("-", "_")
        if v_lower not in STRATEGIES:
            raise ValueError(f"Invalid strategy. Must be one of: {list(STRATEGIES)}")
        return v_lower


class UsageSettings(BaseModel):
    """Usage (nonce) run settings."""

    worker_count: int = Field(default=20, ge=1, le=256)
    batch_size: int = Field(default=100, ge=1, le=10000)


class ExportSettings(BaseModel):
    """Wallet list export settings."""

    chunk_threshold: int = Field(default=100_000, ge=1)
    chunk_size: int = Field(default=50_000, ge=1)


class SondeurConfig(BaseSettings):
    """Sondeur configuration schema."""

    model_config = SettingsConfigDict(
        env_prefix="SONDEUR_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="info")
    log_dir: Optional[str] = Field(default=None)
    verbose: int = Field(default=1, ge=0, le=3)

    # Persisted state (JSON key-value file)
    storage_path: str = Field(default="~/.sondeur/store.json")

    # Target address list
    targets_url: Optional[str] = Field(default=None)
    targets_file: Optional[str] = Field(default=None)

    rpc: RpcSettings = Field(default_factory=RpcSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)
    batch: BatchSettings = Field(default_factory=BatchSettings)
    usage: UsageSettings = Field(default_factory=UsageSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """Environment variables win over values loaded from YAML."""
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["debug", "info", "warning", "error", "critical"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid log_level. Must be one of: {allowed}")
        return v_lower

    @field_validator("storage_path")
    @classmethod
    def expand_storage_path(cls, v: str) -> str:
        """Expand home directory in storage path."""
        return os.path.expanduser(v)


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        loaded = yaml.safe_load(f)
    return loaded or {}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_config_dir() -> Path:
    """Directory holding default.yaml and environment YAML files."""
    override = os.getenv("SONDEUR_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    return Path(__file__).resolve().parent.parent.parent.parent / "config"


def load_config(config_file: Optional[str] = None) -> SondeurConfig:
    """
    Load configuration from YAML files.

    Args:
        config_file: Optional YAML filename override

    Returns:
        SondeurConfig instance
    """
    env = os.getenv("ENV", "production")

    config_map = {
        "production": "production.yaml",
        "development": "development.yaml",
        "test": "test.yaml",
    }

    config_dir = get_config_dir()
    merged_config = _read_yaml(config_dir / "default.yaml")

    if config_file is None:
        config_file = os.getenv("SONDEUR_CONFIG") or config_map.get(
            env, "production.yaml"
        )

    merged_config = _deep_merge(merged_config, _read_yaml(config_dir / config_file))

    return SondeurConfig(**merged_config)


# Global settings instance
_settings: Optional[SondeurConfig] = None


def get_settings() -> SondeurConfig:
    """
    Get singleton settings instance.

    Returns:
        SondeurConfig instance
    """
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings (next get_settings() reloads)."""
    global _settings
    _settings = None
