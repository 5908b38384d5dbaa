"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


def resolve_data_dir() -> str:
    """Resolve the directory holding the JSON data files.

    Priority:
      1) DATA_DIR (explicit)
      2) ./data under the current working directory
    """

    explicit = os.getenv("DATA_DIR")
    if explicit:
        return explicit
    return os.path.join(os.getcwd(), "data")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    DATA_DIR: str = resolve_data_dir()

    # Push channel (Socket.IO) mount path, without leading slash.
    WS_PATH: str = os.getenv("WS_PATH", "ws")

    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = _int_env("PORT", 3000)


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


@dataclass(frozen=True)
class TestingConfig(BaseConfig):
    """Configuration used by the test suite."""

    DEBUG: bool = False
    TESTING: bool = True


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
