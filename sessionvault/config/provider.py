"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Protocol


@dataclass
class SessionConfig:
    """Session and cookie configuration."""
    signed: bool
    cookie_secret: str
    cookie_name: str
    cookie_secure: bool
    session_life_seconds: int
    cookie_life_seconds: int

    @property
    def has_secret(self) -> bool:
        """Check if a signing secret is configured."""
        return bool(self.cookie_secret)


@dataclass
class StorageConfig:
    """Storage backend configuration."""
    backend: str
    redis_url: str
    key_prefix: str


@dataclass
class APIConfig:
    """API configuration."""
    port: int
    host: str
    debug: bool
    log_level: str


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_session_config(self) -> SessionConfig:
        """Get session configuration."""
        ...

    def get_storage_config(self) -> StorageConfig:
        """Get storage configuration."""
        ...

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...


def _positive_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer number of seconds, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_session_config(self) -> SessionConfig:
        """Get session configuration from environment variables."""
        return SessionConfig(
            signed=os.getenv("SESSION_SIGNED", "true").lower() == "true",
            cookie_secret=os.getenv("SESSION_COOKIE_SECRET", ""),
            cookie_name=os.getenv("SESSION_COOKIE_NAME", "session"),
            cookie_secure=os.getenv("SESSION_COOKIE_SECURE", "false").lower() == "true",
            session_life_seconds=_positive_int("SESSION_LIFE_IN_SEC", "7200"),
            cookie_life_seconds=_positive_int("COOKIE_LIFE_IN_SEC", "7200"),
        )

    def get_storage_config(self) -> StorageConfig:
        """Get storage configuration from environment variables."""
        backend = os.getenv("SESSION_STORE", "redis").lower()
        if backend not in ("redis", "memory"):
            raise ValueError(f"SESSION_STORE must be 'redis' or 'memory', got {backend!r}")

        return StorageConfig(
            backend=backend,
            redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
            key_prefix=os.getenv("SESSION_KEY_PREFIX", "session:"),
        )

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        return APIConfig(
            port=int(os.getenv("API_PORT", "8080")),
            host=os.getenv("API_HOST", "0.0.0.0"),
            debug=os.getenv("API_DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
