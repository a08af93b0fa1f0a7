"""
Config Module - Black Box Interface

Purpose: Application configuration management
Interface: ConfigProvider, EnvConfigProvider
Hidden: Config sources, environment parsing
"""

from .provider import APIConfig, ConfigProvider, EnvConfigProvider, SessionConfig, StorageConfig

__all__ = ["ConfigProvider", "EnvConfigProvider", "SessionConfig", "StorageConfig", "APIConfig"]
