"""
Configuration Management Package

Provides Pydantic-based configuration models and management for SearchFilter.
"""

from searchfilter.core.config.models import AppConfig, FilterConfig
from searchfilter.core.config.manager import ConfigManager

__all__ = [
    "AppConfig",
    "FilterConfig",
    "ConfigManager",
]
