"""
Core infrastructure for the haulbase client.

This module provides:
- Config: Configuration management
- Errors: Exception types and error message extraction
- Logging: structlog setup
"""

from .config import ConfigManager, EnvironmentSettings, get_config
from .errors import (
    ApiError,
    AuthenticationError,
    HaulbaseError,
    ValidationError,
    extract_error_message,
)
from .logging import configure_logging

__all__ = [
    "ConfigManager",
    "EnvironmentSettings",
    "get_config",
    "ApiError",
    "AuthenticationError",
    "HaulbaseError",
    "ValidationError",
    "extract_error_message",
    "configure_logging",
]
