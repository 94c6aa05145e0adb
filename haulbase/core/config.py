"""
Configuration management for the haulbase client.

Handles loading and accessing:
- Client configuration (config.yaml): list defaults, quick filters, expiry windows
- Environment variables (API URL, tokens, organization)
"""

from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_CLIENT_CONFIG: dict[str, Any] = {
    "lists": {
        "loads": {"sort_field": "created_at", "sort_direction": "desc"},
        "expenses": {"sort_field": "date", "sort_direction": "desc"},
    },
    "loads": {
        "quick_filter_statuses": ["dispatched", "in_transit", "delivered", "invoiced"],
    },
    "assets": {
        "expiry_warning_days": 30,
    },
    "pnl": {
        "default_period": "this_month",
    },
}


class ListDefaults(BaseModel):
    """Default sort for a list view."""

    sort_field: str = "created_at"
    sort_direction: str = "desc"


class EnvironmentSettings(BaseSettings):
    """Environment variables configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HAULBASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_url: str = Field("http://localhost:3001/api", min_length=1)

    # Auth
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    token_file: Optional[Path] = None

    # Tenant resolution
    org_slug: Optional[str] = None

    timeout_seconds: float = Field(30.0, gt=0)

    # Logging
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    @field_validator("log_level", mode="before")
    @classmethod
    def parse_log_level(cls, v):
        """Accept any case ("debug"); reject names logging does not know."""
        level = str(v).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


class ConfigManager:
    """
    Central configuration manager for the haulbase client.

    Loads and provides access to:
    - Client configuration from config/config.yaml
    - Environment variables from .env
    """

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        """
        Initialize the configuration manager.

        Args:
            config_dir: Optional path to config directory. Defaults to project root/config.
        """
        if config_dir is None:
            project_root = Path(__file__).parent.parent.parent
            config_dir = project_root / "config"

        self.config_dir = config_dir
        self._client_config: Optional[dict[str, Any]] = None
        self._env_settings: Optional[EnvironmentSettings] = None

    @property
    def client_config(self) -> dict[str, Any]:
        """Load and return client configuration from config.yaml."""
        if self._client_config is None:
            config_path = self.config_dir / "config.yaml"
            if config_path.exists():
                with open(config_path, "r") as f:
                    loaded = yaml.safe_load(f) or {}
            else:
                loaded = {}
            self._client_config = _merge(DEFAULT_CLIENT_CONFIG, loaded)
        return self._client_config

    @property
    def env(self) -> EnvironmentSettings:
        """Load and return environment settings."""
        if self._env_settings is None:
            self._env_settings = EnvironmentSettings()
        return self._env_settings

    def get_list_defaults(self, resource: str) -> ListDefaults:
        """
        Get default sort settings for a resource list.

        Args:
            resource: Resource name ("loads", "expenses", ...)

        Returns:
            ListDefaults for the resource, or the generic default
        """
        lists = self.client_config.get("lists", {})
        return ListDefaults(**lists.get(resource, {}))

    def get_quick_filter_statuses(self) -> list[str]:
        """Get the load statuses shown as quick filter chips."""
        return list(self.client_config.get("loads", {}).get("quick_filter_statuses", []))

    def get_expiry_warning_days(self) -> int:
        """Get the number of days before a document date counts as expiring."""
        return int(self.client_config.get("assets", {}).get("expiry_warning_days", 30))

    def get_default_period(self) -> str:
        """Get the default P&L period preset."""
        return self.client_config.get("pnl", {}).get("default_period", "this_month")


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# Global config instance
_config_manager: Optional[ConfigManager] = None


def get_config() -> ConfigManager:
    """
    Get the global configuration manager instance.

    Returns:
        ConfigManager singleton instance
    """
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager
