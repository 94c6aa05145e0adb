"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from haulbase.core.config import ConfigManager, EnvironmentSettings


def test_defaults_without_config_file(config):
    assert config.get_list_defaults("loads").sort_field == "created_at"
    assert config.get_list_defaults("expenses").sort_field == "date"
    assert config.get_list_defaults("brokers").sort_direction == "desc"
    assert config.get_expiry_warning_days() == 30
    assert config.get_default_period() == "this_month"
    assert "in_transit" in config.get_quick_filter_statuses()


def test_yaml_overrides_merge_with_defaults(tmp_path):
    (tmp_path / "config.yaml").write_text(
        "assets:\n  expiry_warning_days: 60\nlists:\n  loads:\n    sort_field: pickup_date\n"
    )
    config = ConfigManager(config_dir=tmp_path)

    assert config.get_expiry_warning_days() == 60
    assert config.get_list_defaults("loads").sort_field == "pickup_date"
    assert config.get_list_defaults("expenses").sort_field == "date"
    assert config.get_default_period() == "this_month"


def test_environment_settings_use_prefix(monkeypatch):
    monkeypatch.setenv("HAULBASE_API_URL", "https://api.haulbase.test/api")
    monkeypatch.setenv("HAULBASE_ORG_SLUG", "acme-freight")
    monkeypatch.setenv("HAULBASE_TIMEOUT_SECONDS", "5")

    settings = EnvironmentSettings(_env_file=None)

    assert settings.api_url == "https://api.haulbase.test/api"
    assert settings.org_slug == "acme-freight"
    assert settings.timeout_seconds == 5.0


def test_log_level_is_normalized(monkeypatch):
    monkeypatch.setenv("HAULBASE_LOG_LEVEL", "debug")

    assert EnvironmentSettings(_env_file=None).log_level == "DEBUG"


@pytest.mark.parametrize("env, value", [("HAULBASE_LOG_LEVEL", "LOUD"), ("HAULBASE_LOG_FORMAT", "xml")])
def test_unknown_logging_options_are_rejected(monkeypatch, env, value):
    monkeypatch.setenv(env, value)

    with pytest.raises(ValidationError):
        EnvironmentSettings(_env_file=None)
