"""
==============================================================================
Settings Tests
==============================================================================

Tests for configuration validation and derived values.

==============================================================================
"""

import pytest
from pydantic import ValidationError

from commerce_tree.config import Settings


class TestSettings:
    """Tests for the Settings model."""

    def test_root_path_trailing_slash_is_removed(self):
        settings = Settings(_env_file=None, catalog_root_path="/var/commerce/products/cloud/")
        assert settings.catalog_root_path == "/var/commerce/products/cloud"

    def test_relative_root_path_is_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, catalog_root_path="var/commerce")

    def test_refresh_period_in_seconds(self):
        settings = Settings(_env_file=None, catalog_caching_time_minutes=5)
        assert settings.catalog_caching_time_seconds == 300

    def test_refresh_scheduled_needs_caching(self):
        """Test the scheduler is off whenever caching is off."""
        settings = Settings(
            _env_file=None,
            catalog_caching_enabled=False,
            catalog_caching_scheduler_enabled=True,
        )
        assert settings.refresh_scheduled is False

    def test_unknown_environment_defaults_to_development(self):
        assert Settings(_env_file=None, app_env="qa").app_env == "development"

    def test_cors_origins_list(self):
        settings = Settings(_env_file=None, cors_origins='["https://author.example"]')
        assert settings.cors_origins_list == ["https://author.example"]
