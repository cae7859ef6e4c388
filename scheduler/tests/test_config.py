"""Tests for centralized configuration."""

import os
from unittest.mock import patch

import pytest


class TestStoreSettings:
    def test_store_default_values(self):
        from scheduler.config import StoreSettings

        with patch.dict(os.environ, {}, clear=True):
            assert StoreSettings().name_max_length == 50

    def test_store_from_environment(self):
        from scheduler.config import StoreSettings

        with patch.dict(os.environ, {"STORE_NAME_MAX_LENGTH": "20"}, clear=True):
            assert StoreSettings().name_max_length == 20

    def test_store_rejects_zero_length(self):
        from pydantic import ValidationError

        from scheduler.config import StoreSettings

        with patch.dict(os.environ, {"STORE_NAME_MAX_LENGTH": "0"}, clear=True):
            with pytest.raises(ValidationError):
                StoreSettings()


class TestAdminSettings:
    def test_admin_disabled_by_default(self):
        from scheduler.config import AdminSettings

        with patch.dict(os.environ, {}, clear=True):
            settings = AdminSettings()
            assert settings.secret == ""
            assert settings.enabled is False

    def test_admin_secret_from_environment(self):
        from scheduler.config import AdminSettings

        with patch.dict(os.environ, {"ADMIN_SECRET": "hunter2"}, clear=True):
            settings = AdminSettings()
            assert settings.secret == "hunter2"
            assert settings.enabled is True


class TestCorsSettings:
    def test_cors_default_values(self):
        from scheduler.config import CorsSettings

        with patch.dict(os.environ, {}, clear=True):
            settings = CorsSettings()
            assert settings.origins == ["http://localhost:3000"]
            assert settings.allow_credentials is True

    def test_cors_wildcard_disables_credentials(self):
        from scheduler.config import CorsSettings

        with patch.dict(os.environ, {"CORS_ORIGINS": "*"}, clear=True):
            settings = CorsSettings()
            assert settings.origins == ["*"]
            assert settings.allow_credentials is False


class TestSettings:
    def test_settings_singleton_pattern(self):
        from scheduler.config import get_settings

        assert get_settings() is get_settings()

    def test_clear_settings_cache(self):
        from scheduler.config import clear_settings_cache, get_settings

        first = get_settings()
        clear_settings_cache()
        assert get_settings() is not first

    def test_settings_has_all_subsections(self):
        from scheduler.config import Settings

        with patch.dict(os.environ, {}, clear=True):
            settings = Settings()
            for section in ("store", "admin", "cors", "debug"):
                assert hasattr(settings, section)

    @pytest.mark.parametrize("raw,expected", [("1", True), ("true", True), ("0", False), ("no", False)])
    def test_request_debug_flag(self, raw, expected):
        from scheduler.config import Settings

        with patch.dict(os.environ, {"REQUEST_DEBUG": raw}, clear=True):
            assert Settings().debug.request is expected
