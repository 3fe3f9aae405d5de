"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from register_config import clear_settings_cache, get_settings
from register_config.settings import DEFAULT_PASSWORD_REGEX, Settings

SECRET = "settings-test-secret-0123456789"


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, jwt_secret_key=SECRET, **overrides)


class TestSettingsDefaults:
    """Tests for default configuration values."""

    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch):
        for name in (
            "PASSWORD_REGEX",
            "PASSWORD_HASH_ROUNDS",
            "DATABASE_URL",
            "JWT_TOKEN_EXPIRE_HOURS",
            "API_CORS_ORIGINS",
        ):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        settings = _settings()

        assert settings.jwt_token_expire_hours == 24
        assert settings.password_hash_rounds == 12
        assert settings.password_regex == DEFAULT_PASSWORD_REGEX
        assert settings.database_url.startswith("sqlite+aiosqlite://")
        assert settings.cors_origins == []

    def test_secret_is_not_exposed_in_repr(self):
        settings = _settings()

        assert SECRET not in repr(settings)
        assert settings.jwt_secret_key.get_secret_value() == SECRET

    def test_values_from_environment(self, monkeypatch):
        monkeypatch.setenv("PASSWORD_REGEX", r"^\d{4}$")
        monkeypatch.setenv("JWT_TOKEN_EXPIRE_HOURS", "2")

        settings = _settings()

        assert settings.password_regex == r"^\d{4}$"
        assert settings.jwt_token_expire_hours == 2

    def test_cors_origins_parsed_from_string(self):
        settings = _settings(api_cors_origins="http://a.test, http://b.test,")

        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    def test_cors_origins_accepts_list(self):
        settings = _settings(api_cors_origins=["http://a.test", "http://b.test"])

        assert settings.api_cors_origins == "http://a.test,http://b.test"


class TestSettingsValidation:
    """Tests for settings that must stop the service from starting."""

    @pytest.mark.parametrize("secret", ["", "   "])
    def test_blank_signing_key_rejected(self, secret):
        with pytest.raises(ValidationError, match="JWT_SECRET_KEY cannot be empty"):
            Settings(_env_file=None, jwt_secret_key=secret)

    def test_missing_signing_key_rejected(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET_KEY", raising=False)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_invalid_password_regex_rejected(self):
        with pytest.raises(ValidationError, match="not a valid regular expression"):
            _settings(password_regex="([A-Z]")

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_hash_rounds_out_of_range_rejected(self, rounds):
        with pytest.raises(ValidationError):
            _settings(password_hash_rounds=rounds)

    def test_non_positive_token_lifetime_rejected(self):
        with pytest.raises(ValidationError):
            _settings(jwt_token_expire_hours=0)


class TestGetSettings:
    """Tests for the cached settings accessor."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_clear_settings_cache_reloads(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("JWT_TOKEN_EXPIRE_HOURS", "3")
        clear_settings_cache()

        try:
            second = get_settings()
            assert second is not first
            assert second.jwt_token_expire_hours == 3
        finally:
            monkeypatch.delenv("JWT_TOKEN_EXPIRE_HOURS")
            clear_settings_cache()
