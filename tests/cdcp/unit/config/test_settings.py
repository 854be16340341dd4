"""Unit tests for the settings model."""

from datetime import timedelta

import pytest
from pydantic import SecretStr, ValidationError

from cdcp_config.settings import Settings


def _settings(**overrides) -> Settings:
    values = {
        "jwt_secret_key": SecretStr("secret"),
        "postgres_password": SecretStr("pg-secret"),
        "database_url_override": None,
    }
    values.update(overrides)
    return Settings(**values)


class TestDatabaseUrl:
    def test_built_from_postgres_components(self):
        settings = _settings(
            postgres_host="db",
            postgres_port=5433,
            postgres_user="cdcp",
            postgres_db="notifications",
        )

        assert settings.database_url == (
            "postgresql+asyncpg://cdcp:pg-secret@db:5433/notifications"
        )

    def test_override_wins(self):
        settings = _settings(database_url_override="sqlite+aiosqlite:///./data/cdcp.db")

        assert settings.database_url == "sqlite+aiosqlite:///./data/cdcp.db"


class TestConfirmationCodeSettings:
    def test_defaults(self):
        settings = _settings()

        assert settings.confirmation_code_length == 5
        assert settings.confirmation_code_expiry == timedelta(hours=24)

    @pytest.mark.parametrize(
        ("value", "unit", "expected"),
        [
            (30, "seconds", timedelta(seconds=30)),
            (15, "minutes", timedelta(minutes=15)),
            (2, "days", timedelta(days=2)),
        ],
    )
    def test_expiry_units(self, value, unit, expected):
        settings = _settings(
            confirmation_code_expiry_value=value,
            confirmation_code_expiry_unit=unit,
        )

        assert settings.confirmation_code_expiry == expected

    def test_unknown_unit_is_rejected(self):
        with pytest.raises(ValidationError):
            _settings(confirmation_code_expiry_unit="fortnights")

    @pytest.mark.parametrize("length", [0, 9])
    def test_code_length_bounds(self, length):
        with pytest.raises(ValidationError):
            _settings(confirmation_code_length=length)

    def test_expiry_must_be_positive(self):
        with pytest.raises(ValidationError):
            _settings(confirmation_code_expiry_value=0)


class TestMiscSettings:
    def test_cors_origins_are_split(self):
        settings = _settings(api_cors_origins="http://a.test, http://b.test,")

        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    def test_cors_origins_accept_list(self):
        settings = _settings(api_cors_origins=["http://a.test", "http://b.test"])

        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    def test_secrets_are_not_echoed(self):
        assert "pg-secret" not in repr(_settings())

    def test_secret_values_come_from_environment(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET_KEY", "from-env")
        monkeypatch.setenv("POSTGRES_PASSWORD", "pg-from-env")

        settings = Settings()

        assert settings.jwt_secret_key.get_secret_value() == "from-env"
