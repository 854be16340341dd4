"""Service configuration.

Every setting can be supplied as an environment variable (upper-case
field name). Missing values fall back to a dotenv file, looked up as:

- the file named by ``CDCP_ENV_FILE``
- ``config/.env.dev`` for local runs
- ``config/.env`` inside containers
"""

from __future__ import annotations

import os
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ExpiryUnit = Literal["seconds", "minutes", "hours", "days"]

_ROOT_MARKERS = ("config", "pyproject.toml", ".git")


def _project_root() -> Path:
    here = Path(__file__).resolve()
    for candidate in here.parents:
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    return here.parents[2]


def get_config_dir() -> Path:
    """Directory holding the dotenv files."""
    return _project_root() / "config"


def _env_file() -> Path | None:
    explicit = os.environ.get("CDCP_ENV_FILE")
    if explicit:
        path = Path(explicit)
        if not path.is_absolute():
            path = _project_root() / path
        if path.exists():
            return path

    for name in (".env.dev", ".env"):
        candidate = get_config_dir() / name
        if candidate.exists():
            return candidate
    return None


class Settings(BaseSettings):
    """Runtime configuration of the API, the CLI and the background workers.

    ``jwt_secret_key`` and ``postgres_password`` have no default; loading
    fails when neither the environment nor the dotenv file sets them.
    """

    model_config = SettingsConfigDict(
        env_file=_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    jwt_secret_key: SecretStr
    postgres_password: SecretStr

    app_name: str = "CDCP Notifications"
    debug: bool = False

    # Database; DATABASE_URL_OVERRIDE wins over the POSTGRES_* parts
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_db: str = "cdcp"
    database_url_override: str | None = None

    # HTTP server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_cors_origins: str = ""

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _join_cors_origins(cls, v: Any) -> str:
        if isinstance(v, (list, tuple)):
            return ",".join(v)
        return str(v) if v else ""

    # Bearer tokens
    jwt_algorithm: str = "HS256"
    jwt_required_role: str = "Users.Administer"

    # Confirmation codes
    confirmation_code_length: int = Field(default=5, ge=1, le=8)
    confirmation_code_expiry_value: int = Field(default=24, ge=1)
    confirmation_code_expiry_unit: ExpiryUnit = "hours"
    confirmation_code_sweep_enabled: bool = True
    confirmation_code_sweep_interval_seconds: int = Field(default=3600, ge=1)

    audit_queue_size: int = Field(default=1000, ge=1)

    # 0 disables the alert type / language cache
    reference_data_cache_ttl_seconds: int = Field(default=300, ge=0)

    log_level: str = "INFO"

    @computed_field(repr=False)  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        password = self.postgres_password.get_secret_value()
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.api_cors_origins.split(",") if o.strip()]

    @property
    def confirmation_code_expiry(self) -> timedelta:
        """Lifetime of a newly issued confirmation code."""
        return timedelta(
            **{self.confirmation_code_expiry_unit: self.confirmation_code_expiry_value},
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]


def clear_settings_cache() -> None:
    get_settings.cache_clear()
