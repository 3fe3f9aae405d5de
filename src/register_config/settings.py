"""Process-wide settings for Client Register.

Sources, highest priority first:

1. OS environment variables
2. The env file named by ``CLIENT_REGISTER_ENV_FILE``
3. ``config/.env.dev``, then ``config/.env``
4. Field defaults

A missing or blank signing key and an uncompilable password pattern are
rejected while loading, so the service cannot start with them.
"""

from __future__ import annotations

import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PASSWORD_REGEX = r"^(?=.*[A-Z])(?=.*\d).{8,}$"
ENV_FILE_VARIABLE = "CLIENT_REGISTER_ENV_FILE"


def _find_project_root() -> Path:
    """Walk up from this file to the first directory that looks like the root."""
    here = Path(__file__).resolve().parent

    for candidate in (here, *here.parents):
        if (candidate / "config").is_dir() or (candidate / "pyproject.toml").is_file():
            return candidate
        if candidate == Path("/app"):
            return candidate

    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    explicit = os.environ.get(ENV_FILE_VARIABLE)
    if explicit:
        path = Path(explicit)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    for name in (".env.dev", ".env"):
        path = get_config_dir() / name
        if path.exists():
            return path

    return None


class Settings(BaseSettings):
    """Typed configuration; field names map to upper-case env variables."""

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Required: HS256 signing key
    jwt_secret_key: SecretStr
    jwt_token_expire_hours: int = Field(default=24, gt=0)

    # Password format rule and bcrypt cost
    password_regex: str = DEFAULT_PASSWORD_REGEX
    password_hash_rounds: int = Field(default=12, ge=4, le=31)

    app_name: str = "Client Register"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "sqlite+aiosqlite:///./data/client_register.db"

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    # Comma-separated; empty disables CORS
    api_cors_origins: str = ""

    @field_validator("jwt_secret_key")
    @classmethod
    def _require_signing_key(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            msg = "JWT_SECRET_KEY cannot be empty"
            raise ValueError(msg)
        return v

    @field_validator("password_regex")
    @classmethod
    def _require_compilable_pattern(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            msg = f"PASSWORD_REGEX is not a valid regular expression: {e}"
            raise ValueError(msg) from e
        return v

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _join_cors_origins(cls, v: Any) -> str:
        if isinstance(v, (list, tuple)):
            return ",".join(v)
        return str(v) if v else ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.api_cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Load settings once per process.

    Raises pydantic's ValidationError when JWT_SECRET_KEY is absent or
    any value is invalid.
    """
    return Settings()  # type: ignore[call-arg]


def clear_settings_cache() -> None:
    get_settings.cache_clear()
