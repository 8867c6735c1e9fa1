# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_SECTION_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)

_DEV_SECRETS = frozenset({"", "dev", "development", "test", "changeme"})


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///phoneauth.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _SECTION_CONFIG

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class TokenConfig(BaseSettings):
    # Minutes; clients receive ``ttl_minutes * 60`` as ``expires_in``.
    ttl_minutes: int = Field(60, ge=1, alias="TOKEN_TTL_MINUTES")
    password_hash_method: str = Field("scrypt", alias="PASSWORD_HASH_METHOD")

    model_config = _SECTION_CONFIG

    @property
    def ttl_seconds(self) -> int:
        return self.ttl_minutes * 60


class SecurityConfig(BaseSettings):
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _SECTION_CONFIG

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("enable_hsts", mode="before")
    @classmethod
    def _parse_hsts(cls, value: str | bool) -> bool:
        return _parse_bool(value)


class LoggingConfig(BaseSettings):
    level: str = Field("INFO", alias="LOG_LEVEL")
    # Empty means ``instance/phoneauth.log`` next to the package.
    file: str = Field("", alias="LOG_FILE")

    model_config = _SECTION_CONFIG

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return str(value).strip().upper() or "INFO"


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    tokens: TokenConfig = Field(default_factory=TokenConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @model_validator(mode="after")
    def _require_real_secret_in_production(self) -> "AppConfig":
        if self.is_production() and self.secret_key.strip().lower() in _DEV_SECRETS:
            raise ValueError(
                "SECRET_KEY must be a strong random value when APP_ENV is production"
            )
        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    def security_warnings(self) -> list[str]:
        """Non-fatal production misconfigurations, logged once at start-up."""
        if not self.is_production():
            return []
        warnings = []
        if "*" in self.security.allowed_origins:
            warnings.append("CORS allows wildcard (*) origins")
        if not self.security.enable_hsts:
            warnings.append("HSTS is disabled")
        return warnings


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "SecurityConfig",
    "TokenConfig",
    "load_config",
]
