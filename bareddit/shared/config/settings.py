# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

TEN_YEARS_SECONDS = 60 * 60 * 24 * 365 * 10
THREE_DAYS_SECONDS = 60 * 60 * 24 * 3


def _parse_bool(value: str | bool | None) -> bool | None:
    if value is None:
        return None
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class _Section(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
    )


class DatabaseConfig(_Section):
    url: str = Field("sqlite:///bareddit.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")


class RedisConfig(_Section):
    url: str | None = Field(None, alias="REDIS_URL")
    socket_timeout: float = Field(5.0, ge=0.1, alias="REDIS_SOCKET_TIMEOUT")


class SessionConfig(_Section):
    cookie_name: str = Field("qid", alias="SESSION_COOKIE_NAME")
    # Observed default is ten years; operators are expected to lower it.
    max_age: int = Field(TEN_YEARS_SECONDS, ge=1, alias="SESSION_MAX_AGE")
    cookie_secure: bool | None = Field(None, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Lax", alias="COOKIE_SAMESITE")
    reset_token_ttl: int = Field(THREE_DAYS_SECONDS, ge=1, alias="RESET_TOKEN_TTL")

    @field_validator("cookie_secure", mode="before")
    @classmethod
    def _parse_secure(cls, value: str | bool | None) -> bool | None:
        if value == "":
            return None
        return _parse_bool(value)


class MailConfig(_Section):
    enabled: bool = Field(False, alias="MAIL_ENABLED")
    smtp_host: str = Field("localhost", alias="SMTP_HOST")
    smtp_port: int = Field(587, alias="SMTP_PORT")
    smtp_username: str | None = Field(None, alias="SMTP_USERNAME")
    smtp_password: str | None = Field(None, alias="SMTP_PASSWORD")
    smtp_use_tls: bool = Field(True, alias="SMTP_USE_TLS")
    smtp_timeout: float = Field(10.0, ge=0.1, alias="SMTP_TIMEOUT")
    sender: str = Field("bareddit <no-reply@bareddit.local>", alias="MAIL_SENDER")

    @field_validator("enabled", "smtp_use_tls", mode="before")
    @classmethod
    def _parse_flags(cls, value: str | bool) -> bool:
        return bool(_parse_bool(value))


class SecurityConfig(_Section):
    allowed_origins: Annotated[list[str], NoDecode] = Field(
        ["http://localhost:3000"], alias="ALLOWED_ORIGINS"
    )
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("enable_hsts", mode="before")
    @classmethod
    def _parse_hsts(cls, value: str | bool) -> bool:
        return bool(_parse_bool(value))


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: str | None = Field(None, alias="LOG_FILE")
    frontend_url: str = Field("http://localhost:3000", alias="FRONTEND_URL")

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    redis: RedisConfig = Field(default_factory=RedisConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    mail: MailConfig = Field(default_factory=MailConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_assignment=True,
        validate_by_name=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return bool(_parse_bool(value))

    @field_validator("frontend_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.secret_key in ("dev", "development", "test", ""):
            print(
                "\n❌ CRITICAL SECURITY ERROR: Insecure SECRET_KEY detected in production!\n"
                "   SECRET_KEY signs the session cookie and must be a strong random value.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        warnings = []
        if not self.cookie_secure:
            warnings.append("⚠️  Cookie Secure flag is DISABLED (use HTTPS!)")
        if "*" in self.security.allowed_origins:
            warnings.append("⚠️  CORS allows wildcard (*) origins")
        if self.session.max_age >= TEN_YEARS_SECONDS:
            warnings.append("⚠️  Session cookie lifetime is ten years or more")
        if not self.security.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)
            print(
                "   Consider enabling these security features in production.\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    @property
    def cookie_secure(self) -> bool:
        if self.session.cookie_secure is not None:
            return self.session.cookie_secure
        return self.is_production()


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "MailConfig",
    "RedisConfig",
    "SecurityConfig",
    "SessionConfig",
    "load_config",
]
