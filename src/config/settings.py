from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str
    log_level: str = "INFO"
    environment: str = "dev"
    api_prefix: str = "/api/v1"
    # Static API key guarding every non-public route
    api_key: SecretStr
    api_key_header: str = "x-api-key"
    # CORS
    cors_allow_origins: str = "*"
    # Requests workflow
    admin_email: str | None = None
    notify_admin_on_status_change: bool = False
    admin_portal_url: str | None = None
    requests_default_page_size: int = 20
    # Email
    email_provider: str = "logging"  # logging | smtp | ses | unione
    email_from_name: str = "World FZO"
    email_from_address: str = "donotreply@theonezone.org"
    email_default_locale: str = "en"
    email_primary_color: str = "#0f4c81"
    # SMTP
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: SecretStr | None = None
    smtp_use_tls: bool = True
    smtp_use_ssl: bool = False
    # SES
    ses_region: str | None = None
    # UniOne email provider settings
    unione_api_key: SecretStr | None = None
    unione_api_url: str = "https://us1.unione.io/en/transactional/api/v1/email/send.json"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("database_url")
    @classmethod
    def ensure_asyncpg_scheme(cls, value: str) -> str:
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql+asyncpg://", 1)
        if value.startswith("postgresql://") and "+" not in value.split("://", 1)[0]:
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)
        return value

    @field_validator("admin_email")
    @classmethod
    def blank_admin_email_is_unset(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Convert cors_allow_origins string to list"""
        return [v.strip() for v in self.cors_allow_origins.split(",") if v.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
