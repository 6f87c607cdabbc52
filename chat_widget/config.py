"""Application configuration using Pydantic Settings."""

import re
import secrets
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from chat_widget.features.widget.models import WidgetConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = "development"
    app_debug: bool = True
    app_host: str = "0.0.0.0"
    app_port: int = 8080
    log_level: str = "INFO"

    # Site identity, used for the session cookie name
    site_name: str = "site"

    # CORS
    cors_origins: str = "http://localhost:3000,http://localhost:8080"

    # Rate limiting
    rate_limit_per_minute: int = 30

    # Webhook (kept server-side, never sent to the page)
    webhook_url: str = ""
    webhook_timeout: float = 30.0

    # Anti-forgery tokens; a per-process secret is only safe with one worker
    nonce_secret: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    nonce_ttl_seconds: int = 12 * 60 * 60

    # Widget display options
    widget: WidgetConfig = Field(default_factory=WidgetConfig)

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def session_cookie_name(self) -> str:
        slug = re.sub(r"[^a-z0-9]+", "_", self.site_name.lower()).strip("_")
        return f"{slug or 'site'}_chat_session"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
