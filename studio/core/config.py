# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration: all env-driven, zero hardcode.
Single source of truth for every tunable parameter.
"""

import os


def _csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    """Application settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "studio-portal")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8010"))

    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./studio.db")
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "5"))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "10"))
    DB_POOL_RECYCLE: int = int(os.getenv("DB_POOL_RECYCLE", "1800"))

    # Email delivery: Resend first, SMTP as fallback
    RESEND_API_KEY: str = os.getenv("RESEND_API_KEY", "")
    EMAIL_FROM_ADDRESS: str = os.getenv("EMAIL_FROM_ADDRESS", "noreply@studio.example")
    EMAIL_REPLY_TO: str = os.getenv("EMAIL_REPLY_TO", "")
    SMTP_HOST: str = os.getenv("SMTP_HOST", "")
    SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USER: str = os.getenv("SMTP_USER", "")
    SMTP_PASSWORD: str = os.getenv("SMTP_PASSWORD", "")
    SMTP_USE_TLS: bool = os.getenv("SMTP_USE_TLS", "true").lower() == "true"
    SMTP_TIMEOUT: float = float(os.getenv("SMTP_TIMEOUT", "10.0"))
    ADMIN_NOTIFICATION_EMAILS: list[str] = _csv(
        os.getenv("ADMIN_NOTIFICATION_EMAILS", "info@studio.example")
    )
    ADMIN_PANEL_URL: str = os.getenv("ADMIN_PANEL_URL", "http://localhost:3000/admin")
    STUDIO_NAME: str = os.getenv("STUDIO_NAME", "Studio")

    STUDIO_TIMEZONE: str = os.getenv("STUDIO_TIMEZONE", "America/Montevideo")

    BUILD_WEBHOOK_URL: str = os.getenv("BUILD_WEBHOOK_URL", "")
    BUILD_WEBHOOK_TOKEN: str = os.getenv("BUILD_WEBHOOK_TOKEN", "")
    BUILD_WEBHOOK_TIMEOUT: float = float(os.getenv("BUILD_WEBHOOK_TIMEOUT", "10.0"))

    DEFAULT_HISTORY_LIMIT: int = int(os.getenv("DEFAULT_HISTORY_LIMIT", "100"))
    REALTIME_WINDOW_MINUTES: int = int(os.getenv("REALTIME_WINDOW_MINUTES", "5"))
    RECENT_STATUS_CHANGES_LIMIT: int = int(os.getenv("RECENT_STATUS_CHANGES_LIMIT", "10"))
    FEATURED_WORKS_LIMIT: int = int(os.getenv("FEATURED_WORKS_LIMIT", "12"))

    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
