"""
Zap Manager — Configuration settings.

Loads from environment variables (or a .env file) with sensible defaults.
"""

from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database
    database_url: str = "sqlite:///./instances.db"

    # Evolution gateway
    evolution_api_url: str = "http://localhost:8080"
    evolution_api_key: str = ""
    # None = wait for the gateway indefinitely
    evolution_timeout: Optional[float] = None
    # Seconds to wait before asking the gateway for a QR code after creation
    qr_fetch_delay: float = 1.0

    # Server
    debug: bool = False

    # JWT secret for token signing (required)
    jwt_secret_key: Optional[str] = None
    access_token_expire_hours: int = 24

    # Encryption key for stored AI provider credentials
    # Generate with: python -c "from cryptography.fernet import Fernet; print(Fernet.generate_key().decode())"
    encryption_key: Optional[str] = None

    # Administrator seeded on first start when no user with this name exists
    default_admin_username: str = "admin"
    default_admin_password: str = "admin123"

    # Comma-separated list, e.g. CORS_ORIGINS=http://localhost:3000,http://example.com
    cors_origins: str = ""

    # Login throttling
    rate_limit_enabled: bool = True
    login_rate_limit: str = "10/minute"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
