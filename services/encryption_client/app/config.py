"""Encryption client configuration via environment variables."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Gateway service configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CLIENT_",
        case_sensitive=False,
        extra="ignore",
    )

    # Service settings
    service_name: str = "encryption-client"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = True

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8080

    # Outbound HTTP connection pool
    max_connections: int = 100
    max_keepalive_connections: int = 20

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]


class EncryptionApiSettings(BaseSettings):
    """Upstream encryption service endpoints and timeouts.

    Loaded once at startup and frozen; the relay client receives it at
    construction and never mutates it. Timeouts are in milliseconds.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ENCRYPTION_API_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    base_url: str = "http://localhost:8081"
    encrypt_endpoint: str = "/api/encryption/encrypt"
    decrypt_endpoint: str = "/api/encryption/decrypt"
    fields_endpoint: str = "/api/encryption/fields"
    health_endpoint: str = "/api/encryption/health"

    connect_timeout: int = Field(default=5000, gt=0, description="Connect and fields/health wait bound (ms)")
    read_timeout: int = Field(default=10000, gt=0, description="Encrypt/decrypt wait bound (ms)")

    def url_for(self, endpoint: str) -> str:
        """Full upstream URL for an endpoint path."""
        return f"{self.base_url.rstrip('/')}{endpoint}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_encryption_api_settings() -> EncryptionApiSettings:
    """Get cached upstream configuration."""
    return EncryptionApiSettings()
