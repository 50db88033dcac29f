"""API dependencies."""

import httpx

from services.encryption_client.app.config import get_encryption_api_settings, get_settings
from services.encryption_client.app.relay.client import EncryptionApiClient

# Singleton instances
_encryption_client: EncryptionApiClient | None = None


async def get_encryption_client() -> EncryptionApiClient:
    """Get encryption API client singleton."""
    global _encryption_client
    if _encryption_client is None:
        settings = get_settings()
        _encryption_client = EncryptionApiClient(
            config=get_encryption_api_settings(),
            limits=httpx.Limits(
                max_keepalive_connections=settings.max_keepalive_connections,
                max_connections=settings.max_connections,
            ),
        )
    return _encryption_client


async def cleanup_dependencies() -> None:
    """Cleanup singleton instances on shutdown."""
    global _encryption_client

    if _encryption_client:
        await _encryption_client.close()
        _encryption_client = None
