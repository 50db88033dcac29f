"""API routes for the encryption client."""

from services.encryption_client.app.api.client import router as client_router

__all__ = [
    "client_router",
]
