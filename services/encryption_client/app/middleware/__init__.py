"""Middleware components for the encryption client."""

from services.encryption_client.app.middleware.correlation import CorrelationMiddleware

__all__ = [
    "CorrelationMiddleware",
]
