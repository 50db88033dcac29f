"""Relay client for the upstream encryption service."""

from services.encryption_client.app.relay.client import EncryptionApiClient
from services.encryption_client.app.relay.errors import (
    FieldExtractionError,
    RelayError,
    ResponseDecodeError,
    TransportError,
    UpstreamError,
)

__all__ = [
    "EncryptionApiClient",
    "FieldExtractionError",
    "RelayError",
    "ResponseDecodeError",
    "TransportError",
    "UpstreamError",
]
