"""Relay failure types.

Every failure raised by the relay client is a ``RelayError`` so the gateway
handles a single type. The subclasses keep enough detail to tell an
upstream rejection from a transport problem, even though the HTTP surface
currently reports both the same way.
"""


class RelayError(Exception):
    """Base class for relay client failures."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(message)


class UpstreamError(RelayError):
    """Upstream responded with a non-2xx status."""

    LABELS = {
        "encrypt": "Encryption API error",
        "decrypt": "Decryption API error",
        "fields": "Fields API error",
        "health": "Health check failed",
    }

    def __init__(self, operation: str, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        label = self.LABELS.get(operation, "Encryption API error")
        super().__init__(
            operation,
            f"{label} (HTTP {status_code}): {body}",
        )


class TransportError(RelayError):
    """Request could not complete or its response could not be used."""

    SUMMARY = "Failed to connect to encryption service"

    def __init__(self, operation: str, cause: str):
        self.cause = cause
        super().__init__(operation, f"{self.SUMMARY}: {cause}")


class ResponseDecodeError(TransportError):
    """Upstream answered 2xx with a body that is not a response envelope."""

    SUMMARY = "Invalid response from encryption service"


class FieldExtractionError(RelayError):
    """Returned data has no usable value for the requested field."""

    def __init__(self, operation: str, field: str, reason: str = "missing from response data"):
        self.field = field
        self.reason = reason
        super().__init__(operation, f"Field '{field}' {reason}")
