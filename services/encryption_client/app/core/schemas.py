"""Pydantic schemas for the encryption client service."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# Field name -> value, either plaintext or ciphertext
Payload = dict[str, Any]


class EncryptionRequest(BaseModel):
    """Outbound body for the upstream encrypt/decrypt endpoints."""

    data: Payload


class EncryptionResponse(BaseModel):
    """Uniform response envelope shared with the upstream service.

    Upstream bodies are decoded into this shape and returned to callers
    unchanged; error envelopes carry only ``status`` and ``message``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: str | None = None
    message: str | None = None
    data: Payload | None = None
    encrypted_fields: Any = Field(default=None, alias="encryptedFields")

    @classmethod
    def error(cls, message: str) -> "EncryptionResponse":
        """Build an error envelope."""
        return cls(status="error", message=message)


class FieldEncryptionResult(BaseModel):
    """Result of encrypting a single field."""

    model_config = ConfigDict(populate_by_name=True)

    field: str
    original_value: str = Field(alias="originalValue")
    encrypted_value: str = Field(alias="encryptedValue")
    status: Literal["success"] = "success"


class FieldDecryptionResult(BaseModel):
    """Result of decrypting a single field."""

    model_config = ConfigDict(populate_by_name=True)

    field: str
    encrypted_value: str = Field(alias="encryptedValue")
    decrypted_value: str = Field(alias="decryptedValue")
    status: Literal["success"] = "success"


class FieldErrorResult(BaseModel):
    """Single-field failure body."""

    status: Literal["error"] = "error"
    message: str
