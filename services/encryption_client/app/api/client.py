"""Encryption client routes relayed to the upstream encryption service."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse, PlainTextResponse

from services.encryption_client.app.api.deps import get_encryption_client
from services.encryption_client.app.api.errors import map_relay_error
from services.encryption_client.app.core.schemas import (
    EncryptionResponse,
    FieldDecryptionResult,
    FieldEncryptionResult,
    FieldErrorResult,
)
from services.encryption_client.app.relay.client import EncryptionApiClient
from services.encryption_client.app.relay.errors import RelayError
from shared.utils.logging import describe_payload, get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/client", tags=["Encryption Client"])


def _envelope_error(exc: RelayError, prefix: str) -> JSONResponse:
    status_code, message = map_relay_error(exc, prefix)
    return JSONResponse(
        status_code=status_code,
        content=EncryptionResponse.error(message).model_dump(by_alias=True, exclude_none=True),
    )


def _field_error(exc: RelayError) -> JSONResponse:
    status_code, message = map_relay_error(exc)
    return JSONResponse(
        status_code=status_code,
        content=FieldErrorResult(message=message).model_dump(),
    )


@router.post(
    "/encrypt",
    response_model=EncryptionResponse,
    response_model_exclude_none=True,
    responses={500: {"model": EncryptionResponse}},
)
async def encrypt_data(
    data: dict[str, Any] = Body(...),
    client: EncryptionApiClient = Depends(get_encryption_client),
):
    """Encrypt sensitive fields in the provided JSON data."""
    logger.info("encrypt_request_received", **describe_payload(data))
    try:
        return await client.encrypt_data(data)
    except RelayError as e:
        return _envelope_error(e, "Encryption failed: ")


@router.post(
    "/decrypt",
    response_model=EncryptionResponse,
    response_model_exclude_none=True,
    responses={500: {"model": EncryptionResponse}},
)
async def decrypt_data(
    encrypted_data: dict[str, Any] = Body(...),
    client: EncryptionApiClient = Depends(get_encryption_client),
):
    """Decrypt encrypted fields in the provided JSON data."""
    logger.info("decrypt_request_received", **describe_payload(encrypted_data))
    try:
        return await client.decrypt_data(encrypted_data)
    except RelayError as e:
        return _envelope_error(e, "Decryption failed: ")


@router.get(
    "/fields/encryptable",
    response_model=EncryptionResponse,
    response_model_exclude_none=True,
    responses={500: {"model": EncryptionResponse}},
)
async def get_encryptable_fields(
    client: EncryptionApiClient = Depends(get_encryption_client),
):
    """Get the list of fields that will be encrypted."""
    logger.info("encryptable_fields_requested")
    try:
        return await client.get_encryptable_fields()
    except RelayError as e:
        return _envelope_error(e, "Failed to get encryptable fields: ")


@router.get("/health", response_class=PlainTextResponse)
async def health_check(
    client: EncryptionApiClient = Depends(get_encryption_client),
) -> PlainTextResponse:
    """Health check - verifies the connection to the encryption API.

    Plain text on both success and failure.
    """
    logger.info("health_check_requested")
    try:
        health_status = await client.health_check()
    except RelayError as e:
        status_code, message = map_relay_error(e, "❌ Health check failed: ")
        return PlainTextResponse(message, status_code=status_code)

    return PlainTextResponse(f"✅ Client API Healthy | Encryption API: {health_status}")


@router.post(
    "/encrypt/field",
    response_model=FieldEncryptionResult,
    responses={500: {"model": FieldErrorResult}},
)
async def encrypt_field(
    field_name: str = Query(..., alias="fieldName"),
    value: str = Query(...),
    client: EncryptionApiClient = Depends(get_encryption_client),
):
    """Encrypt a single field value."""
    logger.info("encrypt_field_requested", field=field_name)
    try:
        encrypted_value = await client.encrypt_field(field_name, value)
    except RelayError as e:
        return _field_error(e)

    return FieldEncryptionResult(
        field=field_name,
        original_value=value,
        encrypted_value=encrypted_value,
    )


@router.post(
    "/decrypt/field",
    response_model=FieldDecryptionResult,
    responses={500: {"model": FieldErrorResult}},
)
async def decrypt_field(
    field_name: str = Query(..., alias="fieldName"),
    encrypted_value: str = Query(..., alias="encryptedValue"),
    client: EncryptionApiClient = Depends(get_encryption_client),
):
    """Decrypt a single field value."""
    logger.info("decrypt_field_requested", field=field_name)
    try:
        decrypted_value = await client.decrypt_field(field_name, encrypted_value)
    except RelayError as e:
        return _field_error(e)

    return FieldDecryptionResult(
        field=field_name,
        encrypted_value=encrypted_value,
        decrypted_value=decrypted_value,
    )
