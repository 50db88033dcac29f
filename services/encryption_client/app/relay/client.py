"""HTTP client for the upstream encryption service."""

import asyncio
import time
from typing import Any

import httpx

from services.encryption_client.app.config import EncryptionApiSettings
from services.encryption_client.app.core.schemas import (
    EncryptionRequest,
    EncryptionResponse,
    Payload,
)
from services.encryption_client.app.relay.errors import (
    FieldExtractionError,
    ResponseDecodeError,
    TransportError,
    UpstreamError,
)
from shared.utils.logging import (
    describe_payload,
    get_correlation_id,
    get_logger,
    is_valid_correlation_id,
)
from shared.utils.metrics import create_counter, create_histogram

logger = get_logger(__name__)

UPSTREAM_REQUESTS = create_counter(
    "encryption_api_requests_total",
    "Requests sent to the upstream encryption service",
    ["operation", "outcome"],
)

UPSTREAM_LATENCY = create_histogram(
    "encryption_api_request_duration_seconds",
    "Upstream encryption service round trip in seconds",
    ["operation"],
)

CORRELATION_ID_HEADER = "X-Correlation-ID"


class EncryptionApiClient:
    """Relay client for the upstream encryption service.

    Each operation is a single request awaited within a timeout: no retries,
    no caching. Encrypt/decrypt are bounded by ``read_timeout``; the fields
    and health lookups are bounded by ``connect_timeout``.
    """

    def __init__(
        self,
        config: EncryptionApiSettings,
        client: httpx.AsyncClient | None = None,
        limits: httpx.Limits | None = None,
    ):
        """Initialize the relay client.

        Args:
            config: Upstream endpoints and timeouts
            client: Pre-built HTTP client (created lazily when omitted)
            limits: Connection pool limits for the lazily created client
        """
        self.config = config
        self.timeout = httpx.Timeout(
            config.read_timeout / 1000,
            connect=config.connect_timeout / 1000,
        )
        self.limits = limits or httpx.Limits(max_keepalive_connections=20, max_connections=100)
        self._client = client

    async def get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout, limits=self.limits)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def encrypt_data(self, data: Payload) -> EncryptionResponse:
        """Encrypt sensitive fields in the provided data."""
        logger.info("encryption_request", **describe_payload(data))
        return await self._send(
            "encrypt",
            "POST",
            self.config.encrypt_endpoint,
            self.config.read_timeout,
            body=EncryptionRequest(data=data),
        )

    async def decrypt_data(self, encrypted_data: Payload) -> EncryptionResponse:
        """Decrypt encrypted fields in the provided data."""
        logger.info("decryption_request", **describe_payload(encrypted_data))
        return await self._send(
            "decrypt",
            "POST",
            self.config.decrypt_endpoint,
            self.config.read_timeout,
            body=EncryptionRequest(data=encrypted_data),
        )

    async def get_encryptable_fields(self) -> EncryptionResponse:
        """Get the list of fields the upstream service will encrypt."""
        return await self._send(
            "fields",
            "GET",
            self.config.fields_endpoint,
            self.config.connect_timeout,
        )

    async def health_check(self) -> str:
        """Get the upstream health status text."""
        return await self._send(
            "health",
            "GET",
            self.config.health_endpoint,
            self.config.connect_timeout,
            as_text=True,
        )

    async def encrypt_field(self, field_name: str, value: str) -> str:
        """Encrypt a single field value."""
        response = await self.encrypt_data({field_name: value})
        return self._extract_field("encrypt_field", response, field_name)

    async def decrypt_field(self, field_name: str, encrypted_value: str) -> str:
        """Decrypt a single field value."""
        response = await self.decrypt_data({field_name: encrypted_value})
        return self._extract_field("decrypt_field", response, field_name)

    async def _send(
        self,
        operation: str,
        method: str,
        endpoint: str,
        timeout_ms: int,
        body: EncryptionRequest | None = None,
        as_text: bool = False,
    ) -> EncryptionResponse | str:
        """Issue one request and wait for the complete response.

        Args:
            operation: Operation name for logs, metrics and errors
            method: HTTP method
            endpoint: Endpoint path appended to the base URL
            timeout_ms: Bound on the whole round trip
            body: JSON body, if any
            as_text: Return the raw body text instead of the decoded envelope

        Returns:
            The decoded envelope, or the body text when ``as_text`` is set

        Raises:
            UpstreamError: On a non-2xx status
            ResponseDecodeError: On a 2xx body that is not an envelope
            TransportError: On connection failure or timeout
        """
        url = self.config.url_for(endpoint)
        client = await self.get_client()
        start_time = time.perf_counter()

        try:
            response = await asyncio.wait_for(
                client.request(
                    method,
                    url,
                    json=body.model_dump() if body is not None else None,
                    headers=self._build_headers(),
                ),
                timeout=timeout_ms / 1000,
            )
        except asyncio.TimeoutError:
            self._record(operation, "timeout", start_time)
            logger.error("encryption_api_timeout", operation=operation, url=url, timeout_ms=timeout_ms)
            raise TransportError(operation, f"request timed out after {timeout_ms} ms") from None
        except httpx.TimeoutException as e:
            self._record(operation, "timeout", start_time)
            logger.error("encryption_api_timeout", operation=operation, url=url, error=str(e))
            raise TransportError(operation, f"request timed out ({type(e).__name__})") from e
        except httpx.HTTPError as e:
            self._record(operation, "transport_error", start_time)
            logger.error("encryption_api_unreachable", operation=operation, url=url, error=str(e))
            raise TransportError(operation, str(e) or type(e).__name__) from e

        logger.info(
            "encryption_api_request",
            operation=operation,
            method=method,
            url=url,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 1),
        )

        if not response.is_success:
            self._record(operation, "upstream_error", start_time)
            logger.error(
                "encryption_api_error",
                operation=operation,
                status_code=response.status_code,
                body=response.text,
            )
            raise UpstreamError(operation, response.status_code, response.text)

        if as_text:
            result: EncryptionResponse | str = response.text
        else:
            try:
                result = self._decode_envelope(operation, response)
            except ResponseDecodeError:
                self._record(operation, "bad_response", start_time)
                raise

        self._record(operation, "success", start_time)
        return result

    def _decode_envelope(self, operation: str, response: httpx.Response) -> EncryptionResponse:
        """Decode a 2xx body into the response envelope."""
        try:
            # pydantic's ValidationError is a ValueError, as is JSONDecodeError
            return EncryptionResponse.model_validate(response.json())
        except ValueError as e:
            logger.error("encryption_api_bad_body", operation=operation, error=str(e))
            raise ResponseDecodeError(
                operation, f"undecodable response body ({type(e).__name__})"
            ) from e

    @staticmethod
    def _extract_field(operation: str, response: EncryptionResponse, field_name: str) -> str:
        """Pull a single field's value out of the returned data."""
        if not response.data or field_name not in response.data:
            logger.warning("field_missing_from_response", operation=operation, field=field_name)
            raise FieldExtractionError(operation, field_name)

        value: Any = response.data[field_name]
        if not isinstance(value, str):
            logger.warning(
                "field_not_string",
                operation=operation,
                field=field_name,
                value_type=type(value).__name__,
            )
            raise FieldExtractionError(operation, field_name, "is not a string value")
        return value

    def _build_headers(self) -> dict[str, str]:
        """Headers for outbound requests."""
        headers = {"Accept": "application/json, text/plain"}
        correlation_id = get_correlation_id()
        if is_valid_correlation_id(correlation_id):
            headers[CORRELATION_ID_HEADER] = correlation_id
        return headers

    @staticmethod
    def _record(operation: str, outcome: str, start_time: float) -> float:
        """Record upstream call metrics and return the elapsed seconds."""
        duration = time.perf_counter() - start_time
        UPSTREAM_REQUESTS.labels(operation=operation, outcome=outcome).inc()
        UPSTREAM_LATENCY.labels(operation=operation).observe(duration)
        return duration
