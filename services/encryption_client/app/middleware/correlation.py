"""Correlation ID middleware for request tracing."""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from shared.utils.logging import is_valid_correlation_id, set_correlation_id


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Middleware to handle correlation IDs for request tracing.

    The ID is also forwarded to the upstream encryption service by the relay
    client, so one ID spans both hops.
    """

    CORRELATION_ID_HEADER = "X-Correlation-ID"

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        """Process request with correlation ID.

        Args:
            request: FastAPI request
            call_next: Next middleware/handler

        Returns:
            Response with correlation ID header
        """
        # Reuse the caller's ID when it is header-safe, otherwise generate one
        incoming = request.headers.get(self.CORRELATION_ID_HEADER)
        if not is_valid_correlation_id(incoming):
            incoming = None
        correlation_id = set_correlation_id(incoming)
        request.state.correlation_id = correlation_id

        response = await call_next(request)

        response.headers[self.CORRELATION_ID_HEADER] = correlation_id
        return response
