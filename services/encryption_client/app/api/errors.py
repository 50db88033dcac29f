"""Mapping from relay failures to the gateway's HTTP contract."""

from fastapi import status

from services.encryption_client.app.relay.errors import RelayError
from shared.utils.logging import get_logger

logger = get_logger(__name__)


def map_relay_error(exc: RelayError, prefix: str = "") -> tuple[int, str]:
    """Map a relay failure to the status code and message returned to callers.

    Upstream rejections, transport failures and field extraction failures all
    surface as 500; the original status code and error type stay internal.

    Args:
        exc: Failure raised by the relay client
        prefix: Operation-specific message prefix

    Returns:
        (HTTP status code, message)
    """
    logger.error(
        "relay_failed",
        operation=exc.operation,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return status.HTTP_500_INTERNAL_SERVER_ERROR, f"{prefix}{exc}"
