"""Shared utilities for the encryption client services."""

from shared.utils.logging import (
    configure_logging,
    describe_payload,
    get_correlation_id,
    get_logger,
    is_valid_correlation_id,
    set_correlation_id,
)
from shared.utils.metrics import MetricsMiddleware, create_counter, create_histogram

__all__ = [
    "configure_logging",
    "describe_payload",
    "get_correlation_id",
    "get_logger",
    "is_valid_correlation_id",
    "set_correlation_id",
    "MetricsMiddleware",
    "create_counter",
    "create_histogram",
]
