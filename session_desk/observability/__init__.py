"""
Observability module.

Provides logging configuration and correlation ID tracking.
"""

from session_desk.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from session_desk.observability.logger import CorrelationIdFilter, configure_logging

__all__ = [
    "configure_logging",
    "CorrelationIdFilter",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
]
