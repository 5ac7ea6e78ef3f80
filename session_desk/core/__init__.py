"""
Core business logic module.

Contains the exception hierarchy and the pure domain rules of the
session-management workflow (reference normalization, attendance partition,
cancellation).
"""

from session_desk.core.attendance import AttendancePartition, partition_attendance
from session_desk.core.cancellation import CancellationToken
from session_desk.core.exceptions import (
    AttendanceSubmitError,
    MaterialUploadError,
    OperationCancelledError,
    PortalRequestError,
    SessionCommitError,
    SessionDeskException,
    ValidationError,
)
from session_desk.core.refs import normalize_ref

__all__ = [
    # Exceptions
    "SessionDeskException",
    "ValidationError",
    "PortalRequestError",
    "MaterialUploadError",
    "SessionCommitError",
    "AttendanceSubmitError",
    "OperationCancelledError",
    # Business logic
    "AttendancePartition",
    "partition_attendance",
    "CancellationToken",
    "normalize_ref",
]
