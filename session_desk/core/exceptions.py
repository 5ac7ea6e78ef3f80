"""
Exception hierarchy for the session-management workflow.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class SessionDeskException(Exception):
    """Base exception for all session-desk errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(SessionDeskException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class PortalRequestError(SessionDeskException):
    """Raised when a call to the live-courses backend fails."""

    def __init__(
        self,
        message: str,
        operation: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize backend request error.

        Args:
            message: Error message (backend-provided message when available)
            operation: Logical operation that failed (list_batches, upload_material, ...)
            status_code: HTTP status code, None for transport failures
            details: Additional context
        """
        details = details or {}
        details["operation"] = operation
        if status_code is not None:
            details["status_code"] = status_code
        self.operation = operation
        self.status_code = status_code
        super().__init__(message, details)


class MaterialUploadError(SessionDeskException):
    """Raised when one staged material fails to upload during resolution."""

    def __init__(
        self,
        slot_index: int,
        title: str,
        reason: str,
        uploaded_slots: list[int] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize upload error.

        Args:
            slot_index: Index of the material slot whose upload failed
            title: Title of the failing material (may be empty)
            reason: Underlying failure message
            uploaded_slots: Slots uploaded earlier in the same resolution
            details: Additional context
        """
        details = details or {}
        details["slot_index"] = slot_index
        if uploaded_slots:
            details["uploaded_slots"] = list(uploaded_slots)
        self.slot_index = slot_index
        self.title = title
        self.reason = reason
        self.uploaded_slots = list(uploaded_slots or [])
        super().__init__(f"Failed to upload {title or 'file'}: {reason}", details)


class SessionCommitError(SessionDeskException):
    """Raised when the session-update request is rejected."""

    def __init__(
        self,
        message: str,
        session_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize commit error.

        Args:
            message: Error message
            session_id: Session whose update failed
            details: Additional context
        """
        details = details or {}
        if session_id:
            details["session_id"] = session_id
        super().__init__(message, details)


class AttendanceSubmitError(SessionDeskException):
    """Raised when an attendance submission is rejected."""

    def __init__(
        self,
        message: str,
        session_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if session_id:
            details["session_id"] = session_id
        super().__init__(message, details)


class OperationCancelledError(SessionDeskException):
    """Raised when an action is abandoned through its cancellation token."""

    pass
