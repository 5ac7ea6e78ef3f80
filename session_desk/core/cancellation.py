"""
Cancellation token for user-triggered actions.

A closed edit form cancels its token; long-running actions check it
between network calls so abandoned work stops at the next boundary.
In-flight requests are not interrupted.

Dependencies: None
System role: Cooperative cancellation for the save pipeline
"""

from session_desk.core.exceptions import OperationCancelledError


class CancellationToken:
    """Cooperative cancellation flag shared by one action's steps."""

    def __init__(self) -> None:
        self._cancelled = False
        self.reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self, reason: str = "cancelled") -> None:
        if not self._cancelled:
            self.reason = reason
            self._cancelled = True

    def raise_if_cancelled(self) -> None:
        """
        Raise if the token was cancelled.

        Raises:
            OperationCancelledError: When ``cancel()`` has been called
        """
        if self._cancelled:
            raise OperationCancelledError(
                "Operation cancelled", details={"reason": self.reason}
            )
