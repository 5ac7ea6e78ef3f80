"""
Session record committer.

Turns a draft plus its resolved materials into one session-update request.
Also owns session deletion, the other write on a session record.

Dependencies: session_desk.boundary.http, session_desk.core, session_desk.models
System role: Session write side
"""

import logging

from session_desk.boundary.http import LiveCoursesClient
from session_desk.core.cancellation import CancellationToken
from session_desk.core.exceptions import PortalRequestError, SessionCommitError
from session_desk.models.draft import SessionDraft
from session_desk.models.session import Material, Session

logger = logging.getLogger(__name__)


class SessionRecordCommitter:
    """Applies edits to a session in a single request."""

    def __init__(self, client: LiveCoursesClient) -> None:
        self.client = client

    async def commit(
        self,
        session_id: str,
        draft: SessionDraft,
        resolved_materials: list[Material],
        cancel_token: CancellationToken | None = None,
    ) -> Session | None:
        """
        Send the draft's scalar fields with the resolved materials.

        Args:
            session_id: Session to update
            draft: Edited scalar fields
            resolved_materials: Materials whose uploads already completed
            cancel_token: Checked once before the request is issued

        Returns:
            Session | None: Updated session when the backend echoes it

        Raises:
            SessionCommitError: Backend rejected the update
            OperationCancelledError: Token cancelled before sending
        """
        payload = draft.to_update_payload(resolved_materials)
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        try:
            session = await self.client.update_session(session_id, payload)
        except PortalRequestError as e:
            raise SessionCommitError(
                e.message or "Failed to update session",
                session_id=session_id,
                details={"status_code": e.status_code},
            ) from e

        logger.info(
            "Session updated",
            extra={
                "session_id": session_id,
                "material_count": len(resolved_materials),
                "fields": sorted(payload),
            },
        )
        return session

    async def delete(self, session_id: str) -> None:
        """
        Delete a session.

        Raises:
            SessionCommitError: Backend rejected the deletion
        """
        try:
            await self.client.delete_session(session_id)
        except PortalRequestError as e:
            raise SessionCommitError(
                e.message or "Failed to delete session",
                session_id=session_id,
                details={"status_code": e.status_code},
            ) from e
        logger.info("Session deleted", extra={"session_id": session_id})
