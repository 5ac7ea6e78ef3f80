"""
Session edit controller.

Owns one open edit form: the draft, its staging buffer and the
cancellation token of the current save. ``save`` is the action boundary:
it validates, resolves staged uploads, commits, and converts every failure
into a notice while keeping the user's edits.

Dependencies: session_desk.application.services, session_desk.core
System role: Edit-session workflow orchestration
"""

import logging

from session_desk.application.services.hierarchy_service import HierarchyLoader
from session_desk.application.services.material_staging import MaterialStagingBuffer
from session_desk.application.services.notices import NoticeBoard
from session_desk.application.services.session_committer import SessionRecordCommitter
from session_desk.boundary.http import LiveCoursesClient
from session_desk.core.cancellation import CancellationToken
from session_desk.core.exceptions import (
    MaterialUploadError,
    OperationCancelledError,
    SessionCommitError,
    SessionDeskException,
    ValidationError,
)
from session_desk.models.draft import SessionDraft
from session_desk.models.session import Material, Session

logger = logging.getLogger(__name__)


class SessionEditController:
    """Edit form for one session."""

    def __init__(
        self,
        client: LiveCoursesClient,
        notices: NoticeBoard | None = None,
        loader: HierarchyLoader | None = None,
    ) -> None:
        """
        Initialize controller.

        Args:
            client: Backend client bound to the trainer's token
            notices: Board receiving action notices
            loader: When given, its session list is refreshed after a save
        """
        self.client = client
        self.notices = notices or NoticeBoard()
        self.loader = loader
        self.committer = SessionRecordCommitter(client)
        self.session_id: str | None = None
        self.draft: SessionDraft | None = None
        self.materials: MaterialStagingBuffer | None = None
        self.is_saving = False
        self.last_error: SessionDeskException | None = None
        self._cancel_token = CancellationToken()

    @property
    def is_open(self) -> bool:
        return self.draft is not None

    def begin(self, session: Session) -> SessionDraft:
        """Open the form seeded from a stored session."""
        return self.begin_draft(session.id, SessionDraft.from_session(session))

    def begin_draft(self, session_id: str, draft: SessionDraft) -> SessionDraft:
        """Open the form with an explicit draft, discarding any staged files."""
        self.session_id = session_id
        self.draft = draft
        # Buffer edits the draft's material list in place
        self.materials = MaterialStagingBuffer(self.client, draft.session_materials)
        self._cancel_token = CancellationToken()
        return draft

    def update_fields(self, **changes) -> SessionDraft:
        """
        Assign scalar draft fields.

        Raises:
            ValidationError: Unknown field or invalid value
        """
        draft = self._require_open()
        for name, value in changes.items():
            if name == "session_materials" or name not in SessionDraft.model_fields:
                raise ValidationError(f"Unknown session field '{name}'", field=name)
            try:
                setattr(draft, name, value)
            except ValueError as e:
                raise ValidationError(f"Invalid value for {name}", field=name) from e
        return draft

    async def save(self) -> Session | None:
        """
        Upload staged files, then commit the session in one update.

        Returns:
            Session | None: Updated session on success, None on failure
        """
        draft = self._require_open()
        if self.is_saving:
            self.notices.error("Session update already in progress")
            return None

        session_id = self.session_id
        buffer = self.materials
        token = self._cancel_token
        self.is_saving = True
        self.last_error = None
        try:
            draft.validate_for_save()
            missing = buffer.missing_files()
            if missing:
                raise ValidationError(
                    f"Material {missing[0] + 1} needs a file or URL",
                    field="sessionMaterials",
                    details={"slots": missing},
                )
            resolved = await buffer.resolve_all(
                session_id, cancel_token=token, on_upload=self._announce_upload
            )
            if buffer.has_unresolved():
                raise ValidationError(
                    "Materials still have files waiting to upload",
                    field="sessionMaterials",
                )
            session = await self.committer.commit(
                session_id, draft, resolved, cancel_token=token
            )
        except ValidationError as e:
            self.last_error = e
            self.notices.error(e.message, title="Validation Error")
            return None
        except MaterialUploadError as e:
            self.last_error = e
            self.notices.error(e.message, title="Upload Error")
            return None
        except SessionCommitError as e:
            self.last_error = e
            logger.warning(
                "Session update failed",
                extra={"session_id": session_id, "error": e.message},
            )
            self.notices.error(e.message or "Failed to update session")
            return None
        except OperationCancelledError as e:
            self.last_error = e
            logger.info("Session save abandoned", extra={"session_id": session_id})
            return None
        finally:
            self.is_saving = False

        if token.cancelled:
            # Form was closed while the update was in flight
            return session

        self.notices.success("Session updated successfully")
        self.close()
        if self.loader is not None:
            await self.loader.refresh_sessions()
        if session is None:
            session = Session.model_validate(
                {"_id": session_id, **draft.to_update_payload(resolved)}
            )
        return session

    def close(self) -> None:
        """Close the form; a save still in flight stops at its next step."""
        self._cancel_token.cancel("edit form closed")
        if self.materials is not None:
            self.materials.clear()
        self.session_id = None
        self.draft = None
        self.materials = None

    async def delete_session(self, session_id: str) -> bool:
        """
        Delete a session and refresh the list.

        Returns:
            bool: True when the backend accepted the deletion
        """
        try:
            await self.committer.delete(session_id)
        except SessionCommitError as e:
            logger.warning(
                "Session deletion failed",
                extra={"session_id": session_id, "error": e.message},
            )
            self.notices.error("Failed to delete session")
            return False
        self.notices.success("Session deleted successfully")
        if self.loader is not None:
            await self.loader.refresh_sessions()
        return True

    def _announce_upload(self, slot_index: int, material: Material) -> None:
        self.notices.info("Uploading", f"Uploading {material.title or 'file'}...")

    def _require_open(self) -> SessionDraft:
        if self.draft is None:
            raise ValidationError("No session is being edited")
        return self.draft
