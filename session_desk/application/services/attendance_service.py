"""
Attendance reconciler.

Drives the attendance dialog for one session: loads the batch roster and
any stored attendance, lets the trainer edit a present-set, and submits the
full present/absent partition. Absentees are always the roster complement.

State machine per dialog open:

    UNLOADED -> LOADED_EMPTY | LOADED_EXISTING -> EDITING -> SUBMITTING
    SUBMITTING -> CLOSED on success, back to EDITING on failure

Dependencies: session_desk.boundary.http, session_desk.core
System role: Attendance workflow orchestration
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from session_desk.application.services.hierarchy_service import HierarchyLoader
from session_desk.application.services.notices import NoticeBoard
from session_desk.boundary.http import LiveCoursesClient
from session_desk.core.attendance import AttendancePartition, partition_attendance
from session_desk.core.exceptions import (
    AttendanceSubmitError,
    PortalRequestError,
    ValidationError,
)
from session_desk.core.refs import normalize_ref
from session_desk.models.batch import RosterEntry

logger = logging.getLogger(__name__)


class AttendanceState(str, Enum):
    UNLOADED = "unloaded"
    LOADED_EMPTY = "loaded_empty"
    LOADED_EXISTING = "loaded_existing"
    EDITING = "editing"
    SUBMITTING = "submitting"
    CLOSED = "closed"


_EDITABLE = {
    AttendanceState.LOADED_EMPTY,
    AttendanceState.LOADED_EXISTING,
    AttendanceState.EDITING,
}


@dataclass(frozen=True)
class AttendanceSummary:
    total: int
    present: int
    absent: int


class AttendanceReconciler:
    """Present/absent editor for one session's attendance."""

    def __init__(
        self,
        client: LiveCoursesClient,
        notices: NoticeBoard | None = None,
        loader: HierarchyLoader | None = None,
    ) -> None:
        """
        Initialize reconciler.

        Args:
            client: Backend client bound to the trainer's token
            notices: Board receiving action notices
            loader: When given, its session list is refreshed after a submit
        """
        self.client = client
        self.notices = notices or NoticeBoard()
        self.loader = loader
        self.state = AttendanceState.UNLOADED
        self.session_id: str | None = None
        self.batch_id: str | None = None
        self.roster: list[RosterEntry] = []
        self.roster_loaded = False
        self.had_existing = False
        self._present: set[str] = set()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    async def open(self, session_id: str, batch_ref: Any) -> AttendanceState:
        """
        Load roster and stored attendance for a session.

        Args:
            session_id: Session whose attendance is edited
            batch_ref: Bare batch id or embedded batch document

        Returns:
            AttendanceState: LOADED_EMPTY or LOADED_EXISTING
        """
        batch_id = normalize_ref(batch_ref)
        if batch_id is None:
            raise ValidationError("Session has no batch", field="batchId")

        self.session_id = session_id
        self.batch_id = batch_id
        self.roster = []
        self.roster_loaded = False
        self._present = set()
        self.had_existing = False

        try:
            self.roster = await self.client.list_roster(batch_id)
            self.roster_loaded = True
        except PortalRequestError as e:
            logger.warning(
                "Failed to fetch batch students",
                extra={"batch_id": batch_id, "error": e.message},
            )
            self.notices.error("Failed to fetch batch students")

        try:
            session = await self.client.get_session(session_id)
        except PortalRequestError as e:
            # Treated as no prior attendance
            logger.error(
                "Error fetching attendance",
                extra={"session_id": session_id, "error": e.message},
            )
            self.notices.error("Failed to fetch attendance")
        else:
            if session.attendance:
                self.had_existing = True
                self._present = set(session.present_student_ids)

        self.state = (
            AttendanceState.LOADED_EXISTING if self.had_existing else AttendanceState.LOADED_EMPTY
        )
        logger.info(
            "Attendance loaded",
            extra={
                "session_id": session_id,
                "batch_id": batch_id,
                "roster_size": len(self.roster),
                "state": self.state.value,
            },
        )
        return self.state

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    @property
    def roster_ids(self) -> list[str]:
        return [entry.student_id for entry in self.roster]

    @property
    def present_ids(self) -> set[str]:
        return set(self._present)

    def is_present(self, student_id: str) -> bool:
        return student_id in self._present

    def toggle(self, student_id: str) -> bool:
        """
        Flip one student's membership in the present-set.

        Returns:
            bool: True when the student is now present
        """
        self._require_editable()
        if student_id not in self.roster_ids:
            raise ValidationError("Student is not enrolled in this batch", field="studentId")
        if student_id in self._present:
            self._present.discard(student_id)
        else:
            self._present.add(student_id)
        self.state = AttendanceState.EDITING
        return student_id in self._present

    def select_all(self) -> None:
        self._require_editable()
        self._present = set(self.roster_ids)
        self.state = AttendanceState.EDITING

    def clear_all(self) -> None:
        self._require_editable()
        self._present = set()
        self.state = AttendanceState.EDITING

    def set_present(self, student_ids: list[str]) -> None:
        """
        Replace the whole present-set, e.g. from a submitted form.

        Raises:
            ValidationError: Any id is not enrolled in the batch
        """
        self._require_editable()
        unknown = sorted(set(student_ids) - set(self.roster_ids))
        if unknown:
            raise ValidationError(
                "Students are not enrolled in this batch",
                field="presentStudentIds",
                details={"student_ids": unknown},
            )
        self._present = set(student_ids)
        self.state = AttendanceState.EDITING

    def partition(self) -> AttendancePartition:
        return partition_attendance(self.roster_ids, self._present)

    def summary(self) -> AttendanceSummary:
        partition = self.partition()
        return AttendanceSummary(
            total=partition.total,
            present=len(partition.present_students),
            absent=len(partition.absent_students),
        )

    # ------------------------------------------------------------------
    # Submitting
    # ------------------------------------------------------------------
    @property
    def is_submitting(self) -> bool:
        return self.state == AttendanceState.SUBMITTING

    async def submit(self) -> bool:
        """
        Send the full partition for this session.

        Failures become an error notice and leave the selection intact for
        a manual resubmit. Nothing is sent when the roster failed to load.

        Returns:
            bool: True on success (dialog closes), False otherwise
        """
        if self.is_submitting:
            self.notices.error("Attendance submission already in progress")
            return False
        try:
            self._require_editable()
        except ValidationError as e:
            self.notices.error(e.message)
            return False
        if not self.roster_loaded:
            self.notices.error("Cannot submit attendance: batch students were not loaded")
            return False

        partition = self.partition()
        self.state = AttendanceState.SUBMITTING
        try:
            await self._send(partition)
        except AttendanceSubmitError as e:
            logger.warning(
                "Attendance submission failed",
                extra={"session_id": self.session_id, "error": e.message},
            )
            self.state = AttendanceState.EDITING
            self.notices.error("Failed to submit attendance")
            return False

        self.notices.success(
            "Attendance updated successfully"
            if self.had_existing
            else "Attendance marked successfully"
        )
        logger.info(
            "Attendance submitted",
            extra={
                "session_id": self.session_id,
                "present": len(partition.present_students),
                "absent": len(partition.absent_students),
            },
        )
        self.close()
        if self.loader is not None:
            await self.loader.refresh_sessions()
        return True

    async def _send(self, partition: AttendancePartition) -> None:
        try:
            await self.client.submit_attendance(self.batch_id, self.session_id, partition)
        except PortalRequestError as e:
            raise AttendanceSubmitError(
                e.message,
                session_id=self.session_id,
                details={"status_code": e.status_code},
            ) from e

    def close(self) -> None:
        """Discard roster and selection."""
        self.state = AttendanceState.CLOSED
        self.roster = []
        self._present = set()

    def _require_editable(self) -> None:
        if self.state not in _EDITABLE:
            raise ValidationError(
                f"Attendance is not editable in state {self.state.value}"
            )
