"""
Hierarchy loader.

Resolves the course -> batch -> session tree for the signed-in trainer.
Fetch failures degrade to empty lists plus an error notice so navigation is
never blocked; the user retries by selecting again.

Dependencies: session_desk.boundary.http, session_desk.core
System role: Read side of the session-management view
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any

from session_desk.application.services.notices import NoticeBoard
from session_desk.boundary.http import LiveCoursesClient
from session_desk.core.exceptions import PortalRequestError
from session_desk.core.refs import normalize_ref
from session_desk.models.batch import Batch
from session_desk.models.course import Course
from session_desk.models.session import Session

logger = logging.getLogger(__name__)


@dataclass
class CourseView:
    """Batches of one course with their sessions grouped underneath."""

    course_id: str
    batches: list[Batch] = field(default_factory=list)
    sessions_by_batch: dict[str, list[Session]] = field(default_factory=dict)


def group_sessions_by_batch(sessions: list[Session]) -> dict[str, list[Session]]:
    """Partition sessions by their normalized batch id, keeping input order."""
    grouped: dict[str, list[Session]] = defaultdict(list)
    for session in sessions:
        if session.batch_id:
            grouped[session.batch_id].append(session)
    return dict(grouped)


class HierarchyLoader:
    """Loads courses, batches and sessions for one trainer."""

    def __init__(self, client: LiveCoursesClient, notices: NoticeBoard | None = None) -> None:
        """
        Initialize loader.

        Args:
            client: Backend client bound to the trainer's token
            notices: Board receiving fetch-failure notices
        """
        self.client = client
        self.notices = notices or NoticeBoard()
        self.active_course_id: str | None = None
        self._sessions: list[Session] = []

    async def list_assigned_courses(self) -> list[Course]:
        try:
            return await self.client.list_assigned_courses()
        except PortalRequestError as e:
            self._report("Failed to fetch courses", e)
            return []

    async def list_batches(self, course_id: str) -> list[Batch]:
        try:
            return await self.client.list_batches(course_id)
        except PortalRequestError as e:
            self._report("Failed to fetch batches", e, course_id=course_id)
            return []

    async def list_sessions(self, course_id: str) -> list[Session]:
        """
        Load a course's sessions and keep them for ``sessions_of``.

        On failure the cached list is emptied too, so stale sessions of a
        previous course never show up under the new one.
        """
        try:
            sessions = await self.client.list_sessions(course_id)
        except PortalRequestError as e:
            self._report("Failed to fetch sessions", e, course_id=course_id)
            sessions = []
        self.active_course_id = course_id
        self._sessions = sessions
        return sessions

    def sessions_of(self, batch_ref: Any) -> list[Session]:
        """
        Sessions of one batch from the last loaded session list.

        Args:
            batch_ref: Bare batch id or embedded batch document

        Returns:
            list[Session]: Matching sessions in load order
        """
        batch_id = normalize_ref(batch_ref)
        if batch_id is None:
            return []
        return [s for s in self._sessions if s.batch_id == batch_id]

    async def select_course(self, course_id: str) -> CourseView:
        """Load batches then sessions for a course and group them."""
        batches = await self.list_batches(course_id)
        sessions = await self.list_sessions(course_id)
        grouped = group_sessions_by_batch(sessions)
        return CourseView(
            course_id=course_id,
            batches=batches,
            sessions_by_batch={b.id: grouped.get(b.id, []) for b in batches},
        )

    async def refresh_sessions(self) -> list[Session]:
        """Reload the active course's sessions after a write."""
        if self.active_course_id is None:
            return []
        return await self.list_sessions(self.active_course_id)

    def _report(self, description: str, error: PortalRequestError, **context: Any) -> None:
        logger.warning(
            description,
            extra={"error": error.message, "operation": error.operation, **context},
        )
        self.notices.error(description)
