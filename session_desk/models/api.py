"""
HTTP API schemas.

Request/response contracts of the session-management API. Responses carry
the notices raised while the action ran.

Dependencies: pydantic
System role: Session-management API contracts
"""

from typing import Literal

from pydantic import BaseModel, Field

from session_desk.models.batch import Batch
from session_desk.models.common import Notice
from session_desk.models.course import Course
from session_desk.models.session import Material, Session


class CourseSummary(BaseModel):
    """Course card."""

    id: str
    course_name: str
    duration: str

    @classmethod
    def from_course(cls, course: Course) -> "CourseSummary":
        return cls(id=course.id, course_name=course.course_name, duration=course.display_duration)


class CourseListResponse(BaseModel):
    courses: list[CourseSummary]
    notices: list[Notice] = Field(default_factory=list)


class SessionSummary(BaseModel):
    """Session row inside a batch."""

    id: str
    batch_id: str | None
    session_title: str
    session_number: int | None
    status: str
    scheduled_date: str
    scheduled_start_time: str
    scheduled_end_time: str
    meeting_link: str
    recording_url: str
    recording_duration: float | None
    has_attendance: bool
    present_count: int
    materials: list[Material]

    @classmethod
    def from_session(cls, session: Session) -> "SessionSummary":
        return cls(
            id=session.id,
            batch_id=session.batch_id,
            session_title=session.session_title,
            session_number=session.session_number,
            status=session.status,
            scheduled_date=session.scheduled_date,
            scheduled_start_time=session.scheduled_start_time,
            scheduled_end_time=session.scheduled_end_time,
            meeting_link=session.meeting_link,
            recording_url=session.recording_url,
            recording_duration=session.recording_duration,
            has_attendance=session.has_attendance,
            present_count=session.present_count,
            materials=session.session_materials,
        )


class BatchSessions(BaseModel):
    """Batch card with its sessions."""

    id: str
    batch_name: str
    student_count: int
    sessions: list[SessionSummary]

    @classmethod
    def from_batch(cls, batch: Batch, sessions: list[Session]) -> "BatchSessions":
        return cls(
            id=batch.id,
            batch_name=batch.batch_name,
            student_count=batch.student_count,
            sessions=[SessionSummary.from_session(s) for s in sessions],
        )


class CourseDetailResponse(BaseModel):
    course_id: str
    batches: list[BatchSessions]
    notices: list[Notice] = Field(default_factory=list)


class StudentSelection(BaseModel):
    student_id: str
    full_name: str
    email: str
    present: bool


class AttendanceCounts(BaseModel):
    total: int
    present: int
    absent: int


class AttendanceSelectionResponse(BaseModel):
    """Seeded attendance dialog."""

    session_id: str
    batch_id: str
    mode: Literal["mark", "update"]
    students: list[StudentSelection]
    summary: AttendanceCounts
    notices: list[Notice] = Field(default_factory=list)


class AttendanceSubmitRequest(BaseModel):
    batch_id: str = Field(..., min_length=1, description="Batch the session belongs to")
    present_student_ids: list[str] = Field(
        default_factory=list, description="Students marked present"
    )


class AttendanceSubmitResponse(BaseModel):
    success: bool
    present_students: list[str] = Field(default_factory=list)
    absent_students: list[str] = Field(default_factory=list)
    notices: list[Notice] = Field(default_factory=list)


class SessionSaveResponse(BaseModel):
    success: bool
    session: SessionSummary | None = None
    materials: list[Material] = Field(
        default_factory=list,
        description="Current material slots; keeps uploaded URLs after a failed save",
    )
    pending_slots: list[int] = Field(
        default_factory=list, description="Slots whose files were not uploaded"
    )
    notices: list[Notice] = Field(default_factory=list)


class ActionResponse(BaseModel):
    success: bool
    notices: list[Notice] = Field(default_factory=list)
