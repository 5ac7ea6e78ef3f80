"""
Session domain models.

Sessions, their materials, and attendance entries as the backend returns
them. ``batch_id`` and attendance ``student_id`` arrive either bare or as an
embedded document and are normalized on parse.

Dependencies: pydantic
System role: Session contract
"""

from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from session_desk.core.refs import normalize_ref
from session_desk.models.common import DocumentModel, WireModel


class SessionStatus(str, Enum):
    """Lifecycle values offered when editing a session."""

    SCHEDULED = "scheduled"
    LIVE = "live"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MaterialType(str, Enum):
    """Kind of session material."""

    DOCUMENT = "document"
    VIDEO = "video"
    IMAGE = "image"
    LINK = "link"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"


def blank_to_none(value: Any) -> Any:
    """Map empty form input to None so optional numbers stay unset."""
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return value


class Material(WireModel):
    """One material slot: type, title and url."""

    # Keep backend-owned keys (e.g. _id) on round trip
    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow",
        validate_assignment=True,
    )

    type: MaterialType = MaterialType.DOCUMENT
    title: str = ""
    url: str = ""

    @property
    def is_resolved(self) -> bool:
        return bool(self.url)


class AttendanceEntry(WireModel):
    """Stored attendance status of one student."""

    student_id: str
    status: str

    @field_validator("student_id", mode="before")
    @classmethod
    def _normalize_student(cls, value: Any) -> Any:
        return normalize_ref(value) or value

    @property
    def is_present(self) -> bool:
        return self.status == AttendanceStatus.PRESENT.value


class Session(DocumentModel):
    """Live session of a batch."""

    batch_id: str | None = None
    course_id: str | None = None
    session_title: str = ""
    session_number: int | None = None
    description: str = ""
    scheduled_date: str = ""
    scheduled_start_time: str = ""
    scheduled_end_time: str = ""
    meeting_link: str = ""
    status: str = SessionStatus.SCHEDULED.value
    recording_url: str = ""
    recording_duration: float | None = None
    session_materials: list[Material] = Field(default_factory=list)
    attendance: list[AttendanceEntry] = Field(default_factory=list)

    @field_validator("batch_id", "course_id", mode="before")
    @classmethod
    def _normalize_refs(cls, value: Any) -> str | None:
        return normalize_ref(value)

    @field_validator("session_number", "recording_duration", mode="before")
    @classmethod
    def _blank_numbers(cls, value: Any) -> Any:
        return blank_to_none(value)

    @field_validator(
        "session_title",
        "description",
        "scheduled_date",
        "scheduled_start_time",
        "scheduled_end_time",
        "meeting_link",
        "recording_url",
        mode="before",
    )
    @classmethod
    def _null_strings(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def has_attendance(self) -> bool:
        return bool(self.attendance)

    @property
    def present_student_ids(self) -> list[str]:
        return [entry.student_id for entry in self.attendance if entry.is_present]

    @property
    def present_count(self) -> int:
        return len(self.present_student_ids)
