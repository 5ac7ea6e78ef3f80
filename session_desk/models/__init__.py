"""Domain models and API schemas."""

from session_desk.models.batch import Batch, RosterEntry, StudentProfile
from session_desk.models.common import Notice, NoticeLevel, WireModel
from session_desk.models.course import Course, format_duration
from session_desk.models.draft import SessionDraft
from session_desk.models.session import (
    AttendanceEntry,
    AttendanceStatus,
    Material,
    MaterialType,
    Session,
    SessionStatus,
)

__all__ = [
    "AttendanceEntry",
    "AttendanceStatus",
    "Batch",
    "Course",
    "Material",
    "MaterialType",
    "Notice",
    "NoticeLevel",
    "RosterEntry",
    "Session",
    "SessionDraft",
    "SessionStatus",
    "StudentProfile",
    "WireModel",
    "format_duration",
]
