"""
Batch and roster models.

A roster entry is an enrolment record wrapping the student user document
(``UserId``). The student id used for attendance is the user's id, not the
enrolment's.

Dependencies: pydantic
System role: Batch contract
"""

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from session_desk.core.refs import normalize_ref
from session_desk.models.common import DocumentModel, WireModel


class StudentProfile(DocumentModel):
    """Student user document embedded in an enrolment."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class RosterEntry(WireModel):
    """One enrolled student of a batch."""

    id: str | None = Field(default=None, validation_alias=AliasChoices("_id", "id"))
    user: StudentProfile = Field(validation_alias=AliasChoices("UserId", "userId", "user"))

    @field_validator("user", mode="before")
    @classmethod
    def _expand_bare_user(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"_id": value}
        return value

    @property
    def student_id(self) -> str:
        return self.user.id


class Batch(DocumentModel):
    """Cohort of enrolled students attached to one course."""

    course_id: str | None = None
    batch_name: str = ""
    students: list[RosterEntry] = Field(default_factory=list)
    current_students: int | None = None

    @field_validator("course_id", mode="before")
    @classmethod
    def _normalize_course(cls, value: Any) -> str | None:
        return normalize_ref(value)

    @property
    def student_count(self) -> int:
        return len(self.students) or self.current_students or 0

    @property
    def roster_ids(self) -> list[str]:
        return [entry.student_id for entry in self.students]
