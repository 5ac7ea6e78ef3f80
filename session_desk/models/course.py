"""
Course domain model.

Courses are read-only from the session-management workflow.

Dependencies: pydantic
System role: Course contract
"""

from typing import Any

from session_desk.models.common import DocumentModel


def format_duration(duration: Any) -> str:
    """
    Render a course duration.

    Accepts free text or a ``{"value": ..., "unit": ...}`` mapping.

    Args:
        duration: Raw duration from the backend

    Returns:
        str: Display text, "N/A" when missing or malformed
    """
    if not duration:
        return "N/A"
    if isinstance(duration, str):
        return duration
    if isinstance(duration, dict) and duration.get("value") and duration.get("unit"):
        return f"{duration['value']} {duration['unit']}"
    return "N/A"


class Course(DocumentModel):
    """Course assigned to the signed-in trainer."""

    course_name: str = ""
    duration: dict | str | None = None

    @property
    def display_duration(self) -> str:
        return format_duration(self.duration)
