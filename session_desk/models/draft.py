"""
Session edit draft.

The serializable value behind the edit form: scalar fields plus the material
list that will be sent. Locally attached files are not part of the draft;
they live in the staging buffer's side table.

Dependencies: pydantic
System role: Edit-form state contract
"""

from typing import Any

from pydantic import ConfigDict, Field, field_validator

from session_desk.core.exceptions import ValidationError
from session_desk.models.common import WireModel
from session_desk.models.session import Material, Session, SessionStatus, blank_to_none


class SessionDraft(WireModel):
    """Editable copy of a session's scalar fields and materials."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        validate_assignment=True,
    )

    session_title: str = ""
    session_number: int | None = None
    description: str = ""
    scheduled_date: str = ""
    scheduled_start_time: str = ""
    scheduled_end_time: str = ""
    meeting_link: str = ""
    recording_url: str = ""
    recording_duration: float | None = None
    # None keeps a stored status outside the offered values
    status: SessionStatus | None = SessionStatus.SCHEDULED
    session_materials: list[Material] = Field(default_factory=list)

    @field_validator("session_number", "recording_duration", mode="before")
    @classmethod
    def _blank_numbers(cls, value: Any) -> Any:
        return blank_to_none(value)

    @classmethod
    def from_session(cls, session: Session) -> "SessionDraft":
        """
        Seed a draft from a stored session.

        A stored status outside the offered values seeds ``status=None`` so the
        update leaves it alone until the user picks one. The date is cut to
        ``YYYY-MM-DD`` and materials are copied so edits never touch the
        loaded session.
        """
        try:
            status = SessionStatus(session.status)
        except ValueError:
            status = None if session.status else SessionStatus.SCHEDULED
        return cls(
            session_title=session.session_title,
            session_number=session.session_number,
            description=session.description,
            scheduled_date=session.scheduled_date[:10],
            scheduled_start_time=session.scheduled_start_time,
            scheduled_end_time=session.scheduled_end_time,
            meeting_link=session.meeting_link,
            recording_url=session.recording_url,
            recording_duration=session.recording_duration,
            status=status,
            session_materials=[m.model_copy(deep=True) for m in session.session_materials],
        )

    def validate_for_save(self) -> None:
        """
        Check the draft before any upload or update is issued.

        Raises:
            ValidationError: On the first failing rule
        """
        if not self.session_title.strip():
            raise ValidationError("Session title is required", field="sessionTitle")
        if self.session_number is not None and self.session_number <= 0:
            raise ValidationError(
                "Session number must be a positive number", field="sessionNumber"
            )
        if self.recording_duration is not None and self.recording_duration < 0:
            raise ValidationError(
                "Recording duration cannot be negative", field="recordingDuration"
            )
        start, end = self.scheduled_start_time, self.scheduled_end_time
        # HH:MM strings compare chronologically
        if start and end and start >= end:
            raise ValidationError(
                "End time must be after start time", field="scheduledEndTime"
            )

    def to_update_payload(self, materials: list[Material]) -> dict[str, Any]:
        """
        Build the partial session-update body.

        Optional numbers left blank and an unset status are omitted rather
        than sent as defaults so an unrelated edit never overwrites a stored
        value.

        Args:
            materials: Resolved material list to persist

        Returns:
            dict: camelCase payload for the session-update request
        """
        payload: dict[str, Any] = {
            "sessionTitle": self.session_title,
            "description": self.description,
            "scheduledDate": self.scheduled_date,
            "scheduledStartTime": self.scheduled_start_time,
            "scheduledEndTime": self.scheduled_end_time,
            "meetingLink": self.meeting_link,
            "recordingUrl": self.recording_url,
            "sessionMaterials": [
                m.model_dump(mode="json", by_alias=True) for m in materials
            ],
        }
        if self.status is not None:
            payload["status"] = self.status.value
        if self.session_number is not None:
            payload["sessionNumber"] = self.session_number
        if self.recording_duration is not None:
            payload["recordingDuration"] = self.recording_duration
        return payload
