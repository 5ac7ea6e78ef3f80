"""
Test suite for SessionDraft.

System role: Verification of edit-form seeding, validation and payloads
"""

import pytest

from session_desk.core.exceptions import ValidationError
from session_desk.models import Material, MaterialType, Session, SessionDraft, SessionStatus
from conftest import make_session


@pytest.fixture
def stored_session() -> Session:
    return Session.model_validate(
        make_session(
            "sess1",
            "b1",
            sessionNumber=5,
            recordingDuration=45,
            status="live",
            sessionMaterials=[{"type": "link", "title": "Docs", "url": "https://docs"}],
        )
    )


class TestFromSession:
    def test_seeds_fields(self, stored_session: Session) -> None:
        draft = SessionDraft.from_session(stored_session)

        assert draft.session_number == 5
        assert draft.scheduled_date == "2026-10-20"
        assert draft.status is SessionStatus.LIVE
        assert draft.session_materials[0].url == "https://docs"

    def test_materials_are_copied(self, stored_session: Session) -> None:
        draft = SessionDraft.from_session(stored_session)

        draft.session_materials[0].title = "Changed"

        assert stored_session.session_materials[0].title == "Docs"

    def test_unknown_status_is_left_unset(self, stored_session: Session) -> None:
        stored_session.status = "postponed"

        assert SessionDraft.from_session(stored_session).status is None

    def test_missing_status_defaults_to_scheduled(self, stored_session: Session) -> None:
        stored_session.status = ""

        assert SessionDraft.from_session(stored_session).status is SessionStatus.SCHEDULED


class TestUpdatePayload:
    def test_unknown_stored_status_survives_unrelated_edit(self, stored_session: Session) -> None:
        stored_session.status = "postponed"
        draft = SessionDraft.from_session(stored_session)
        draft.description = "Updated agenda"

        assert "status" not in draft.to_update_payload([])

        draft.status = "cancelled"
        assert draft.to_update_payload([])["status"] == "cancelled"

    def test_blank_session_number_is_omitted(self) -> None:
        draft = SessionDraft(session_title="Intro", session_number="", recording_duration="")

        payload = draft.to_update_payload([])

        assert "sessionNumber" not in payload
        assert "recordingDuration" not in payload

    def test_numbers_are_sent_when_set(self) -> None:
        draft = SessionDraft(session_title="Intro", session_number="7", recording_duration="0")

        payload = draft.to_update_payload([])

        assert payload["sessionNumber"] == 7
        assert payload["recordingDuration"] == 0

    def test_payload_is_camel_case(self) -> None:
        draft = SessionDraft(session_title="Intro", status="completed")
        materials = [Material(type=MaterialType.DOCUMENT, title="Notes", url="https://n")]

        payload = draft.to_update_payload(materials)

        assert payload["sessionTitle"] == "Intro"
        assert payload["status"] == "completed"
        assert payload["sessionMaterials"] == [
            {"type": "document", "title": "Notes", "url": "https://n"}
        ]

    def test_accepts_camel_case_input(self) -> None:
        draft = SessionDraft.model_validate({"sessionTitle": "Intro", "sessionNumber": 3})

        assert draft.session_title == "Intro"
        assert draft.session_number == 3


class TestValidateForSave:
    def test_valid_draft(self) -> None:
        SessionDraft(
            session_title="Intro",
            session_number=1,
            scheduled_start_time="10:00",
            scheduled_end_time="11:00",
        ).validate_for_save()

    @pytest.mark.parametrize(
        ("fields", "field"),
        [
            ({"session_title": "  "}, "sessionTitle"),
            ({"session_title": "A", "session_number": 0}, "sessionNumber"),
            ({"session_title": "A", "recording_duration": -1}, "recordingDuration"),
            (
                {"session_title": "A", "scheduled_start_time": "11:00", "scheduled_end_time": "10:30"},
                "scheduledEndTime",
            ),
        ],
    )
    def test_rejects(self, fields: dict, field: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            SessionDraft(**fields).validate_for_save()

        assert exc_info.value.details["field"] == field

    def test_status_limited_to_offered_values(self) -> None:
        with pytest.raises(ValueError):
            SessionDraft(session_title="A", status="postponed")
