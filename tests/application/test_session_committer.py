"""
Test suite for SessionRecordCommitter.

System role: Verification of the single-request session update
"""

import json

import pytest

from session_desk.application.services import SessionRecordCommitter
from session_desk.core.cancellation import CancellationToken
from session_desk.core.exceptions import OperationCancelledError, SessionCommitError
from session_desk.models import Material, MaterialType, SessionDraft


@pytest.fixture
def draft() -> SessionDraft:
    return SessionDraft(
        session_title="Intro",
        session_number="",
        scheduled_start_time="10:00",
        scheduled_end_time="11:00",
    )


class TestCommit:
    @pytest.mark.asyncio
    async def test_blank_number_keeps_stored_value(self, backend_client, fake_backend, draft) -> None:
        committer = SessionRecordCommitter(backend_client)

        session = await committer.commit("sess1", draft, [])

        body = json.loads(fake_backend.requests[0].content)
        assert "sessionNumber" not in body
        assert "recordingDuration" not in body
        assert session.session_number == 5
        assert session.session_title == "Intro"

    @pytest.mark.asyncio
    async def test_sends_resolved_materials(self, backend_client, fake_backend, draft) -> None:
        materials = [Material(type=MaterialType.LINK, title="Docs", url="https://docs")]

        await SessionRecordCommitter(backend_client).commit("sess1", draft, materials)

        assert fake_backend.sessions["sess1"]["sessionMaterials"] == [
            {"type": "link", "title": "Docs", "url": "https://docs"}
        ]
        assert len(fake_backend.requests) == 1

    @pytest.mark.asyncio
    async def test_backend_rejection(self, backend_client, fake_backend, draft) -> None:
        fake_backend.fail("PUT", "/trainer/live-sessions/sess1", 400)

        with pytest.raises(SessionCommitError) as exc_info:
            await SessionRecordCommitter(backend_client).commit("sess1", draft, [])

        assert exc_info.value.message == "Backend failure"

    @pytest.mark.asyncio
    async def test_cancelled_before_send(self, mock_client, draft) -> None:
        token = CancellationToken()
        token.cancel()

        with pytest.raises(OperationCancelledError):
            await SessionRecordCommitter(mock_client).commit("sess1", draft, [], token)

        mock_client.update_session.assert_not_called()


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete(self, backend_client, fake_backend) -> None:
        await SessionRecordCommitter(backend_client).delete("sess1")

        assert "sess1" not in fake_backend.sessions

    @pytest.mark.asyncio
    async def test_delete_missing_session(self, backend_client) -> None:
        with pytest.raises(SessionCommitError):
            await SessionRecordCommitter(backend_client).delete("nope")
