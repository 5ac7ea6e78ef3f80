"""
Shared test fixtures and configuration for entire test suite.

Provides: backend client mocks, an in-memory live-courses backend served
through httpx.MockTransport, and sample documents.
Dependencies: pytest, httpx
System role: Test infrastructure and fixture management
"""

import json
import re
from collections.abc import Iterator
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from session_desk.api.deps import get_live_courses_client
from session_desk.api.main import create_app
from session_desk.application.services import NoticeBoard
from session_desk.boundary.http import LiveCoursesClient

BASE_URL = "http://backend.test/api/livecourses"
API_PREFIX = "/api/livecourses"


def make_student(user_id: str, first: str, last: str) -> dict:
    """Enrolment document as returned inside batch detail."""
    return {
        "_id": f"enr-{user_id}",
        "UserId": {
            "_id": user_id,
            "firstName": first,
            "lastName": last,
            "email": f"{first.lower()}@example.com",
        },
    }


def make_session(session_id: str, batch_id, **fields) -> dict:
    """Session document with sensible defaults."""
    doc = {
        "_id": session_id,
        "batchId": batch_id,
        "courseId": "c1",
        "sessionTitle": f"Session {session_id}",
        "sessionNumber": 1,
        "description": "",
        "scheduledDate": "2026-10-20T00:00:00.000Z",
        "scheduledStartTime": "10:00",
        "scheduledEndTime": "11:00",
        "meetingLink": "https://meet.example/abc",
        "status": "scheduled",
        "sessionMaterials": [],
        "attendance": [],
    }
    doc.update(fields)
    return doc


class FakeLiveCoursesBackend:
    """In-memory stand-in for the live-courses REST API."""

    def __init__(self) -> None:
        self.courses: list[dict] = []
        self.batches: dict[str, list[dict]] = {}
        self.rosters: dict[str, list[dict]] = {}
        self.sessions: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []
        self.failing_uploads: set[str] = set()
        self.failures: dict[tuple[str, str], int] = {}

    def fail(self, method: str, path: str, status_code: int = 500) -> None:
        self.failures[(method, path)] = status_code

    @property
    def upload_order(self) -> list[str]:
        return [
            _upload_filename(r)
            for r in self.requests
            if r.method == "POST" and r.url.path.endswith("/materials")
        ]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        path = request.url.path.removeprefix(API_PREFIX)
        status_code = self.failures.get((request.method, path))
        if status_code:
            return httpx.Response(status_code, json={"message": "Backend failure"})

        parts = path.strip("/").split("/")
        method = request.method

        if method == "GET" and path == "/trainer/assigned/courses":
            return httpx.Response(200, json={"courses": self.courses})
        if method == "GET" and parts[:2] == ["admin", "courses"] and parts[-1] == "batches":
            return httpx.Response(200, json={"batches": self.batches.get(parts[2], [])})
        if method == "GET" and parts[:2] == ["admin", "batches"]:
            return httpx.Response(
                200, json={"batch": {"_id": parts[2], "students": self.rosters.get(parts[2], [])}}
            )
        if method == "GET" and path == "/trainer/live-sessions":
            course_id = request.url.params.get("courseId")
            sessions = [s for s in self.sessions.values() if s.get("courseId") == course_id]
            return httpx.Response(200, json={"sessions": sessions})
        if parts[:2] == ["trainer", "live-sessions"] and len(parts) >= 3:
            session = self.sessions.get(parts[2])
            if session is None:
                return httpx.Response(404, json={"message": "Session not found"})
            if method == "GET":
                return httpx.Response(200, json={"session": session})
            if method == "PUT":
                session.update(json.loads(request.content))
                return httpx.Response(200, json={"session": session})
            if method == "DELETE":
                del self.sessions[parts[2]]
                return httpx.Response(200, json={"message": "deleted"})
            if method == "POST" and parts[-1] == "materials":
                filename = _upload_filename(request)
                if filename in self.failing_uploads:
                    return httpx.Response(413, json={"message": f"{filename} rejected"})
                session["sessionMaterials"].append(
                    {"type": "document", "title": filename, "url": f"https://cdn.test/{filename}"}
                )
                return httpx.Response(200, json={"session": session})
        if method == "PUT" and parts[0] == "trainer" and parts[-1] == "attendance":
            session = self.sessions[parts[2]]
            body = json.loads(request.content)
            session["attendance"] = [
                {"studentId": sid, "status": "present"} for sid in body["presentStudents"]
            ] + [{"studentId": sid, "status": "absent"} for sid in body["absentStudents"]]
            return httpx.Response(200, json={"message": "ok"})

        return httpx.Response(404, json={"message": f"No route {method} {path}"})


def _upload_filename(request: httpx.Request) -> str:
    match = re.search(rb'filename="([^"]+)"', request.content)
    return match.group(1).decode() if match else ""


@pytest.fixture
def fake_backend() -> FakeLiveCoursesBackend:
    """Backend seeded with one course, one batch of three students and two sessions."""
    backend = FakeLiveCoursesBackend()
    backend.courses = [
        {"_id": "c1", "courseName": "Full Stack", "duration": {"value": 12, "unit": "weeks"}},
    ]
    backend.batches["c1"] = [
        {"_id": "b1", "courseId": "c1", "batchName": "Morning"},
        {"_id": "b2", "courseId": {"_id": "c1"}, "batchName": "Evening"},
    ]
    backend.rosters["b1"] = [
        make_student("s1", "Asha", "Rao"),
        make_student("s2", "Ben", "Ng"),
        make_student("s3", "Chen", "Li"),
    ]
    backend.sessions["sess1"] = make_session("sess1", "b1", sessionNumber=5)
    backend.sessions["sess2"] = make_session("sess2", {"_id": "b1", "batchName": "Morning"})
    return backend


@pytest.fixture
def backend_client(fake_backend: FakeLiveCoursesBackend) -> LiveCoursesClient:
    """Real client wired to the in-memory backend."""
    return LiveCoursesClient(BASE_URL, token="trainer-token", transport=fake_backend.transport())


@pytest.fixture
def mock_client() -> AsyncMock:
    """
    Create mock LiveCoursesClient for testing.

    Returns:
        AsyncMock: Client whose coroutine methods are AsyncMocks
    """
    return AsyncMock(spec=LiveCoursesClient)


@pytest.fixture
def notices() -> NoticeBoard:
    return NoticeBoard()


@pytest.fixture
def api_client(backend_client: LiveCoursesClient) -> Iterator[TestClient]:
    """
    TestClient whose routes talk to the in-memory backend.

    Overrides the per-request client factory so no real backend is needed.
    """
    app = create_app()
    app.dependency_overrides[get_live_courses_client] = lambda: backend_client
    yield TestClient(app, headers={"Authorization": "Bearer trainer-token"})
    app.dependency_overrides.clear()
