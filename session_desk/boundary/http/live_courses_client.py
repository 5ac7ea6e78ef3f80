"""
Live-courses backend client.

Async wrapper over the trainer/admin endpoints used by session management.
Every call carries the caller's bearer token; failures surface as
PortalRequestError with the backend's message when it sends one.

Dependencies: httpx, pydantic
System role: REST boundary for courses, batches, sessions, attendance and materials
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from session_desk.configs.portal import PortalSettings
from session_desk.core.attendance import AttendancePartition
from session_desk.core.exceptions import PortalRequestError
from session_desk.models.batch import Batch, RosterEntry
from session_desk.models.course import Course
from session_desk.models.session import Session
from session_desk.observability.correlation import get_correlation_id

logger = logging.getLogger(__name__)

# Fallback keys some upload responses use instead of the material list
_UPLOAD_URL_KEYS = ("url", "fileUrl", "materialUrl")


class LiveCoursesClient:
    """Client for the live-courses REST API."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        upload_timeout: float = 300.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize client.

        Args:
            base_url: API root, e.g. ``http://host/api/livecourses``
            token: Bearer token of the signed-in trainer
            timeout: Default per-request timeout in seconds
            upload_timeout: Timeout for material uploads in seconds
            transport: Optional httpx transport (tests inject MockTransport)
        """
        self._token = token
        self._upload_timeout = upload_timeout
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: PortalSettings,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "LiveCoursesClient":
        return cls(
            base_url=settings.base_url,
            token=token or settings.token,
            timeout=settings.timeout_seconds,
            upload_timeout=settings.upload_timeout_seconds,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "LiveCoursesClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        correlation_id = get_correlation_id()
        if correlation_id:
            headers["X-Correlation-ID"] = correlation_id
        return headers

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """
        Issue one request and decode its JSON body.

        Raises:
            PortalRequestError: Transport failure, non-2xx status or undecodable body
        """
        try:
            response = await self._client.request(
                method, path, headers=self._headers(), **kwargs
            )
        except httpx.HTTPError as e:
            logger.warning(
                "Backend request failed",
                extra={"operation": operation, "path": path, "error": str(e)},
            )
            raise PortalRequestError(
                f"Request failed: {str(e) or type(e).__name__}", operation
            ) from e

        if response.is_error:
            message = _error_message(response)
            logger.warning(
                "Backend returned error status",
                extra={
                    "operation": operation,
                    "path": path,
                    "status_code": response.status_code,
                },
            )
            raise PortalRequestError(message, operation, response.status_code)

        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError as e:
            raise PortalRequestError(
                "Backend returned a non-JSON response", operation, response.status_code
            ) from e
        return data if isinstance(data, dict) else {}

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    async def list_assigned_courses(self) -> list[Course]:
        data = await self._request("list_assigned_courses", "GET", "/trainer/assigned/courses")
        return _parse_list(Course, data.get("courses"), "list_assigned_courses")

    async def list_batches(self, course_id: str) -> list[Batch]:
        data = await self._request(
            "list_batches", "GET", f"/admin/courses/{course_id}/batches"
        )
        return _parse_list(Batch, data.get("batches"), "list_batches")

    async def list_sessions(self, course_id: str) -> list[Session]:
        data = await self._request(
            "list_sessions",
            "GET",
            "/trainer/live-sessions",
            params={"courseId": course_id},
        )
        return _parse_list(Session, data.get("sessions"), "list_sessions")

    async def list_roster(self, batch_id: str) -> list[RosterEntry]:
        """Students enrolled in a batch, from the batch-detail endpoint."""
        data = await self._request("list_roster", "GET", f"/admin/batches/{batch_id}")
        batch = data.get("batch") or {}
        return _parse_list(RosterEntry, batch.get("students"), "list_roster")

    async def get_session(self, session_id: str) -> Session:
        data = await self._request(
            "get_session", "GET", f"/trainer/live-sessions/{session_id}"
        )
        return _parse_one(Session, data.get("session"), "get_session")

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    async def submit_attendance(
        self,
        batch_id: str,
        session_id: str,
        partition: AttendancePartition,
    ) -> None:
        """Replace the stored attendance of a session with a full partition."""
        await self._request(
            "submit_attendance",
            "PUT",
            f"/trainer/{batch_id}/{session_id}/attendance",
            json=partition.to_payload(),
        )

    async def upload_material(
        self,
        session_id: str,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        """
        Upload one material file and return its stored URL.

        The backend answers with the updated session; the newest material
        entry carries the URL of this upload.

        Returns:
            str: URL of the uploaded file

        Raises:
            PortalRequestError: Upload rejected or no URL in the response
        """
        data = await self._request(
            "upload_material",
            "POST",
            f"/trainer/live-sessions/{session_id}/materials",
            files={"files": (filename, content, content_type)},
            timeout=self._upload_timeout,
        )
        session = data.get("session")
        materials = session.get("sessionMaterials") if isinstance(session, dict) else None
        if isinstance(materials, list) and materials:
            latest = materials[-1]
            if isinstance(latest, dict) and isinstance(latest.get("url"), str) and latest["url"]:
                return latest["url"]
        for key in _UPLOAD_URL_KEYS:
            if isinstance(data.get(key), str) and data[key]:
                return data[key]
        raise PortalRequestError(
            "Upload response did not include a file URL", "upload_material"
        )

    async def update_session(
        self, session_id: str, fields: dict[str, Any]
    ) -> Session | None:
        """Apply a partial update; returns the stored session when echoed back."""
        data = await self._request(
            "update_session",
            "PUT",
            f"/trainer/live-sessions/{session_id}",
            json=fields,
        )
        if not data.get("session"):
            return None
        return _parse_one(Session, data["session"], "update_session")

    async def delete_session(self, session_id: str) -> None:
        await self._request(
            "delete_session", "DELETE", f"/trainer/live-sessions/{session_id}"
        )


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            if isinstance(body.get(key), str) and body[key]:
                return body[key]
    return f"Backend returned HTTP {response.status_code}"


def _parse_list(model, items: Any, operation: str) -> list:
    try:
        return [model.model_validate(item) for item in items or []]
    except PydanticValidationError as e:
        raise PortalRequestError(
            "Backend returned malformed data", operation, details={"errors": e.error_count()}
        ) from e


def _parse_one(model, item: Any, operation: str):
    if not item:
        raise PortalRequestError("Backend response is missing the session", operation)
    try:
        return model.model_validate(item)
    except PydanticValidationError as e:
        raise PortalRequestError(
            "Backend returned malformed data", operation, details={"errors": e.error_count()}
        ) from e
