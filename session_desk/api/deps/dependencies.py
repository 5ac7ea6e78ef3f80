"""
Dependency injection container.

Factory functions for FastAPI dependencies. Each request gets its own
backend client bound to the caller's bearer token, and one notice board
shared by every service of that request.

Dependencies: session_desk.configs, session_desk.application, session_desk.boundary
System role: DI container for service injection
"""

from collections.abc import AsyncIterator

from fastapi import Depends, Header, HTTPException, status

from session_desk.application.services import (
    AttendanceReconciler,
    HierarchyLoader,
    NoticeBoard,
    SessionEditController,
)
from session_desk.boundary.http import LiveCoursesClient
from session_desk.configs import Settings, get_settings


def get_settings_dependency() -> Settings:
    """Get settings for dependency injection."""
    return get_settings()


def get_bearer_token(
    authorization: str | None = Header(default=None),
    settings: Settings = Depends(get_settings_dependency),
) -> str:
    """
    Token forwarded to the backend.

    Raises:
        HTTPException(401): No bearer token on the request and none configured
    """
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    if settings.portal.token:
        return settings.portal.token
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Missing bearer token",
    )


async def get_live_courses_client(
    token: str = Depends(get_bearer_token),
    settings: Settings = Depends(get_settings_dependency),
) -> AsyncIterator[LiveCoursesClient]:
    """Per-request backend client, closed after the response."""
    client = LiveCoursesClient.from_settings(settings.portal, token=token)
    try:
        yield client
    finally:
        await client.aclose()


def get_notice_board() -> NoticeBoard:
    return NoticeBoard()


def get_hierarchy_loader(
    client: LiveCoursesClient = Depends(get_live_courses_client),
    notices: NoticeBoard = Depends(get_notice_board),
) -> HierarchyLoader:
    return HierarchyLoader(client, notices)


def get_attendance_reconciler(
    client: LiveCoursesClient = Depends(get_live_courses_client),
    notices: NoticeBoard = Depends(get_notice_board),
) -> AttendanceReconciler:
    return AttendanceReconciler(client, notices)


def get_session_edit_controller(
    client: LiveCoursesClient = Depends(get_live_courses_client),
    notices: NoticeBoard = Depends(get_notice_board),
) -> SessionEditController:
    return SessionEditController(client, notices)
