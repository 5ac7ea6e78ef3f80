"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_attendance_reconciler,
    get_bearer_token,
    get_hierarchy_loader,
    get_live_courses_client,
    get_notice_board,
    get_session_edit_controller,
    get_settings_dependency,
)

__all__ = [
    "get_attendance_reconciler",
    "get_bearer_token",
    "get_hierarchy_loader",
    "get_live_courses_client",
    "get_notice_board",
    "get_session_edit_controller",
    "get_settings_dependency",
]
