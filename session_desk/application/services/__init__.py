"""Workflow services."""

from .attendance_service import AttendanceReconciler, AttendanceState, AttendanceSummary
from .hierarchy_service import CourseView, HierarchyLoader
from .material_staging import MaterialStagingBuffer, StagedFile
from .notices import NoticeBoard
from .session_committer import SessionRecordCommitter
from .session_editor import SessionEditController

__all__ = [
    "AttendanceReconciler",
    "AttendanceState",
    "AttendanceSummary",
    "CourseView",
    "HierarchyLoader",
    "MaterialStagingBuffer",
    "NoticeBoard",
    "SessionEditController",
    "SessionRecordCommitter",
    "StagedFile",
]
