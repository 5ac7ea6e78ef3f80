"""
Attendance API endpoints.

Routes:
- GET /sessions/{id}/attendance?batch_id= - Roster with the seeded present-set
- PUT /sessions/{id}/attendance - Submit the present-set; absentees are derived

Dependencies: session_desk.application.services, session_desk.models
System role: Attendance HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from session_desk.api.deps import get_attendance_reconciler
from session_desk.application.services import AttendanceReconciler, AttendanceState
from session_desk.models.api import (
    AttendanceCounts,
    AttendanceSelectionResponse,
    AttendanceSubmitRequest,
    AttendanceSubmitResponse,
    StudentSelection,
)

from .error_handling import handle_session_desk_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["attendance"])


@router.get("/{session_id}/attendance", response_model=AttendanceSelectionResponse)
@handle_session_desk_errors
async def get_attendance(
    session_id: str,
    batch_id: str = Query(..., min_length=1),
    reconciler: AttendanceReconciler = Depends(get_attendance_reconciler),
) -> AttendanceSelectionResponse:
    """
    Open the attendance dialog of a session.

    Returns:
        AttendanceSelectionResponse: Roster with present flags, mark/update mode

    Raises:
        HTTPException(422): Missing batch
    """
    state = await reconciler.open(session_id, batch_id)
    summary = reconciler.summary()
    return AttendanceSelectionResponse(
        session_id=session_id,
        batch_id=reconciler.batch_id,
        mode="update" if state == AttendanceState.LOADED_EXISTING else "mark",
        students=[
            StudentSelection(
                student_id=entry.student_id,
                full_name=entry.user.full_name,
                email=entry.user.email,
                present=reconciler.is_present(entry.student_id),
            )
            for entry in reconciler.roster
        ],
        summary=AttendanceCounts(
            total=summary.total, present=summary.present, absent=summary.absent
        ),
        notices=reconciler.notices.drain(),
    )


@router.put("/{session_id}/attendance", response_model=AttendanceSubmitResponse)
@handle_session_desk_errors
async def submit_attendance(
    session_id: str,
    request: AttendanceSubmitRequest,
    response: Response,
    reconciler: AttendanceReconciler = Depends(get_attendance_reconciler),
) -> AttendanceSubmitResponse:
    """
    Replace a session's attendance with the submitted present-set.

    The roster is reloaded so absentees are computed against the current
    enrolment. Responds 502 with an error notice when the roster cannot be
    loaded or the backend rejects the submission.

    Raises:
        HTTPException(422): Present ids that are not enrolled in the batch
    """
    await reconciler.open(session_id, request.batch_id)
    if not reconciler.roster_loaded:
        response.status_code = status.HTTP_502_BAD_GATEWAY
        return AttendanceSubmitResponse(success=False, notices=reconciler.notices.drain())

    reconciler.set_present(request.present_student_ids)
    partition = reconciler.partition()

    if not await reconciler.submit():
        response.status_code = status.HTTP_502_BAD_GATEWAY
        return AttendanceSubmitResponse(success=False, notices=reconciler.notices.drain())

    return AttendanceSubmitResponse(
        success=True,
        present_students=list(partition.present_students),
        absent_students=list(partition.absent_students),
        notices=reconciler.notices.drain(),
    )
