"""
Course hierarchy API endpoints.

Routes:
- GET /courses - Courses assigned to the trainer
- GET /courses/{id} - Batches of a course with their sessions

Fetch failures never fail the request: the affected list is empty and the
response carries an error notice.

Dependencies: session_desk.application.services, session_desk.models
System role: Hierarchy read HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from session_desk.api.deps import get_hierarchy_loader
from session_desk.application.services import HierarchyLoader
from session_desk.models.api import (
    BatchSessions,
    CourseDetailResponse,
    CourseListResponse,
    CourseSummary,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("", response_model=CourseListResponse)
async def list_courses(
    loader: HierarchyLoader = Depends(get_hierarchy_loader),
) -> CourseListResponse:
    """List courses assigned to the signed-in trainer."""
    courses = await loader.list_assigned_courses()
    return CourseListResponse(
        courses=[CourseSummary.from_course(c) for c in courses],
        notices=loader.notices.drain(),
    )


@router.get("/{course_id}", response_model=CourseDetailResponse)
async def get_course(
    course_id: str,
    loader: HierarchyLoader = Depends(get_hierarchy_loader),
) -> CourseDetailResponse:
    """
    Load batches and sessions of a course.

    Args:
        course_id: Selected course
        loader: Injected HierarchyLoader

    Returns:
        CourseDetailResponse: Batches with sessions grouped underneath
    """
    view = await loader.select_course(course_id)
    logger.info(
        "Course hierarchy loaded",
        extra={"course_id": course_id, "batch_count": len(view.batches)},
    )
    return CourseDetailResponse(
        course_id=course_id,
        batches=[
            BatchSessions.from_batch(b, view.sessions_by_batch.get(b.id, []))
            for b in view.batches
        ],
        notices=loader.notices.drain(),
    )
