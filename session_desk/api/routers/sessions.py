"""
Session API endpoints.

Routes:
- PUT /sessions/{id} - Save an edited session (multipart)
- DELETE /sessions/{id} - Delete session

The save form posts a ``draft`` JSON part (scalar fields and material slots)
plus one ``file_<slot>`` part per material slot with a newly selected file.
Files are uploaded in slot order before the session is updated.

Dependencies: session_desk.application.services, session_desk.models
System role: Session write HTTP API
"""

import logging
import mimetypes

from fastapi import APIRouter, Depends, Request, Response, status
from starlette.datastructures import UploadFile

from session_desk.api.deps import get_session_edit_controller
from session_desk.application.services import SessionEditController, StagedFile
from session_desk.core.exceptions import ValidationError
from session_desk.models.api import ActionResponse, SessionSaveResponse, SessionSummary
from session_desk.models.draft import SessionDraft

from .error_handling import handle_session_desk_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])

FILE_FIELD_PREFIX = "file_"


async def _staged_file(upload: UploadFile) -> StagedFile:
    filename = upload.filename or "upload"
    content_type = (
        upload.content_type
        or mimetypes.guess_type(filename)[0]
        or "application/octet-stream"
    )
    return StagedFile(filename=filename, content=await upload.read(), content_type=content_type)


def _slot_index(field_name: str) -> int:
    try:
        return int(field_name[len(FILE_FIELD_PREFIX):])
    except ValueError:
        raise ValidationError(f"Invalid file field '{field_name}'", field=field_name)


@router.put("/{session_id}", response_model=SessionSaveResponse)
@handle_session_desk_errors
async def save_session(
    session_id: str,
    request: Request,
    response: Response,
    controller: SessionEditController = Depends(get_session_edit_controller),
) -> SessionSaveResponse:
    """
    Save an edited session.

    Returns:
        SessionSaveResponse: Updated session, or the material slots as they
        stand after a failed save (uploaded URLs kept) with the error notice

    Raises:
        HTTPException(422): Malformed draft or file part
    """
    form = await request.form()
    raw_draft = form.get("draft")
    if not isinstance(raw_draft, str):
        raise ValidationError("Missing draft field", field="draft")

    controller.begin_draft(session_id, SessionDraft.model_validate_json(raw_draft))
    for field_name, value in form.multi_items():
        if field_name.startswith(FILE_FIELD_PREFIX) and isinstance(value, UploadFile):
            controller.materials.stage_file(_slot_index(field_name), await _staged_file(value))

    buffer = controller.materials
    session = await controller.save()
    if session is None:
        error = controller.last_error
        response.status_code = (
            status.HTTP_422_UNPROCESSABLE_ENTITY
            if isinstance(error, ValidationError)
            else status.HTTP_502_BAD_GATEWAY
        )
        return SessionSaveResponse(
            success=False,
            materials=buffer.materials,
            pending_slots=buffer.pending_indices(),
            notices=controller.notices.drain(),
        )

    return SessionSaveResponse(
        success=True,
        session=SessionSummary.from_session(session),
        materials=session.session_materials,
        notices=controller.notices.drain(),
    )


@router.delete("/{session_id}", response_model=ActionResponse)
async def delete_session(
    session_id: str,
    response: Response,
    controller: SessionEditController = Depends(get_session_edit_controller),
) -> ActionResponse:
    """Delete a session; 502 with an error notice when the backend refuses."""
    deleted = await controller.delete_session(session_id)
    if not deleted:
        response.status_code = status.HTTP_502_BAD_GATEWAY
    return ActionResponse(success=deleted, notices=controller.notices.drain())
