"""
Material staging buffer.

Holds the edit form's material slots and a side table of locally selected
files keyed by slot index. Nothing is uploaded until ``resolve_all`` runs at
save time; it uploads staged files strictly one at a time in slot order and
writes each returned URL into its slot.

A failed upload stops the pipeline. Slots uploaded earlier in the same run
keep their new URLs (no rollback) and their staged files are cleared, so a
retry only uploads what is still pending.

Dependencies: session_desk.boundary.http, session_desk.core
System role: Deferred upload of session materials
"""

import logging
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from pydantic import ValidationError as PydanticValidationError

from session_desk.boundary.http import LiveCoursesClient
from session_desk.core.cancellation import CancellationToken
from session_desk.core.exceptions import (
    MaterialUploadError,
    PortalRequestError,
    ValidationError,
)
from session_desk.models.session import Material, MaterialType

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSIONS = frozenset({".pdf", ".doc", ".docx", ".ppt", ".pptx", ".xls", ".xlsx"})

EDITABLE_FIELDS = frozenset({"type", "title", "url"})


@dataclass(frozen=True)
class StagedFile:
    """A locally selected file waiting for upload."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def default_title(self) -> str:
        """File name up to its first dot."""
        return self.filename.split(".")[0]


@dataclass(frozen=True)
class UploadTask:
    slot_index: int
    file: StagedFile


UploadCallback = Callable[[int, Material], None]


def accepts(material_type: MaterialType, file: StagedFile) -> bool:
    """Whether a file matches the accept filter of a material type."""
    if material_type == MaterialType.DOCUMENT:
        return Path(file.filename).suffix.lower() in DOCUMENT_EXTENSIONS
    if material_type == MaterialType.VIDEO:
        return file.content_type.startswith("video/")
    if material_type == MaterialType.IMAGE:
        return file.content_type.startswith("image/")
    return True


class MaterialStagingBuffer:
    """Material slots of an edit form plus their staged files."""

    def __init__(
        self,
        client: LiveCoursesClient,
        materials: list[Material] | None = None,
    ) -> None:
        """
        Initialize buffer.

        Args:
            client: Backend client used for uploads
            materials: Draft material list, edited in place
        """
        self.client = client
        self.materials: list[Material] = materials if materials is not None else []
        self._staged: dict[int, StagedFile] = {}

    # ------------------------------------------------------------------
    # Slot editing (no network)
    # ------------------------------------------------------------------
    def add_slot(self) -> int:
        """Append an empty document slot and return its index."""
        self.materials.append(Material(type=MaterialType.DOCUMENT, title="", url=""))
        return len(self.materials) - 1

    def remove_slot(self, index: int) -> Material:
        """
        Remove a slot and its staged file.

        Staged files of later slots move down with their slots.
        """
        self._check_index(index)
        removed = self.materials.pop(index)
        self._staged = {
            (i - 1 if i > index else i): f
            for i, f in self._staged.items()
            if i != index
        }
        return removed

    def update_slot(self, index: int, field: str, value: Any) -> Material:
        """
        Set ``type``, ``title`` or ``url`` of a slot.

        Changing the type keeps any staged file.
        """
        self._check_index(index)
        if field not in EDITABLE_FIELDS:
            raise ValidationError(f"Material field '{field}' is not editable", field=field)
        material = self.materials[index]
        try:
            setattr(material, field, value)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid value for material {field}", field=field, details={"value": value}
            ) from e
        return material

    def stage_file(self, index: int, file: StagedFile) -> None:
        """
        Attach a local file to a slot, replacing any earlier one.

        An empty title defaults to the file name before its first dot. The
        slot's url is left alone until upload.
        """
        self._check_index(index)
        material = self.materials[index]
        if not accepts(material.type, file):
            raise ValidationError(
                f"{file.filename} is not accepted for {material.type.value} materials",
                field="file",
            )
        self._staged[index] = file
        if not material.title:
            material.title = file.default_title

    def staged_file(self, index: int) -> StagedFile | None:
        return self._staged.get(index)

    def pending_indices(self) -> list[int]:
        return sorted(self._staged)

    def missing_files(self) -> list[int]:
        """Document, video and image slots with neither a url nor a staged file."""
        return [
            i
            for i, m in enumerate(self.materials)
            if m.type != MaterialType.LINK and not m.is_resolved and i not in self._staged
        ]

    def has_unresolved(self) -> bool:
        """True while a slot waits for upload or a file slot has no url."""
        return bool(self._staged) or bool(self.missing_files())

    def clear(self) -> None:
        self._staged.clear()

    # ------------------------------------------------------------------
    # Resolution (network)
    # ------------------------------------------------------------------
    async def resolve_all(
        self,
        session_id: str,
        cancel_token: CancellationToken | None = None,
        on_upload: UploadCallback | None = None,
    ) -> list[Material]:
        """
        Upload every staged file in slot order and fill in the URLs.

        Args:
            session_id: Session the materials belong to
            cancel_token: Checked before each upload
            on_upload: Called with (slot_index, material) before each upload

        Returns:
            list[Material]: Copy of the resolved material list

        Raises:
            MaterialUploadError: First failing slot; later slots are not attempted
            OperationCancelledError: Token cancelled between uploads
        """
        queue = deque(UploadTask(i, self._staged[i]) for i in sorted(self._staged))
        uploaded: list[int] = []

        while queue:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            task = queue.popleft()
            material = self.materials[task.slot_index]
            if on_upload is not None:
                on_upload(task.slot_index, material)

            try:
                url = await self.client.upload_material(
                    session_id,
                    task.file.filename,
                    task.file.content,
                    task.file.content_type,
                )
            except PortalRequestError as e:
                logger.warning(
                    "Material upload failed",
                    extra={
                        "session_id": session_id,
                        "slot_index": task.slot_index,
                        "uploaded_slots": uploaded,
                        "error": e.message,
                    },
                )
                raise MaterialUploadError(
                    task.slot_index, material.title, e.message, uploaded
                ) from e

            material.url = url
            self._staged.pop(task.slot_index, None)
            uploaded.append(task.slot_index)
            logger.info(
                "Material uploaded",
                extra={
                    "session_id": session_id,
                    "slot_index": task.slot_index,
                    "file_name": task.file.filename,
                },
            )

        return [m.model_copy(deep=True) for m in self.materials]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.materials):
            raise ValidationError(f"No material slot at index {index}", field="index")
