"""
Common models and utilities.

Base class for backend payloads and the user-facing notice schema.

Dependencies: pydantic
System role: Shared model configuration and notice contract
"""

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from session_desk.core.refs import normalize_ref


class WireModel(BaseModel):
    """Base for backend documents: camelCase on the wire, snake_case in code."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class DocumentModel(WireModel):
    """Backend document carrying a Mongo-style ``_id``."""

    id: str = Field(validation_alias=AliasChoices("_id", "id"))

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return normalize_ref(value) or value


class NoticeLevel(str, Enum):
    """Severity of a user-visible notice."""

    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class Notice(BaseModel):
    """User-visible notice raised at an action boundary."""

    level: NoticeLevel
    title: str
    description: str = ""
