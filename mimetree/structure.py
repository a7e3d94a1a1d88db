"""Validated model of the structure record a mailbox server reports.

Servers describe a message's MIME tree before any content is transferred.
The record is loosely typed on the wire (numeric strings for integer codes,
placeholders instead of empty parameter lists), so scalar fields are kept
permissive and interpreted later by :mod:`mimetree.metadata`. Only the
*shape* is enforced here: parameter entries must be attribute/value records
and children must be structure records.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import StructuralError


class MediaClass(str, Enum):
    """Top-level media type of a part."""

    TEXT = "text"
    MULTIPART = "multipart"
    MESSAGE = "message"
    APPLICATION = "application"
    AUDIO = "audio"
    IMAGE = "image"
    VIDEO = "video"
    MODEL = "model"
    OTHER = "other"


MEDIA_CLASS_CODES: dict[int, MediaClass] = {
    0: MediaClass.TEXT,
    1: MediaClass.MULTIPART,
    2: MediaClass.MESSAGE,
    3: MediaClass.APPLICATION,
    4: MediaClass.AUDIO,
    5: MediaClass.IMAGE,
    6: MediaClass.VIDEO,
    7: MediaClass.MODEL,
    8: MediaClass.OTHER,
}


class StructureParameter(BaseModel):
    """One ``attribute=value`` pair of a Content-Type or disposition header."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    attribute: str = Field(description="Parameter name as sent by the server")
    value: str | None = Field(default=None, description="Raw parameter value")


class StructureRecord(BaseModel):
    """One node of a message structure, with its children nested in ``parts``."""

    model_config = ConfigDict(from_attributes=True, frozen=True, extra="ignore")

    type: Any = Field(default=None, description="Integer media-class code")
    subtype: Any = Field(default=None, description="Media subtype, e.g. PLAIN")
    parameters: list[StructureParameter] | None = Field(
        default=None,
        description="Content-Type parameters in header order",
    )
    description: Any = Field(default=None, description="Content-Description")
    disposition: Any = Field(default=None, description="Content-Disposition value")
    dparameters: list[StructureParameter] | None = Field(
        default=None,
        description="Content-Disposition parameters in header order",
    )
    encoding: Any = Field(default=None, description="Integer transfer-encoding code")
    bytes: Any = Field(default=None, description="Declared size of the encoded body")
    parts: list[StructureRecord] | None = Field(
        default=None,
        description="Child parts for multipart and encapsulated messages",
    )

    @field_validator("parameters", "dparameters", "parts", mode="before")
    @classmethod
    def _drop_placeholders(cls, value: Any) -> Any:
        # Servers send a non-list placeholder when a list is empty.
        if isinstance(value, (list, tuple)):
            return list(value)
        return None


def parse_structure(raw: Any) -> StructureRecord:
    """Validate *raw* (record, mapping, or attribute object) into a record.

    Raises :class:`StructuralError` when any node, child, or parameter entry
    is malformed. Validation covers the whole tree at once.
    """
    if isinstance(raw, StructureRecord):
        return raw
    if raw is None or isinstance(raw, (str, bytes, int, float, list, tuple)):
        raise StructuralError(f"structure record expected, got {type(raw).__name__}")
    try:
        return StructureRecord.model_validate(raw)
    except ValidationError as exc:
        raise StructuralError(f"malformed structure record: {exc}") from exc
