"""Flat metadata extracted from a single structure node (children ignored)."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .codec import decode_mime_words
from .structure import MEDIA_CLASS_CODES, MediaClass, StructureParameter, StructureRecord


@dataclass(eq=False)
class PartMetadata:
    """Media type, parameters, disposition and encoding of one part."""

    media_class: MediaClass = MediaClass.OTHER
    subtype: str = ""
    full_type: str = "other"
    name: str = ""
    original_charset: str = ""
    description: str = ""
    disposition: str = ""
    disposition_name: str = ""
    original_encoding: int | None = None
    size: int | None = None


def extract_metadata(record: StructureRecord) -> PartMetadata:
    """Build the :class:`PartMetadata` for *record*."""
    media_class = media_class_for(record.type)
    subtype = record.subtype.strip().lower() if isinstance(record.subtype, str) else ""
    params = _first_values(record.parameters, ("name", "charset"))
    dparams = _first_values(record.dparameters, ("filename",))

    return PartMetadata(
        media_class=media_class,
        subtype=subtype,
        full_type=_join_type(media_class.value, subtype),
        name=decode_mime_words(params.get("name")),
        original_charset=(params.get("charset") or "").upper(),
        description=_free_text(record.description),
        disposition=_free_text(record.disposition),
        disposition_name=decode_mime_words(dparams.get("filename")),
        original_encoding=_as_int(record.encoding),
        size=record.bytes if _is_int(record.bytes) else None,
    )


def media_class_for(type_id: Any) -> MediaClass:
    """Map a media-class code (int or numeric string) to :class:`MediaClass`."""
    code = _as_int(type_id)
    if code is None:
        return MediaClass.OTHER
    return MEDIA_CLASS_CODES.get(code, MediaClass.OTHER)


def _join_type(main: str, sub: str) -> str:
    if main and sub:
        return f"{main}/{sub}"
    return main + sub


def _first_values(
    parameters: Iterable[StructureParameter] | None,
    wanted: tuple[str, ...],
) -> dict[str, str]:
    """Return the first value of each wanted attribute (case-insensitive)."""
    found: dict[str, str] = {}
    for param in parameters or ():
        key = param.attribute.lower()
        if key in wanted and key not in found and param.value is not None:
            found[key] = param.value
    return found


def _free_text(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return decode_mime_words(value.strip()).strip()


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _as_int(value: Any) -> int | None:
    """Coerce an integral number or numeric string ("3", "3.0", "3e0")."""
    if _is_int(value):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
        try:
            value = float(value)
        except ValueError:
            return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None
