"""Pure decoding helpers: transfer encodings, character sets, encoded words.

Transfer decoding is strict (a failure raises :class:`TransferDecodeError`),
charset decoding tries several converters before raising
:class:`CharsetDecodeError`, and encoded-word decoding never fails: it falls
back to the raw input.
"""

from __future__ import annotations

import base64
import binascii
import codecs
import email.charset
import quopri
import re
from collections.abc import Callable
from email.errors import HeaderParseError
from email.header import decode_header, make_header
from enum import IntEnum

from .errors import CharsetDecodeError, TransferDecodeError


class TransferEncoding(IntEnum):
    """Content-Transfer-Encoding codes as reported in structure records."""

    SEVEN_BIT = 0
    EIGHT_BIT = 1
    BINARY = 2
    BASE64 = 3
    QUOTED_PRINTABLE = 4
    OTHER = 5


# Normalized names that are already UTF-8 compatible.
_PASSTHROUGH_CHARSETS = frozenset({"UTF8", "ANSI", "USANSI", "ASCII", "USASCII"})

_LATIN1_CHARSETS = frozenset(
    {"ISO88591", "ISOIR100", "LATIN1", "L1", "CSISOLATIN1", "IBM819", "CP819"}
)

_BASE64_NOISE = re.compile(rb"[^A-Za-z0-9+/]")
_CP_DASH = re.compile(r"^CP-(.+)$", re.IGNORECASE)


# ------------------------------------------------------------------
# Transfer encodings
# ------------------------------------------------------------------


def decode_transfer(encoding: int, data: bytes) -> bytes:
    """Undo the transfer encoding identified by *encoding*.

    Base64 and quoted-printable are decoded; every other code is returned
    unchanged. Non-empty input that decodes to nothing is treated as corrupt.
    """
    if not data:
        return data
    if encoding == TransferEncoding.BASE64:
        decoded = _decode_base64(data)
    elif encoding == TransferEncoding.QUOTED_PRINTABLE:
        decoded = quopri.decodestring(data)
    else:
        return data
    if not decoded:
        raise TransferDecodeError(
            f"{TransferEncoding(encoding).name.lower()} payload of {len(data)} bytes decoded to nothing"
        )
    return decoded


def _decode_base64(data: bytes) -> bytes:
    raw = _BASE64_NOISE.sub(b"", data)
    padding = (-len(raw)) % 4
    if padding:
        raw += b"=" * padding
    try:
        return base64.b64decode(raw)
    except binascii.Error as exc:
        raise TransferDecodeError(f"invalid base64 payload: {exc}") from exc


# ------------------------------------------------------------------
# Character sets
# ------------------------------------------------------------------


def normalize_charset(name: str) -> str:
    """Upper-case *name* and drop everything but letters and digits."""
    return re.sub(r"[^A-Z0-9]", "", name.upper())


def as_text(data: bytes) -> str:
    """Turn bytes into text without converting them.

    Valid UTF-8 reads naturally; any other byte survives as a surrogate and
    ``text.encode("utf-8", "surrogateescape")`` gives the original back.
    """
    return data.decode("utf-8", "surrogateescape")


def _latin1(name: str, data: bytes) -> str | None:
    if normalize_charset(name) in _LATIN1_CHARSETS:
        return data.decode("latin-1")
    return None


def _codec_registry(name: str, data: bytes) -> str | None:
    try:
        return data.decode(name)
    except (LookupError, ValueError):
        return None


def _alias_table(name: str, data: bytes) -> str | None:
    # The email package's own alias and codec tables (big5, gb2312, ...).
    alias = email.charset.ALIASES.get(name.lower(), name.lower())
    codec = email.charset.CODEC_MAP.get(alias, alias)
    if codec is None:
        return None
    try:
        return data.decode(codecs.lookup(codec).name)
    except (LookupError, ValueError):
        return None


_CONVERTERS: tuple[Callable[[str, bytes], str | None], ...] = (
    _latin1,
    _codec_registry,
    _alias_table,
)


def decode_charset(charset: str, data: bytes) -> str:
    """Convert *data* from *charset* into text.

    UTF-8 and ASCII flavours pass straight through. Other charsets go through
    each converter in turn and the first non-empty result wins.
    """
    if not data:
        return ""
    name = charset.strip().upper()
    if not name or normalize_charset(name) in _PASSTHROUGH_CHARSETS:
        return as_text(data)
    for converter in _CONVERTERS:
        text = converter(name, data)
        if text:
            return text
    match = _CP_DASH.match(name)
    if match:
        return decode_charset("CP" + match.group(1), data)
    raise CharsetDecodeError(f"unable to decode {len(data)} bytes from charset {name!r}")


# ------------------------------------------------------------------
# RFC 2047 encoded words
# ------------------------------------------------------------------


def decode_mime_words(value: str | None) -> str:
    """Decode RFC 2047 encoded words; return *value* unchanged on any failure."""
    if not value:
        return ""
    try:
        decoded = str(make_header(decode_header(value)))
    except (HeaderParseError, LookupError, ValueError):
        return value
    return decoded or value


__all__ = [
    "TransferEncoding",
    "as_text",
    "decode_charset",
    "decode_mime_words",
    "decode_transfer",
    "normalize_charset",
]
