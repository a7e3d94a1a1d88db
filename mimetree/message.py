"""Message-level facade over a mailbox backend.

A :class:`Message` ties one message number to its collaborators: it fetches
the structure once and builds the part tree lazily, resolves part content
through a :class:`~mimetree.resolver.ContentResolver`, and exposes the raw
source and header block.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .codec import decode_mime_words
from .errors import FetchError, MimeTreeError, StructuralError
from .interface import WHOLE_MESSAGE, MailboxBackend
from .resolver import ContentResolver
from .tree import PartNode, PartTree, build_tree

logger = structlog.get_logger()

_LINE_BREAK = re.compile(r"\r?\n")


class MessageOverview(BaseModel):
    """Summary fields a server reports for a message before any fetch."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    msgno: int = Field(gt=0, description="Sequence number within the mailbox")
    subject: str | None = Field(default=None, description="Raw Subject header")
    from_: str | None = Field(default=None, alias="from", description="Raw From header")
    message_id: str | None = Field(default=None, description="Raw Message-ID header")
    udate: int | None = Field(default=None, description="Arrival time, epoch seconds")
    date: str | None = Field(default=None, description="Raw Date header")
    deleted: bool = Field(default=False, description="Marked for deletion")


class Message:
    """One message in a mailbox and its part tree."""

    def __init__(self, mailbox: MailboxBackend, overview: Any) -> None:
        try:
            info = MessageOverview.model_validate(overview)
        except ValidationError as exc:
            raise StructuralError(f"invalid message overview: {exc}") from exc

        self._mailbox = mailbox
        self.number: int = info.msgno
        self.subject: str = decode_mime_words(info.subject)
        self.sender: str = decode_mime_words(info.from_)
        self.message_id: str = decode_mime_words(info.message_id)
        self.date: datetime | None = _parse_date(info)
        self.deleted: bool = info.deleted

        self._resolver = ContentResolver(mailbox, self.number)
        self._tree: PartTree | None = None
        self._source: bytes | None = None
        self._raw_headers: list[str] | None = None

    def __repr__(self) -> str:
        return f"Message(number={self.number!r}, subject={self.subject!r})"

    def _call(self, what: str, fetch: Callable[..., Any], *args: Any) -> Any:
        """Run one mailbox call, reporting collaborator failures as FetchError."""
        try:
            return fetch(*args)
        except MimeTreeError:
            raise
        except Exception as exc:
            logger.warning(
                "message_fetch_failed",
                message_number=self.number,
                target=what,
                error=str(exc),
            )
            raise FetchError(f"unable to fetch the {what} of message #{self.number}") from exc

    # ------------------------------------------------------------------
    # Part tree
    # ------------------------------------------------------------------

    @property
    def part_tree(self) -> PartTree:
        """The message's part tree, built on first access."""
        if self._tree is None:
            structure = self._call("structure", self._mailbox.fetch_structure, self.number)
            if structure is None:
                raise FetchError(f"unable to fetch the structure of message #{self.number}")
            self._tree = build_tree(structure)
            logger.info(
                "message_structure_loaded",
                message_number=self.number,
                parts=len(self._tree),
            )
        return self._tree

    @property
    def root_part(self) -> PartNode:
        return self.part_tree.root

    @property
    def all_parts(self) -> tuple[PartNode, ...]:
        return self.part_tree.parts

    def content(self, part: PartNode) -> str:
        """Decoded text of *part*."""
        return self._resolver.resolve(part)

    def payload(self, part: PartNode) -> bytes:
        """Transfer-decoded bytes of *part*."""
        return self._resolver.resolve_payload(part)

    # ------------------------------------------------------------------
    # Whole-message accessors
    # ------------------------------------------------------------------

    def source(self) -> bytes:
        """The entire raw message as stored on the server."""
        if self._source is None:
            source = self._call("source", self._mailbox.fetch_bytes, self.number, WHOLE_MESSAGE)
            if not isinstance(source, (bytes, bytearray)) or not source:
                raise FetchError(f"unable to fetch the source of message #{self.number}")
            self._source = bytes(source)
            logger.debug("message_source_fetched", message_number=self.number, size=len(source))
        return self._source

    def raw_headers(self, force_refresh: bool = False) -> list[str]:
        """Header lines with folded continuation lines joined back on."""
        if self._raw_headers is None or force_refresh:
            block = self._call("headers", self._mailbox.fetch_header, self.number)
            if isinstance(block, (bytes, bytearray)):
                block = bytes(block).decode("utf-8", "surrogateescape")
            if not block:
                raise FetchError(f"unable to fetch the headers of message #{self.number}")
            self._raw_headers = unfold_headers(block)
        return self._raw_headers

    def header_values(self, field: str) -> list[str]:
        """Every value of header *field* (case-insensitive), stripped."""
        prefix = field.lower() + ":"
        return [
            line[len(prefix):].strip()
            for line in self.raw_headers()
            if line.lower().startswith(prefix)
        ]

    def _first_header(self, field: str) -> str:
        values = self.header_values(field)
        return values[0] if values else ""

    @property
    def to(self) -> str:
        return self._first_header("to")

    @property
    def cc(self) -> str:
        return self._first_header("cc")

    @property
    def bcc(self) -> str:
        return self._first_header("bcc")

    @property
    def reply_to(self) -> str:
        return self._first_header("reply-to")


def unfold_headers(block: str) -> list[str]:
    """Split a header block into logical lines (RFC 5322 section 2.2.3)."""
    lines: list[str] = []
    for line in _LINE_BREAK.split(block):
        if not line:
            continue
        if lines and line[0] in " \t":
            lines[-1] += line
        else:
            lines.append(line)
    return lines


def _parse_date(info: MessageOverview) -> datetime | None:
    if info.udate is not None and info.udate > 0:
        return datetime.fromtimestamp(info.udate, UTC)
    if not info.date:
        return None
    try:
        return parsedate_to_datetime(info.date)
    except (TypeError, ValueError) as exc:
        raise StructuralError(f"failed to parse date/time {info.date!r}") from exc
