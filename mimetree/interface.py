"""Collaborator interfaces the core calls to reach the mailbox.

Session handling, credentials and transport live behind these ABCs.
Implementations may raise any exception; the core reports such failures as
:class:`~mimetree.errors.FetchError`.
"""

from __future__ import annotations

import abc
from typing import Any

# Body identifier that addresses the entire raw message source.
WHOLE_MESSAGE = ""


class StructureProvider(abc.ABC):
    """Source of the server's structure record for a message."""

    @abc.abstractmethod
    def fetch_structure(self, message_number: int) -> Any:
        """Return the raw nested structure record, or ``None`` if unavailable.

        The record may be a :class:`~mimetree.structure.StructureRecord`, a
        mapping, or any object exposing the record's fields as attributes.
        """
        ...


class ByteFetcher(abc.ABC):
    """Source of raw part bytes."""

    @abc.abstractmethod
    def fetch_bytes(self, message_number: int, body_identifier: str) -> bytes | None:
        """Return the still-encoded bytes of one part.

        ``body_identifier == WHOLE_MESSAGE`` asks for the entire raw message.
        """
        ...


class HeaderProvider(abc.ABC):
    """Source of a message's raw header block."""

    @abc.abstractmethod
    def fetch_header(self, message_number: int) -> str | bytes | None:
        """Return the header block exactly as stored on the server."""
        ...


class MailboxBackend(StructureProvider, ByteFetcher, HeaderProvider):
    """Everything a :class:`~mimetree.message.Message` needs from its mailbox."""
