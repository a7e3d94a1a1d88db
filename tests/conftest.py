"""Shared test fixtures for the mimetree test suite."""

from __future__ import annotations

from typing import Any

import pytest

from mimetree.interface import MailboxBackend

# ------------------------------------------------------------------
# Fake collaborators
# ------------------------------------------------------------------


def _maybe_raise(value: Any) -> Any:
    if isinstance(value, BaseException):
        raise value
    return value


class FakeMailbox(MailboxBackend):
    """In-memory mailbox that records every collaborator call."""

    def __init__(
        self,
        *,
        structures: dict[int, Any] | None = None,
        bodies: dict[tuple[int, str], Any] | None = None,
        headers: dict[int, Any] | None = None,
    ) -> None:
        self.structures = structures or {}
        self.bodies = bodies or {}
        self.headers = headers or {}
        self.structure_calls: list[int] = []
        self.byte_calls: list[tuple[int, str]] = []
        self.header_calls: list[int] = []

    def fetch_structure(self, message_number: int) -> Any:
        self.structure_calls.append(message_number)
        return _maybe_raise(self.structures.get(message_number))

    def fetch_bytes(self, message_number: int, body_identifier: str) -> Any:
        self.byte_calls.append((message_number, body_identifier))
        return _maybe_raise(self.bodies.get((message_number, body_identifier)))

    def fetch_header(self, message_number: int) -> Any:
        self.header_calls.append(message_number)
        return _maybe_raise(self.headers.get(message_number))


@pytest.fixture
def mailbox_factory():
    """Factory to create FakeMailbox instances."""

    def _make(**kwargs) -> FakeMailbox:
        return FakeMailbox(**kwargs)

    return _make


# ------------------------------------------------------------------
# Sample structure builders
# ------------------------------------------------------------------


def leaf(
    type_id: int = 0,
    subtype: str = "PLAIN",
    *,
    encoding: int = 0,
    size: int | None = 5,
    charset: str | None = None,
    filename: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build a single non-container structure record."""
    record: dict[str, Any] = {"type": type_id, "subtype": subtype, "encoding": encoding}
    if size is not None:
        record["bytes"] = size
    if charset is not None:
        record["parameters"] = [{"attribute": "CHARSET", "value": charset}]
    if filename is not None:
        record["disposition"] = "attachment"
        record["dparameters"] = [{"attribute": "filename", "value": filename}]
    record.update(extra)
    return record


def multipart(subtype: str, *parts: dict[str, Any]) -> dict[str, Any]:
    return {"type": 1, "subtype": subtype, "parts": list(parts)}


def rfc822(*parts: dict[str, Any]) -> dict[str, Any]:
    return {"type": 2, "subtype": "RFC822", "encoding": 0, "bytes": 512, "parts": list(parts)}


@pytest.fixture
def mixed_structure() -> dict[str, Any]:
    """multipart/mixed: a text part plus a base64 attachment."""
    return multipart(
        "MIXED",
        leaf(0, "PLAIN", encoding=0, size=5),
        leaf(3, "OCTET-STREAM", encoding=3, size=8, filename="a.bin"),
    )


@pytest.fixture
def nested_structure() -> dict[str, Any]:
    """mixed[ alternative[plain, html], forwarded message[ mixed[plain, pdf] ] ]."""
    return multipart(
        "MIXED",
        multipart(
            "ALTERNATIVE",
            leaf(0, "PLAIN", charset="utf-8"),
            leaf(0, "HTML", charset="utf-8", encoding=4),
        ),
        rfc822(
            multipart(
                "MIXED",
                leaf(0, "PLAIN", charset="iso-8859-1"),
                leaf(3, "PDF", encoding=3, size=1024, filename="report.pdf"),
            ),
        ),
    )
