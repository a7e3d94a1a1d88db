"""Lazy, memoized content loading for part-tree nodes.

The pipeline per node is fetch, then transfer-decode, then charset-decode.
Transfer decoding must succeed; charset decoding is best-effort and falls
back to the transfer-decoded bytes. Each node is loaded at most once.
"""

from __future__ import annotations

import structlog

from .codec import as_text, decode_charset, decode_transfer
from .errors import CharsetDecodeError, FetchError, MimeTreeError
from .interface import ByteFetcher
from .tree import PartNode

logger = structlog.get_logger()


class ContentResolver:
    """Load and decode part content for one message number.

    Calls on the same node are single-flight: a second caller waits for the
    first fetch and then reads the cached result.
    """

    def __init__(self, fetcher: ByteFetcher, message_number: int) -> None:
        self._fetcher = fetcher
        self._message_number = message_number

    @property
    def message_number(self) -> int:
        return self._message_number

    def resolve(self, node: PartNode) -> str:
        """Return the decoded text of *node*, fetching it on first use."""
        if node.content is None:
            self._load(node)
        assert node.content is not None
        return node.content

    def resolve_payload(self, node: PartNode) -> bytes:
        """Return the transfer-decoded bytes of *node* (same single fetch)."""
        if node.payload is None:
            self._load(node)
        assert node.payload is not None
        return node.payload

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _load(self, node: PartNode) -> None:
        with node._lock:
            if node.content is not None:
                return
            raw = self._fetch(node)
            payload = raw
            text = ""
            if raw:
                if node.original_encoding is not None:
                    payload = decode_transfer(node.original_encoding, raw)
                text = self._to_text(node, payload)
            node.payload = payload
            node.content = text
            logger.debug(
                "part_content_resolved",
                message_number=self._message_number,
                body_identifier=node.body_identifier,
                size=len(payload),
            )

    def _fetch(self, node: PartNode) -> bytes:
        if node.body_identifier is None:
            raise FetchError(f"part {node.full_type!r} has no body identifier to fetch")
        try:
            raw = self._fetcher.fetch_bytes(self._message_number, node.body_identifier)
        except MimeTreeError:
            raise
        except Exception as exc:
            logger.warning(
                "part_fetch_failed",
                message_number=self._message_number,
                body_identifier=node.body_identifier,
                error=str(exc),
            )
            raise FetchError(
                f"unable to fetch part {node.body_identifier!r} of message #{self._message_number}"
            ) from exc
        if isinstance(raw, bytearray):
            raw = bytes(raw)
        if not isinstance(raw, bytes):
            raise FetchError(
                f"unable to fetch part {node.body_identifier!r} of message #{self._message_number}"
            )
        logger.debug(
            "part_content_fetched",
            message_number=self._message_number,
            body_identifier=node.body_identifier,
            size=len(raw),
        )
        return raw

    def _to_text(self, node: PartNode, payload: bytes) -> str:
        if not node.original_charset:
            return as_text(payload)
        try:
            return decode_charset(node.original_charset, payload)
        except CharsetDecodeError:
            logger.warning(
                "charset_decode_failed",
                message_number=self._message_number,
                body_identifier=node.body_identifier,
                charset=node.original_charset,
            )
            return as_text(payload)
