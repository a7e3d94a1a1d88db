"""Umbrella MIME tree: addressable, lazily decoded part trees for IMAP messages."""

from .codec import TransferEncoding, decode_charset, decode_mime_words, decode_transfer
from .config import MimeTreeConfig, RetryConfig
from .errors import (
    CharsetDecodeError,
    FetchError,
    MimeTreeError,
    StructuralError,
    TransferDecodeError,
)
from .interface import ByteFetcher, HeaderProvider, MailboxBackend, StructureProvider
from .logging import setup_logging
from .message import Message, MessageOverview
from .metadata import PartMetadata, extract_metadata
from .resolver import ContentResolver
from .retry import RetryingByteFetcher, with_retry
from .structure import MediaClass, StructureParameter, StructureRecord, parse_structure
from .tree import PartNode, PartTree, build_tree

__all__ = [
    "ByteFetcher",
    "CharsetDecodeError",
    "ContentResolver",
    "FetchError",
    "HeaderProvider",
    "MailboxBackend",
    "MediaClass",
    "Message",
    "MessageOverview",
    "MimeTreeConfig",
    "MimeTreeError",
    "PartMetadata",
    "PartNode",
    "PartTree",
    "RetryConfig",
    "RetryingByteFetcher",
    "StructuralError",
    "StructureParameter",
    "StructureProvider",
    "StructureRecord",
    "TransferDecodeError",
    "TransferEncoding",
    "build_tree",
    "decode_charset",
    "decode_mime_words",
    "decode_transfer",
    "extract_metadata",
    "parse_structure",
    "setup_logging",
    "with_retry",
]
