"""Exception hierarchy for structure parsing and content resolution."""

from __future__ import annotations


class MimeTreeError(Exception):
    """Base class for every error raised by :mod:`mimetree`."""


class StructuralError(MimeTreeError):
    """The structure provider handed us something that is not a valid record.

    Raised while validating a structure record or a message overview.
    A tree build that raises this never exposes a partial tree.
    """


class FetchError(MimeTreeError):
    """A collaborator returned no usable data or failed outright.

    Nothing is cached when this is raised, so callers are free to retry.
    """


class TransferDecodeError(MimeTreeError):
    """Bytes could not be decoded out of their declared transfer encoding."""


class CharsetDecodeError(MimeTreeError):
    """Bytes could not be converted from their declared character set.

    The content resolver absorbs this and keeps the undecoded bytes.
    """
