"""Part tree construction and body-identifier addressing.

Every part gets a positional *path*. The root's path is ``(1,)`` and a child
normally extends its parent's path with its 1-based sibling index. The single
child of an encapsulated message (``message/*`` with exactly one part)
inherits the parent's path unchanged, because the encapsulated body does not
add a numbering level.

The path doubles as the part's body identifier, except for containers:
multipart parts, single-child messages, and anything else that has children
never have their own bytes fetched, so their ``body_identifier`` is ``None``
even though their path still seeds their children's addresses.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

import structlog

from .metadata import PartMetadata, extract_metadata
from .structure import MediaClass, StructureRecord, parse_structure

logger = structlog.get_logger()

ROOT_PATH: tuple[int, ...] = (1,)


@dataclass(eq=False)
class PartNode(PartMetadata):
    """One part of a message, linked to its parent and children."""

    body_identifier: str | None = None
    path: tuple[int, ...] = ROOT_PATH
    parent: PartNode | None = field(default=None, repr=False)
    children: list[PartNode] = field(default_factory=list, repr=False)
    content: str | None = field(default=None, repr=False)
    payload: bytes | None = field(default=None, repr=False)
    all_parts: tuple[PartNode, ...] = field(default=(), repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_container(self) -> bool:
        return self.body_identifier is None

    @property
    def is_resolved(self) -> bool:
        return self.content is not None

    @property
    def depth(self) -> int:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth


@dataclass(frozen=True)
class PartTree:
    """The root part plus a flat, pre-order enumeration of every part."""

    root: PartNode
    parts: tuple[PartNode, ...]

    def __iter__(self) -> Iterator[PartNode]:
        return iter(self.parts)

    def __len__(self) -> int:
        return len(self.parts)

    def find(self, body_identifier: str) -> PartNode | None:
        """Return the fetchable part addressed by *body_identifier*, if any."""
        for part in self.parts:
            if part.body_identifier == body_identifier:
                return part
        return None

    def leaves(self) -> list[PartNode]:
        """Parts that carry their own fetchable content."""
        return [part for part in self.parts if not part.is_container]


def format_path(path: tuple[int, ...]) -> str:
    return ".".join(str(segment) for segment in path)


def is_container(meta: PartMetadata, child_count: int) -> bool:
    """Whether a part's content is represented entirely by its children."""
    if meta.media_class is MediaClass.MULTIPART:
        return True
    if meta.media_class is MediaClass.MESSAGE and child_count == 1:
        return True
    return child_count > 0


class PartTreeBuilder:
    """Single-use, depth-first builder that owns the flat enumeration."""

    def __init__(self) -> None:
        self._parts: list[PartNode] = []

    def build(self, record: StructureRecord) -> PartTree:
        root = self._allocate(record, ROOT_PATH, parent=None)
        view = tuple(self._parts)
        for part in view:
            part.all_parts = view
        return PartTree(root=root, parts=view)

    def _allocate(
        self,
        record: StructureRecord,
        path: tuple[int, ...],
        parent: PartNode | None,
    ) -> PartNode:
        meta = extract_metadata(record)
        children = record.parts or []

        node = PartNode(**vars(meta), path=path, parent=parent)
        if not is_container(meta, len(children)):
            node.body_identifier = format_path(path)
        if node.body_identifier is None or meta.size == 0 or children:
            node.content = ""
            node.payload = b""
        self._parts.append(node)

        inherit = meta.media_class is MediaClass.MESSAGE and len(children) == 1
        for index, child in enumerate(children, start=1):
            child_path = path if inherit else path + (index,)
            node.children.append(self._allocate(child, child_path, parent=node))
        return node


def build_tree(structure: Any) -> PartTree:
    """Validate *structure* and build its :class:`PartTree`.

    Raises :class:`~mimetree.errors.StructuralError` on malformed input;
    nothing is built in that case.
    """
    record = parse_structure(structure)
    tree = PartTreeBuilder().build(record)
    logger.debug(
        "part_tree_built",
        parts=len(tree),
        leaves=sum(1 for part in tree if not part.is_container),
        root_type=tree.root.full_type,
    )
    return tree
