"""Entry point for the mimetree package.

Usage::

    python -m mimetree inspect structure.json   # print the part tree
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

USAGE = "Usage: python -m mimetree inspect <structure.json>"


def render_tree(tree) -> list[str]:
    lines = []
    for part in tree:
        address = part.body_identifier or "-"
        label = part.name or part.disposition_name
        line = f"{'  ' * part.depth}{address}  {part.full_type}"
        if label:
            line += f"  {label}"
        lines.append(line)
    return lines


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 2 or args[0] != "inspect":
        print(USAGE, file=sys.stderr)
        sys.exit(1)

    from .config import MimeTreeConfig
    from .errors import StructuralError
    from .logging import setup_logging_from
    from .tree import build_tree

    setup_logging_from(MimeTreeConfig(), stream=sys.stderr)

    structure = json.loads(Path(args[1]).read_text(encoding="utf-8"))
    try:
        tree = build_tree(structure)
    except StructuralError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)

    for line in render_tree(tree):
        print(line)


if __name__ == "__main__":
    main()
