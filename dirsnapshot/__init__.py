"""
dirsnapshot — single-file text snapshots of directories and files.

This package provides small, composable tools to:
- render a directory as an indented tree listing,
- concatenate file contents under ``--- path ---`` headers,
- assemble both into one snapshot file.

File contents are embedded byte-for-byte; traversal is depth-first pre-order
in lexical name order, and every filesystem error is fatal.
"""

from __future__ import annotations

from .content import file_to_text, path_content
from .errors import SnapshotError
from .snapshot import SnapshotOptions, build_snapshot, take_snapshot, write_snapshot
from .tree import build_tree, draw_tree, generate_tree

__all__ = [
    "SnapshotError",
    "SnapshotOptions",
    "build_snapshot",
    "build_tree",
    "draw_tree",
    "file_to_text",
    "generate_tree",
    "path_content",
    "take_snapshot",
    "write_snapshot",
]
