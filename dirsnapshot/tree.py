# dirsnapshot/tree.py

"""
Directory tree rendering.

This module walks a directory into an ``anytree`` node tree and renders it as
an indented listing, one line per entry:

    proj
      - a.txt
      - [DIR] sub
        - b.txt

Traversal is depth-first pre-order: a directory's contents are listed right
after the directory itself, before its later siblings. Children are visited in
lexical name order and symbolic links are never followed. Any filesystem error
aborts the walk; nothing is skipped.

The main entry point is :func:`generate_tree`, which returns the rendered tree
as a string.
"""


from __future__ import annotations

import os
import stat
from pathlib import Path

from anytree import Node, PreOrderIter

from dirsnapshot.errors import TreeError, describe
from dirsnapshot.log import get_logger

logger = get_logger("tree")

INDENT = "  "
MARKER = "- "
DIR_TAG = "[DIR] "


def is_dir(p: Path) -> bool:
    """
    Determine whether a path is a directory, without following symlinks.

    Unlike ``Path.is_dir()``, filesystem errors are not swallowed: a path that
    cannot be inspected raises ``OSError``, tagged with ``op = "lstat"``.
    """

    try:
        return stat.S_ISDIR(os.lstat(p).st_mode)
    except OSError as exc:
        exc.op = "lstat"
        raise


def iter_children(d: Path) -> list[Path]:
    """
    Return the immediate children of a directory in lexical name order.

    Parameters
    ----------
    d : pathlib.Path
        Directory to list.

    Returns
    -------
    list[pathlib.Path]
        ``d / name`` for every entry, sorted by name.

    Raises
    ------
    OSError
        If the directory cannot be listed; tagged with ``op = "open"``.
    """

    try:
        with os.scandir(d) as it:
            names = [entry.name for entry in it]
    except OSError as exc:
        exc.op = "open"
        raise
    return [d / name for name in sorted(names)]


def build_tree(root: str | os.PathLike[str]) -> Node:
    """
    Walk ``root`` and build the matching ``anytree`` node tree.

    The root node is named after the path string it was given (not its base
    name); every other node is named after its entry. Each node carries:

    - ``fs_path``: the path as reached by the walk (root joined with names),
    - ``is_dir``: whether the entry is a directory (``lstat``-based).

    Children are attached in traversal order, so ``PreOrderIter`` over the
    result replays the walk.

    Parameters
    ----------
    root : str | os.PathLike
        Path to walk. May also be a file, yielding a single-node tree.

    Returns
    -------
    anytree.Node
        The root node.

    Raises
    ------
    OSError
        If any entry cannot be inspected or any directory cannot be listed.
    """

    root_path = Path(root)
    root_node = Node(os.fspath(root), fs_path=root_path, is_dir=is_dir(root_path))

    def rec(parent: Node) -> None:
        """Attach the children of ``parent``, descending into directories."""
        logger.debug("Listing %s", parent.fs_path)
        for child in iter_children(parent.fs_path):
            node = Node(child.name, parent=parent, fs_path=child, is_dir=is_dir(child))
            if node.is_dir:
                rec(node)

    if root_node.is_dir:
        rec(root_node)
    return root_node


def format_entry(node: Node) -> str:
    """Render a single tree line (without the newline)."""
    if node.is_root:
        return node.name
    tag = DIR_TAG if node.is_dir else ""
    return f"{INDENT * node.depth}{MARKER}{tag}{node.name}"


def draw_tree(node: Node) -> str:
    """
    Render a node tree, one ``\\n``-terminated line per node.

    The root line is its path string, unindented. Every other node is indented
    by two spaces per level below the root, followed by ``- ``, a ``[DIR] ``
    tag for directories, and the entry name.
    """

    return "".join(format_entry(n) + "\n" for n in PreOrderIter(node))


def generate_tree(root: str | os.PathLike[str]) -> str:
    """
    Build and render the tree of ``root`` in one call.

    Parameters
    ----------
    root : str | os.PathLike
        Directory to render.

    Returns
    -------
    str
        The rendered tree, one line per entry plus the root line.

    Raises
    ------
    TreeError
        If the walk fails for any entry. The ``OSError`` is chained.
    """

    try:
        node = build_tree(root)
    except OSError as exc:
        raise TreeError(describe(exc)) from exc
    return draw_tree(node)
