# dirsnapshot/content.py

"""
File content aggregation.

This module turns a file, or every file under a directory, into content blocks
of the form::

    --- <path> ---
    <raw content>

Contents are embedded exactly as stored on disk. Bytes are decoded as UTF-8
with the ``surrogateescape`` error handler, so any byte sequence (including
invalid UTF-8 and binary data) survives the round trip when the snapshot is
encoded back the same way.
"""


from __future__ import annotations

import os
from pathlib import Path

from anytree import PreOrderIter

from dirsnapshot.errors import ReadError, SnapshotError, WalkError, describe
from dirsnapshot.log import get_logger
from dirsnapshot.tree import build_tree

logger = get_logger("content")

ENCODING = "utf-8"
ERRORS = "surrogateescape"


def format_block(header: str, data: str) -> str:
    """Frame one file's content under its ``--- <path> ---`` header."""
    return f"--- {header} ---\n{data}\n\n"


def file_to_text(path: str | os.PathLike[str]) -> str:
    """
    Read a file and return its content block.

    The header is the path exactly as given; it is neither resolved nor
    normalized.

    Parameters
    ----------
    path : str | os.PathLike
        File to read.

    Returns
    -------
    str
        ``"--- <path> ---\\n<content>\\n\\n"``.

    Raises
    ------
    OSError
        If the file cannot be read (including when ``path`` is a directory).
    """

    header = os.fspath(path)
    logger.debug("Reading %s", header)
    data = Path(path).read_bytes().decode(ENCODING, ERRORS)
    return format_block(header, data)


def read_block(path: str | os.PathLike[str], error: type[SnapshotError] = ReadError) -> str:
    """
    Return the content block of ``path``, wrapping read failures in ``error``.

    Opening a directory succeeds and only the read fails, so that case is
    reported as a ``read`` rather than an ``open`` failure.
    """
    try:
        return file_to_text(path)
    except OSError as exc:
        op = "read" if isinstance(exc, IsADirectoryError) else "open"
        raise error(describe(exc, op)) from exc


def path_content(path: str | os.PathLike[str], *, is_dir: bool) -> str:
    """
    Collect the content blocks of ``path``.

    In directory mode, the directory is walked in the same order as the tree
    renderer and every non-directory entry contributes one block, headed by
    the path as reached by the walk. In file mode, the single file contributes
    one block headed by ``path`` itself.

    Parameters
    ----------
    path : str | os.PathLike
        Input file or directory.
    is_dir : bool
        Whether ``path`` was classified as a directory at start-up. The
        classification is not re-checked here.

    Returns
    -------
    str
        The concatenated blocks, in traversal order.

    Raises
    ------
    WalkError
        In directory mode, if listing a directory or reading any file fails.
    ReadError
        In file mode, if the file cannot be read.
    """

    if not is_dir:
        return read_block(path)

    try:
        root = build_tree(path)
    except OSError as exc:
        raise WalkError(describe(exc)) from exc

    blocks: list[str] = []
    for node in PreOrderIter(root, filter_=lambda n: not n.is_dir):
        blocks.append(read_block(node.fs_path, WalkError))
    logger.debug("Collected %d file(s) under %s", len(blocks), os.fspath(path))
    return "".join(blocks)
