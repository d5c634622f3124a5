# dirsnapshot/snapshot.py

"""
Snapshot assembly and output.

A snapshot is built in memory as an append-only list of text fragments (an
optional ``Directory Tree:`` section followed by the ``File Contents:``
section) and written to disk in a single operation.
"""


from __future__ import annotations

import errno
import os
import stat
import tempfile
from dataclasses import dataclass

from dirsnapshot.content import ENCODING, ERRORS, path_content
from dirsnapshot.errors import (
    InputPathError,
    OutputCreateError,
    OutputWriteError,
    describe,
)
from dirsnapshot.log import get_logger
from dirsnapshot.tree import generate_tree

logger = get_logger("snapshot")

DEFAULT_INPUT = "."
DEFAULT_OUTPUT = "snapshot.txt"

TREE_HEADER = "Directory Tree:\n"
CONTENT_HEADER = "File Contents:\n"


@dataclass(frozen=True)
class SnapshotOptions:
    """Resolved run configuration."""

    input_path: str = DEFAULT_INPUT
    output_path: str = DEFAULT_OUTPUT
    include_tree: bool = False
    atomic: bool = True
    verbose: bool = False


def stat_input(path: str) -> bool:
    """
    Classify the input path once, returning ``True`` for a directory.

    Raises
    ------
    InputPathError
        If the path does not exist or cannot be inspected.
    """

    try:
        st = os.stat(path)
    except OSError as exc:
        raise InputPathError(describe(exc, "stat")) from exc
    return stat.S_ISDIR(st.st_mode)


def build_snapshot(input_path: str, *, include_tree: bool, is_dir: bool) -> str:
    """
    Assemble the full snapshot text for ``input_path``.

    The tree section is only emitted for directories, even when
    ``include_tree`` is set.
    """

    buffer: list[str] = []

    if include_tree and is_dir:
        buffer.append(TREE_HEADER)
        buffer.append(generate_tree(input_path))
        buffer.append("\n\n")

    buffer.append(CONTENT_HEADER)
    buffer.append(path_content(input_path, is_dir=is_dir))
    return "".join(buffer)


def _create_error(output_path: str, exc: OSError) -> OutputCreateError:
    """Report a creation failure against the user's output path."""
    return OutputCreateError(f"open {output_path}: {exc.strerror or exc}")


def _write_in_place(output_path: str, data: bytes) -> None:
    """Truncate (or create) ``output_path`` and write ``data`` to it."""
    try:
        f = open(output_path, "wb")
    except OSError as exc:
        raise _create_error(output_path, exc) from exc
    with f:
        try:
            f.write(data)
        except OSError as exc:
            raise OutputWriteError(f"write {output_path}: {exc.strerror or exc}") from exc


def _write_atomic(output_path: str, data: bytes) -> None:
    """
    Write ``data`` to a temporary sibling of the destination and rename it
    into place.

    Symlinks are resolved first so the link target is the file replaced, and
    an existing destination keeps its permission bits. Errors always name
    ``output_path``, never the temporary file.
    """

    target = os.path.realpath(output_path)
    if os.path.isdir(target):
        raise _create_error(output_path, IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR)))

    try:
        mode = stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        # mkstemp creates the file 0600; new files get the usual umask-based mode.
        umask = os.umask(0)
        os.umask(umask)
        mode = 0o666 & ~umask
    except OSError as exc:
        raise _create_error(output_path, exc) from exc

    try:
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{os.path.basename(target)}.", suffix=".tmp", dir=os.path.dirname(target)
        )
    except OSError as exc:
        raise _create_error(output_path, exc) from exc

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, target)
    except OSError as exc:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        raise OutputWriteError(f"write {output_path}: {exc.strerror or exc}") from exc


def write_snapshot(output_path: str, text: str, *, atomic: bool = True) -> None:
    """
    Write the snapshot text to ``output_path`` in a single operation.

    Parameters
    ----------
    output_path : str
        Destination file. Created if missing, replaced otherwise.
    text : str
        Snapshot text. Encoded as UTF-8 with ``surrogateescape`` so raw file
        bytes are written back unchanged.
    atomic : bool, default=True
        If ``True``, write to a temporary file next to the destination and
        rename it into place, leaving the destination untouched on failure.
        If ``False``, truncate the destination and write to it directly.

    Raises
    ------
    OutputCreateError
        If the output (or temporary) file cannot be created.
    OutputWriteError
        If writing or renaming fails.
    """

    data = text.encode(ENCODING, ERRORS)
    logger.debug("Writing %d bytes to %s (atomic=%s)", len(data), output_path, atomic)
    if atomic:
        _write_atomic(output_path, data)
    else:
        _write_in_place(output_path, data)


def take_snapshot(options: SnapshotOptions) -> str:
    """
    Run the whole pipeline: classify, assemble, write.

    Returns
    -------
    str
        The output path written to.

    Raises
    ------
    SnapshotError
        On the first failure of any step.
    """

    is_dir = stat_input(options.input_path)
    logger.info(
        "Snapshotting %s (%s) into %s",
        options.input_path,
        "directory" if is_dir else "file",
        options.output_path,
    )
    text = build_snapshot(options.input_path, include_tree=options.include_tree, is_dir=is_dir)
    write_snapshot(options.output_path, text, atomic=options.atomic)
    return options.output_path
