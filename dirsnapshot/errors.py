# dirsnapshot/errors.py

"""
Error types raised while taking a snapshot.

Every failure is fatal. Each error class carries the ``prefix`` printed by the
command line before the underlying filesystem message, and keeps the original
``OSError`` as its ``__cause__``.
"""


from __future__ import annotations


class SnapshotError(Exception):
    """Base class for all snapshot failures."""

    prefix = "Error"

    def __str__(self) -> str:
        return f"{self.prefix}: {super().__str__()}"


class InputPathError(SnapshotError):
    prefix = "Error"


class TreeError(SnapshotError):
    prefix = "Error generating tree"


class WalkError(SnapshotError):
    prefix = "Error walking directory"


class ReadError(SnapshotError):
    prefix = "Error reading file"


class OutputCreateError(SnapshotError):
    prefix = "Error creating output file"


class OutputWriteError(SnapshotError):
    prefix = "Error writing to file"


def describe(exc: OSError, op: str | None = None) -> str:
    """
    Format an ``OSError`` as ``"[<op> ]<path>: <reason>"``.

    ``op`` defaults to the ``op`` attribute the walkers in ``tree`` attach to
    the errors they re-raise. Falls back to ``str(exc)`` when the error
    carries no errno message.
    """
    if not exc.strerror:
        return str(exc)
    if op is None:
        op = getattr(exc, "op", None)
    subject = " ".join(str(part) for part in (op, exc.filename) if part is not None)
    return f"{subject}: {exc.strerror}" if subject else exc.strerror
