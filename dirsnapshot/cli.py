# dirsnapshot/cli.py

"""
Command-line entry point.

Usage::

    dirsnapshot [-o OUTPUT] [-tree] [-v] [--no-atomic] [PATH]

Exits with status 0 on success and 1 on any snapshot error. Status messages
are printed to stdout; diagnostics go to stderr via logging.
"""


from __future__ import annotations

import argparse
import sys
from typing import Sequence

from dirsnapshot.errors import SnapshotError
from dirsnapshot.log import get_logger, setup_logging
from dirsnapshot.snapshot import (
    DEFAULT_INPUT,
    DEFAULT_OUTPUT,
    SnapshotOptions,
    take_snapshot,
)

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    """Build the parser for ``-o``, ``-tree``, ``-v``, ``--no-atomic`` and the input path."""
    parser = argparse.ArgumentParser(
        prog="dirsnapshot",
        description="Write a single-file text snapshot of a directory or file.",
    )
    parser.add_argument(
        "-o",
        dest="output",
        metavar="PATH",
        default=DEFAULT_OUTPUT,
        help=f"Output file path (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "-tree",
        "--tree",
        dest="tree",
        action="store_true",
        help="Include directory tree in output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress to stderr",
    )
    parser.add_argument(
        "--no-atomic",
        dest="atomic",
        action="store_false",
        help="Truncate and write the output file in place instead of renaming a temp file",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=DEFAULT_INPUT,
        help=f"File or directory to snapshot (default: {DEFAULT_INPUT})",
    )
    return parser


def parse_options(argv: Sequence[str] | None = None) -> SnapshotOptions:
    """
    Parse ``argv`` into a :class:`SnapshotOptions`.

    Usage errors exit with status 2 through ``argparse``.
    """
    args = build_parser().parse_args(argv)
    return SnapshotOptions(
        input_path=args.path,
        output_path=args.output,
        include_tree=args.tree,
        atomic=args.atomic,
        verbose=args.verbose,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the command line and return the process exit status.

    Parameters
    ----------
    argv : Sequence[str] | None, optional
        Arguments without the program name. Defaults to ``sys.argv[1:]``.

    Returns
    -------
    int
        ``0`` on success, ``1`` if any step fails.
    """

    options = parse_options(argv)
    setup_logging("DEBUG" if options.verbose else "WARNING")
    logger.info("Options: %s", options)

    try:
        output = take_snapshot(options)
    except SnapshotError as exc:
        logger.debug("Snapshot failed", exc_info=exc)
        print(exc)
        return 1

    print(f"Snapshot saved to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
