"""Command-line front end for AccioTree.

Usage:
    accio [-d DIR] [-a] [-v] NAME

Exit status:
    0  at least one match was found
    1  the search completed without a match
    2  the search aborted, or the arguments were invalid
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from . import __version__
from .api import search
from .config import ConfigurationError, SearchConfig, SearchMode
from .error_policies import FatalSearchError, SkipPermissionDeniedPolicy

logger = logging.getLogger(__name__)

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_FATAL = 2


def build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the accio command."""
    p = argparse.ArgumentParser(
        prog="accio",
        description="Search a directory tree breadth-first for entries with an exact name.",
    )
    p.add_argument(
        "name",
        help="Entry name to look for (exact, case-sensitive)",
    )
    p.add_argument(
        "-d", "--dir",
        dest="base_dir",
        default=None,
        help="Directory to start from (default: the working directory)",
    )
    p.add_argument(
        "-a", "--all",
        dest="find_all",
        action="store_true",
        help="Report every match instead of stopping at the first one",
    )
    p.add_argument(
        "--no-resolve",
        dest="resolve_root",
        action="store_false",
        help="Search the base directory as given instead of its canonical path",
    )
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Warn about skipped paths and print search statistics",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return p


def config_from_args(args: argparse.Namespace) -> SearchConfig:
    """Translate parsed arguments into a SearchConfig."""
    return SearchConfig(
        root=args.base_dir if args.base_dir is not None else os.getcwd(),
        target=args.name,
        mode=SearchMode.ALL_MATCHES if args.find_all else SearchMode.FIRST_MATCH,
        resolve_root=args.resolve_root,
        verbose=args.verbose,
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _print_path(path) -> None:
    # Paths need not be valid in any encoding; write the raw filesystem bytes
    raw = os.fsencode(path) + b"\n"
    sys.stdout.flush()
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        sys.stdout.write(raw.decode(sys.getfilesystemencoding(), "backslashreplace"))
    else:
        buffer.write(raw)
    sys.stdout.flush()


def main(argv: Optional[List[str]] = None) -> int:
    """Run the accio command.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    config = config_from_args(args)
    policy = SkipPermissionDeniedPolicy(verbose=config.verbose)
    logger.debug("Searching %r for %r (%s)", config.root, config.target, config.mode.value)

    try:
        searcher = search(config, on_match=_print_path, policy=policy)
    except ConfigurationError as e:
        print(f"accio: {e}", file=sys.stderr)
        return EXIT_FATAL
    except FatalSearchError as e:
        print(f"accio: search aborted: {e}", file=sys.stderr)
        return EXIT_FATAL

    if config.verbose:
        print(f"accio: {searcher.stats.summary()}", file=sys.stderr)

    if searcher.stats.matches == 0:
        print(f"File not found: {config.target}", file=sys.stderr)
        return EXIT_NOT_FOUND
    return EXIT_FOUND


if __name__ == "__main__":
    sys.exit(main())
