"""Command-line interface for morefiles.

This module provides the command-line interface for morefiles, exposing recursive
copy and deletion and the permission-aware creation functions as subcommands.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution (including failed nodes of a recursive operation)
    2: Command-line syntax error
    126: Permission denied

Example:
    # Copy a tree and report every failure at the end
    $ morefiles copy -k /path/to/src /path/to/dst

    # Display version information
    $ morefiles --version
"""

import argparse
import logging
import sys
from typing import Callable, Dict

from morefiles.cli.argparser import create_parser
from morefiles.copy_option import CopyOption
from morefiles.exceptions import RecursiveOperationError
from morefiles.files import (
    copy_recursive,
    create_directories,
    create_directory,
    create_file,
    delete_recursive,
    set_permissions,
    touch,
)
from morefiles.recursion_mode import RecursionMode


def recursion_mode(args: argparse.Namespace) -> RecursionMode:
    """Map the -k/--keep-going flag to a recursion mode."""
    return RecursionMode.KEEP_GOING if args.keep_going else RecursionMode.FAIL_FAST


def run_copy(args: argparse.Namespace) -> None:
    options = (CopyOption.REPLACE_EXISTING,) if args.replace else ()
    copy_recursive(args.source, args.destination, recursion_mode(args), *options)


def run_delete(args: argparse.Namespace) -> None:
    delete_recursive(args.path, recursion_mode(args))


def run_chmod(args: argparse.Namespace) -> None:
    for path in args.paths:
        set_permissions(path, args.mode)


def run_mkdir(args: argparse.Namespace) -> None:
    if args.parents:
        create_directories(args.path, args.mode)
    else:
        create_directory(args.path, args.mode)


def run_create(args: argparse.Namespace) -> None:
    create_file(args.path, args.mode)


def run_touch(args: argparse.Namespace) -> None:
    for path in args.paths:
        touch(path)


COMMANDS: Dict[str, Callable[[argparse.Namespace], None]] = {
    "copy": run_copy,
    "delete": run_delete,
    "chmod": run_chmod,
    "mkdir": run_mkdir,
    "create": run_create,
    "touch": run_touch,
}


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, every file operation included when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    """Main entry point for the morefiles command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        126: Permission denied
    """
    parser = create_parser()
    # argparse calls sys.exit(2) for argument errors or sys.exit(0) for --version
    args = parser.parse_args()

    configure_logging(args.verbose)

    try:
        COMMANDS[args.command](args)
    except RecursiveOperationError as e:
        # Lists every failed path, one per line
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)
    except PermissionError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(126)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
