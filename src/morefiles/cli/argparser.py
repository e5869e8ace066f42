"""Command-line argument parsing for morefiles.

This module defines the command-line interface for morefiles,
handling argument parsing and the validation of permission arguments.
"""

import argparse
import re
from pathlib import Path

from morefiles import __version__
from morefiles.exceptions import InvalidModeInstructionError, InvalidModeValueError, UnsupportedModeInstructionError
from morefiles.posix.modes import resolve_mode
from morefiles.types import ModeType

_OCTAL = re.compile(r"[0-7]+")


def parse_mode_argument(value: str) -> ModeType:
    """Convert a MODE argument to an octal integer or a validated permission string.

    Digits are read as an octal mode, as chmod(1) does. Anything else must be a
    ``rwxr-x---`` string or symbolic instructions.

    Args:
        value: The raw command-line value.

    Returns:
        An integer for an octal mode, otherwise ``value`` unchanged.

    Raises:
        argparse.ArgumentTypeError: If the value is not a valid mode.
    """
    mode: ModeType = int(value, 8) if _OCTAL.fullmatch(value) else value
    try:
        resolve_mode(mode)
    except (InvalidModeValueError, InvalidModeInstructionError, UnsupportedModeInstructionError) as e:
        raise argparse.ArgumentTypeError(str(e))
    return mode


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with morefiles' commands and options.
    """
    description = """
    morefiles: recursive copy and deletion with a choice of failure policy, and
    creation of files and directories with explicit POSIX permissions.

    Permission modes (MODE) can be given as:
    - an octal number (755)
    - a permission string (rwxr-xr-x)
    - symbolic instructions (u+rwx,go-w); for chmod they apply to the current
      permissions, for mkdir and create to an empty set
    """

    epilog = """
    Examples:
      # Copy a tree, stopping at the first error
      morefiles copy project backup

      # Copy a tree past errors and report every failed path at the end
      morefiles copy -k project backup

      # Replace an existing destination
      morefiles copy -r project backup

      # Delete a tree, deleting whatever can be deleted
      morefiles delete -k build

      # Change permissions
      morefiles chmod go-w script.sh
      morefiles chmod 750 bin

      # Create directories, setting permissions on the ones created
      morefiles mkdir -p -m 700 private/keys

      # Create an empty file with permissions
      morefiles create -m rw------- secret.txt

      # Display version information and exit
      morefiles -V
      morefiles --version
    """

    parser = argparse.ArgumentParser(
        prog="morefiles",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Version information
    parser.add_argument(
        "-V", "--version", action="version", version=f"morefiles {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every file operation to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    copy_parser = subparsers.add_parser("copy", help="Copy a file or directory tree.")
    copy_parser.add_argument("source", type=Path, help="File or directory to copy.")
    copy_parser.add_argument("destination", type=Path, help="Path to copy to. It must not exist unless -r is given.")
    copy_parser.add_argument(
        "-k",
        "--keep-going",
        action="store_true",
        help="Continue past failed files and directories, reporting all of them at the end.",
    )
    copy_parser.add_argument(
        "-r",
        "--replace",
        action="store_true",
        help="Remove an existing destination before copying.",
    )

    delete_parser = subparsers.add_parser("delete", help="Delete a file or directory tree.")
    delete_parser.add_argument("path", type=Path, help="File or directory to delete.")
    delete_parser.add_argument(
        "-k",
        "--keep-going",
        action="store_true",
        help="Continue past failed files and directories, reporting all of them at the end.",
    )

    chmod_parser = subparsers.add_parser("chmod", help="Change permissions.")
    chmod_parser.add_argument("mode", type=parse_mode_argument, metavar="MODE", help="Permissions to set.")
    chmod_parser.add_argument("paths", type=Path, nargs="+", metavar="PATH", help="Files or directories to change.")

    mkdir_parser = subparsers.add_parser("mkdir", help="Create a directory with permissions.")
    mkdir_parser.add_argument("path", type=Path, help="Directory to create.")
    mkdir_parser.add_argument(
        "-m",
        "--mode",
        type=parse_mode_argument,
        default=0o755,
        metavar="MODE",
        help="Permissions of the created directories (default: 755).",
    )
    mkdir_parser.add_argument(
        "-p",
        "--parents",
        action="store_true",
        help="Create missing parent directories too; an existing directory is not an error.",
    )

    create_file_parser = subparsers.add_parser("create", help="Create an empty file with permissions.")
    create_file_parser.add_argument("path", type=Path, help="File to create.")
    create_file_parser.add_argument(
        "-m",
        "--mode",
        type=parse_mode_argument,
        default=0o644,
        metavar="MODE",
        help="Permissions of the created file (default: 644).",
    )

    touch_parser = subparsers.add_parser("touch", help="Create files or update their timestamps.")
    touch_parser.add_argument("paths", type=Path, nargs="+", metavar="PATH", help="Files to touch.")

    return parser
