"""
Argument parsing for the CLI interface.

Provides functions to create and configure the argument parser for the
duplicate checker command-line interface.
"""

from __future__ import annotations

import argparse
from pathlib import Path


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be 1 or greater, got {value}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance

    Notes:
        - Settings not given on the command line come from the user config
          file and DUPECHECK_* environment variables
        - --open and --copy take the 1-based number shown in the report
    """
    parser = argparse.ArgumentParser(
        description='Find files with exactly the same content as an image',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s assets/logo.png
      Search the current directory for copies of logo.png

  %(prog)s assets/logo.png -w ~/project -s assets -s docs
      Search only the assets/ and docs/ folders of ~/project

  %(prog)s assets/logo.png --patterns -s "**/*.png" -s "static/**/*.jpg"
      Search the files matched by glob patterns

  %(prog)s assets/logo.png --copy 1
      Copy the absolute path of the first duplicate to the clipboard

  %(prog)s assets/logo.png --json
      Print the outcome as JSON
        """
    )

    parser.add_argument(
        'target',
        type=Path,
        nargs='?',
        default=None,
        help='Image file to find duplicates of'
    )

    # Search options
    parser.add_argument(
        '-w', '--workspace',
        type=Path,
        action='append',
        dest='workspaces',
        help='Workspace root to search (repeatable). Default: current directory'
    )

    parser.add_argument(
        '-s', '--search-path',
        action='append',
        dest='search_paths',
        help='Subdirectory of the workspace to search, or a glob pattern with --patterns (repeatable)'
    )

    parser.add_argument(
        '--patterns',
        action='store_true',
        help='Treat search paths as glob patterns'
    )

    parser.add_argument(
        '-x', '--ext',
        action='append',
        dest='extensions',
        help='Image extension to include, e.g. .png (repeatable). Default: from config'
    )

    parser.add_argument(
        '--workers',
        type=_positive_int,
        default=None,
        help='Number of files hashed in parallel. Default: from config'
    )

    # Action options (mutually exclusive)
    action_group = parser.add_mutually_exclusive_group()
    action_group.add_argument(
        '--open',
        type=_positive_int,
        metavar='N',
        dest='open_index',
        help='Open duplicate number N with the default application'
    )
    action_group.add_argument(
        '--copy',
        type=_positive_int,
        metavar='N',
        dest='copy_index',
        help='Copy the path of duplicate number N to the clipboard'
    )
    action_group.add_argument(
        '-i', '--interactive',
        action='store_true',
        help='Choose a duplicate to open or copy after the scan'
    )

    # Output options
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print the outcome as JSON'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress output (useful for piping output)'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: List of argument strings (default: sys.argv)

    Returns:
        Parsed arguments as Namespace object

    Examples:
        >>> args = parse_arguments(['logo.png', '--copy', '2'])
        >>> args.target
        PosixPath('logo.png')
        >>> args.copy_index
        2
    """
    parser = create_parser()
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
]
