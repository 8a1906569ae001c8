"""
Report formatting and display for the CLI interface.

Provides functions to print a scan outcome and to show scan progress.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Callable, Optional, Any

from ..models import DuplicatesFound
from ..scanner import read_image_details

# Optional: tqdm for a progress counter
HAS_TQDM = False
_tqdm_class: Optional[Any] = None

try:
    from tqdm import tqdm as _tqdm_import
    HAS_TQDM = True
    _tqdm_class = _tqdm_import
except ImportError:
    pass

SCANNED_PREFIX = 'scanned: '


class ProgressDisplay:
    """
    Shows scan progress messages on the terminal.

    Uses a tqdm counter when tqdm is installed, otherwise logs the phase
    messages (per-file messages only at DEBUG level).
    """

    def __init__(self, logger: logging.Logger, enabled: bool = True):
        self.logger = logger
        self.enabled = enabled
        self.scanned = 0
        self._pbar: Optional[Any] = None

    def __call__(self, message: str) -> None:
        is_file = message.startswith(SCANNED_PREFIX)
        if is_file:
            self.scanned += 1

        if self.enabled and HAS_TQDM and _tqdm_class is not None:
            if self._pbar is None:
                self._pbar = _tqdm_class(desc="Scanning images", unit="img", ncols=80, file=sys.stderr)
            if is_file:
                self._pbar.update(1)
            else:
                self._pbar.set_description(message.rstrip('.'))
            return

        if is_file:
            self.logger.debug(message)
        elif self.enabled:
            self.logger.info(message)

    def close(self) -> None:
        if self._pbar is not None:
            self._pbar.close()
            self._pbar = None


def _format_details(path: str) -> str:
    details = read_image_details(path)
    if details.get('resolution'):
        return f"{details['resolution']} | {details['file_size_formatted']} | {details['format']}"
    return details['file_size_formatted']


def print_outcome(outcome, target: str, show_details: bool = True) -> None:
    """
    Print a human-readable report of a scan outcome.

    Args:
        outcome: NoneFound, OnlySelfFound or DuplicatesFound
        target: The target file path
        show_details: Include resolution, size and format for each entry

    Notes:
        - Entries are numbered from 1; --open/--copy use these numbers
        - NoneFound and OnlySelfFound both print a "nothing found" message
    """
    if not isinstance(outcome, DuplicatesFound):
        if outcome.kind == 'only_self_found':
            print("No other duplicate images found.")
        else:
            print("No duplicate images found.")
        return

    print("\n" + "=" * 70)
    print(f"DUPLICATES OF {target}")
    print("=" * 70)

    for number, record in enumerate(outcome.records, 1):
        print(f"\n  [{number}] {record.filename}")
        print(f"      {record.relative_path}")
        if show_details:
            print(f"      {_format_details(record.absolute_path)}")

    print("\n" + "=" * 70)
    print(f"{outcome.count} duplicate{'s' if outcome.count != 1 else ''} found")
    print("=" * 70)


def print_outcome_json(outcome, target: str, write: Callable[[str], Any] = print) -> None:
    """Print the outcome as a JSON document."""
    data = {'target': target}
    data.update(outcome.to_dict())
    write(json.dumps(data, indent=2))


__all__ = [
    'ProgressDisplay',
    'print_outcome',
    'print_outcome_json',
]
