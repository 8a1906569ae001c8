"""
Fingerprint index for the scanner package.

Groups scanned files by content fingerprint so all files with the same
content can be looked up at once.
"""

from __future__ import annotations

import bisect
import threading
from collections import defaultdict
from typing import Iterator, Optional

from ..models import FileRecord


class FingerprintIndex:
    """
    Mapping from fingerprint to the FileRecords sharing it.

    Records within a bucket are kept in discovery order. When records are
    added by several worker threads, each caller passes the position at which
    the file was discovered so completion order does not matter.
    """

    def __init__(self):
        # fingerprint -> sorted list of (position, insertion number, record)
        self._buckets: dict[str, list[tuple[int, int, FileRecord]]] = defaultdict(list)
        self._lock = threading.Lock()
        self._count = 0

    def add(self, record: FileRecord, position: Optional[int] = None) -> None:
        """
        Add a record to the bucket for its fingerprint.

        Args:
            record: The scanned file
            position: Discovery position; defaults to insertion order
        """
        with self._lock:
            if position is None:
                position = self._count
            bisect.insort(self._buckets[record.fingerprint], (position, self._count, record))
            self._count += 1

    def lookup(self, fingerprint: str) -> list[FileRecord]:
        """Return all records with the given fingerprint (empty list if none)."""
        with self._lock:
            return [entry[2] for entry in self._buckets.get(fingerprint, ())]

    def buckets(self) -> dict[str, list[FileRecord]]:
        """Return a snapshot of every bucket."""
        with self._lock:
            return {
                fingerprint: [entry[2] for entry in entries]
                for fingerprint, entries in self._buckets.items()
            }

    @property
    def fingerprint_count(self) -> int:
        """Number of distinct fingerprints."""
        with self._lock:
            return len(self._buckets)

    def __len__(self) -> int:
        with self._lock:
            return self._count

    def __contains__(self, fingerprint: str) -> bool:
        with self._lock:
            return fingerprint in self._buckets

    def __iter__(self) -> Iterator[FileRecord]:
        for records in self.buckets().values():
            yield from records


__all__ = ['FingerprintIndex']
