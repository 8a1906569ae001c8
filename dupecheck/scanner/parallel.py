"""
Parallel index building for the scanner package.

Hashes the files produced by a candidate source on a bounded thread pool and
collects the results into a FingerprintIndex.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, Future
from typing import Callable, Iterable, Optional

from ..config import DEFAULT_WORKERS, IMAGE_EXTENSIONS
from ..models import FileRecord
from .file_discovery import Candidate, iter_candidates
from .hashing import calculate_file_hash
from .index import FingerprintIndex

_logger = logging.getLogger(__name__)


def _hash_into(
    index: FingerprintIndex,
    position: int,
    absolute: str,
    relative: str,
    progress: Optional[Callable[[str], None]],
) -> bool:
    """Hash one candidate and add it to the index. Returns False if it was skipped."""
    try:
        fingerprint = calculate_file_hash(absolute)
    except OSError as e:
        _logger.warning(f"Failed to hash {absolute}: {e}")
        return False

    index.add(FileRecord(absolute, relative, fingerprint), position=position)
    if progress:
        progress(f"scanned: {relative}")
    return True


def build_fingerprint_index(
    source: Iterable[Candidate],
    extensions: Iterable[str] = IMAGE_EXTENSIONS,
    progress: Optional[Callable[[str], None]] = None,
    workers: int = DEFAULT_WORKERS,
) -> FingerprintIndex:
    """
    Walk a candidate source and index every image file by fingerprint.

    Args:
        source: Candidate source yielding (absolute_path, relative_path)
        extensions: Image extensions to accept
        progress: Optional callback receiving "scanned: <relative path>" messages
        workers: Number of files hashed concurrently (1 = on the calling thread)

    Returns:
        The populated FingerprintIndex

    Notes:
        - Files that fail to hash are logged and left out
        - At most ``workers * 2`` files are queued or being hashed at a time,
          so the walk never runs far ahead of the hashing
    """
    index = FingerprintIndex()
    candidates = iter_candidates(source, extensions)

    if workers <= 1:
        for position, (absolute, relative) in enumerate(candidates):
            _hash_into(index, position, absolute, relative, progress)
        return index

    slots = threading.BoundedSemaphore(workers * 2)

    def task(position: int, absolute: str, relative: str) -> bool:
        try:
            return _hash_into(index, position, absolute, relative, progress)
        finally:
            slots.release()

    futures: list[Future] = []
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix='dupecheck-hash') as executor:
        for position, (absolute, relative) in enumerate(candidates):
            slots.acquire()
            futures.append(executor.submit(task, position, absolute, relative))

    # Surface unexpected worker errors (hash failures are handled inside the task)
    hashed = sum(1 for future in futures if future.result())
    skipped = len(futures) - hashed
    if skipped:
        _logger.info(f"Skipped {skipped:,} unreadable files")

    return index


__all__ = ['build_fingerprint_index']
