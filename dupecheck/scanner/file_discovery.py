"""
File discovery module for the scanner package.

Provides the candidate sources a scan draws file paths from:
- DirectoryWalkSource: depth-first walk of one or more root directories
- GlobPatternSource: glob-style include patterns resolved against a base directory

Both yield ``(absolute_path, relative_path)`` pairs, so the index builder does
not need to know which one produced a path.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator

from ..config import IMAGE_EXTENSIONS, EXCLUDED_DIR_NAMES, HIDDEN_PREFIX
from ..models import normalize_path

_logger = logging.getLogger(__name__)

Candidate = tuple[str, str]


def has_image_extension(path: str | Path, extensions: Iterable[str] = IMAGE_EXTENSIONS) -> bool:
    """Check whether a path's extension (case-insensitive) is in ``extensions``."""
    return os.path.splitext(str(path))[1].lower() in extensions


def is_excluded_entry(name: str) -> bool:
    """Check whether a directory entry is skipped by the recursive walk."""
    return name in EXCLUDED_DIR_NAMES or name.startswith(HIDDEN_PREFIX)


class CandidateSource:
    """Where the file paths of a scan come from."""

    def __iter__(self) -> Iterator[Candidate]:
        raise NotImplementedError

    def describe(self) -> str:
        """Short human-readable summary for progress messages."""
        raise NotImplementedError


class DirectoryWalkSource(CandidateSource):
    """
    Recursively enumerate files under one or more root directories.

    Entries named ``node_modules`` or starting with ``.`` are skipped, both
    directories and files. Unreadable directories are logged and skipped.
    Relative paths are computed against the root being walked. When roots
    overlap, each directory is walked once, under the first root that
    reaches it, so every file is yielded at most once.
    """

    def __init__(self, roots: Iterable[str | Path]):
        self.roots = [str(root) for root in roots]

    def describe(self) -> str:
        return ', '.join(self.roots) or '(no roots)'

    def __iter__(self) -> Iterator[Candidate]:
        visited: set[str] = set()
        for root in self.roots:
            if not os.path.isdir(root):
                _logger.debug(f"Search root does not exist, skipping: {root}")
                continue
            yield from self._walk(os.path.abspath(root), visited)

    def _walk(self, root: str, visited: set[str]) -> Iterator[Candidate]:
        # Explicit stack keeps deep trees off the Python call stack
        stack = [root]
        while stack:
            current = stack.pop()
            key = normalize_path(current)
            if key in visited:
                continue
            visited.add(key)
            try:
                with os.scandir(current) as it:
                    entries = sorted(it, key=lambda e: e.name)
            except OSError as e:
                _logger.warning(f"Failed to read directory {current}: {e}")
                continue

            subdirs = []
            for entry in entries:
                if is_excluded_entry(entry.name):
                    continue
                try:
                    if entry.is_dir(follow_symlinks=False):
                        subdirs.append(entry.path)
                    elif entry.is_file():
                        yield entry.path, os.path.relpath(entry.path, root)
                except OSError as e:
                    _logger.warning(f"Failed to inspect {entry.path}: {e}")

            # Reverse so the first subdirectory is walked first (depth-first, sorted)
            stack.extend(reversed(subdirs))


class GlobPatternSource(CandidateSource):
    """
    Resolve glob-style include patterns against a base directory.

    Patterns follow ``pathlib`` semantics, including ``**`` for any depth.
    Paths with an excluded directory component are dropped and each file is
    yielded once even when several patterns match it. A pattern that cannot
    be resolved is logged and skipped.
    """

    def __init__(
        self,
        base_dir: str | Path,
        patterns: Iterable[str],
        exclude: Iterable[str] = EXCLUDED_DIR_NAMES,
    ):
        self.base_dir = Path(base_dir)
        self.patterns = [p for p in patterns if p]
        self.exclude = frozenset(exclude)

    def describe(self) -> str:
        return f"{', '.join(self.patterns)} in {self.base_dir}"

    def _is_excluded(self, relative: Path) -> bool:
        return any(part in self.exclude for part in relative.parts[:-1])

    def __iter__(self) -> Iterator[Candidate]:
        base = self.base_dir.resolve()
        seen: set[str] = set()

        for pattern in self.patterns:
            try:
                matches = sorted(base.glob(pattern))
            except (ValueError, NotImplementedError, OSError) as e:
                _logger.warning(f"Failed to resolve pattern {pattern!r}: {e}")
                continue

            for match in matches:
                relative = match.relative_to(base)
                if self._is_excluded(relative):
                    continue
                try:
                    if not match.is_file():
                        continue
                except OSError as e:
                    _logger.warning(f"Failed to inspect {match}: {e}")
                    continue
                absolute = str(match)
                if absolute in seen:
                    continue
                seen.add(absolute)
                yield absolute, str(relative)


def iter_candidates(
    source: Iterable[Candidate],
    extensions: Iterable[str] = IMAGE_EXTENSIONS,
) -> Iterator[Candidate]:
    """Yield only the candidates whose extension is an image extension."""
    extensions = frozenset(extensions)
    for absolute, relative in source:
        if has_image_extension(absolute, extensions):
            yield absolute, relative


def find_image_files(
    root_path: str | Path,
    extensions: Iterable[str] = IMAGE_EXTENSIONS,
) -> list[str]:
    """
    Find all image files under the given directory.

    Args:
        root_path: Directory path to search for images
        extensions: Image extensions to accept

    Returns:
        List of absolute file paths as strings, in walk order
    """
    source = DirectoryWalkSource([root_path])
    return [absolute for absolute, _ in iter_candidates(source, extensions)]


__all__ = [
    'Candidate',
    'CandidateSource',
    'DirectoryWalkSource',
    'GlobPatternSource',
    'has_image_extension',
    'is_excluded_entry',
    'iter_candidates',
    'find_image_files',
]
