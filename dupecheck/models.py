"""
Data models for Image Duplicate Checker.

Contains dataclasses for scanned file records, the per-invocation scan
configuration, and the three possible scan outcomes.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional
import os

from .config import (
    IMAGE_EXTENSIONS,
    DEFAULT_WORKERS,
    MAX_WORKERS,
    SEARCH_MODES,
    DEFAULT_SEARCH_MODE,
)


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable form."""
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


def normalize_extensions(extensions: Iterable[str]) -> frozenset:
    """Lowercase extensions and make sure each starts with a dot."""
    normalized = set()
    for ext in extensions:
        ext = str(ext).strip().lower()
        if not ext:
            continue
        if not ext.startswith('.'):
            ext = '.' + ext
        normalized.add(ext)
    return frozenset(normalized)


def normalize_path(path) -> str:
    """Return the canonical absolute form of a path used for identity checks."""
    return os.path.normcase(os.path.realpath(os.path.abspath(str(path))))


@dataclass(frozen=True)
class FileRecord:
    """
    One scanned file.

    Attributes:
        absolute_path: Full path to the file; unique within a scan
        relative_path: Path relative to the scan's base directory (display only)
        fingerprint: Hex digest of the file contents
    """
    absolute_path: str
    relative_path: str
    fingerprint: str

    def __hash__(self):
        return hash(self.absolute_path)

    def __eq__(self, other):
        if not isinstance(other, FileRecord):
            return False
        return self.absolute_path == other.absolute_path

    @property
    def filename(self) -> str:
        """Return just the filename portion of the path."""
        return os.path.basename(self.absolute_path)

    @property
    def directory(self) -> str:
        """Return the directory containing this file."""
        return os.path.dirname(self.absolute_path)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'path': self.absolute_path,
            'relative_path': self.relative_path,
            'filename': self.filename,
            'directory': self.directory,
            'fingerprint': self.fingerprint,
        }


@dataclass(frozen=True)
class ScanConfiguration:
    """
    Settings for a single scan, sourced once by the caller.

    Attributes:
        workspace_roots: Absolute workspace directories; the first one is the
            base that search paths are resolved against
        image_extensions: Lowercase extensions (with dot) that qualify a file
        search_paths: Subdirectories or glob patterns, see search_mode
        search_mode: 'roots' or 'patterns'
        workers: Number of files hashed concurrently
    """
    workspace_roots: tuple = ()
    image_extensions: frozenset = IMAGE_EXTENSIONS
    search_paths: tuple = ()
    search_mode: str = DEFAULT_SEARCH_MODE
    workers: int = DEFAULT_WORKERS

    def __post_init__(self):
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, 'workspace_roots', tuple(str(r) for r in self.workspace_roots))
        object.__setattr__(self, 'image_extensions', normalize_extensions(self.image_extensions))
        object.__setattr__(
            self, 'search_paths',
            tuple(p.strip() for p in self.search_paths if p and p.strip()),
        )
        if self.search_mode not in SEARCH_MODES:
            raise ValueError(
                f"Unknown search mode {self.search_mode!r}, expected one of {', '.join(SEARCH_MODES)}"
            )
        object.__setattr__(self, 'workers', max(1, min(int(self.workers), MAX_WORKERS)))

    @property
    def workspace_root(self) -> Optional[str]:
        """The base directory for search paths, or None without a workspace."""
        return self.workspace_roots[0] if self.workspace_roots else None

    def is_image(self, path) -> bool:
        """Check whether a path has one of the configured image extensions."""
        return os.path.splitext(str(path))[1].lower() in self.image_extensions

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'workspace_roots': list(self.workspace_roots),
            'image_extensions': sorted(self.image_extensions),
            'search_paths': list(self.search_paths),
            'search_mode': self.search_mode,
            'workers': self.workers,
        }


@dataclass(frozen=True)
class NoneFound:
    """No scanned file shares the target's fingerprint."""
    kind: str = field(default='none_found', init=False)

    @property
    def duplicates(self) -> list:
        return []

    def to_dict(self) -> dict:
        return {'kind': self.kind, 'duplicates': []}


@dataclass(frozen=True)
class OnlySelfFound:
    """The only file sharing the target's fingerprint is the target itself."""
    kind: str = field(default='only_self_found', init=False)

    @property
    def duplicates(self) -> list:
        return []

    def to_dict(self) -> dict:
        return {'kind': self.kind, 'duplicates': []}


@dataclass(frozen=True)
class DuplicatesFound:
    """
    Other files with the same content as the target.

    Attributes:
        records: FileRecords in scan-discovery order, target excluded
    """
    records: tuple
    kind: str = field(default='duplicates_found', init=False)

    def __post_init__(self):
        object.__setattr__(self, 'records', tuple(self.records))

    @property
    def duplicates(self) -> list:
        return list(self.records)

    @property
    def count(self) -> int:
        return len(self.records)

    def to_dict(self) -> dict:
        return {
            'kind': self.kind,
            'duplicates': [record.to_dict() for record in self.records],
        }
