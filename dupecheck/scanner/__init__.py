"""
Scanner package for Image Duplicate Checker.

Provides file discovery, content hashing and the fingerprint index used to
find files identical to a target.

Public API:
- DirectoryWalkSource / GlobPatternSource: Where candidate files come from
- find_image_files: Discover image files under a directory
- calculate_file_hash: Streaming content fingerprint of a file
- FingerprintIndex: Fingerprint -> files table
- build_fingerprint_index: Hash every candidate into a FingerprintIndex
- read_image_details: Size/resolution/format of an image for display
"""

from __future__ import annotations

from .file_discovery import (
    CandidateSource,
    DirectoryWalkSource,
    GlobPatternSource,
    has_image_extension,
    is_excluded_entry,
    iter_candidates,
    find_image_files,
)
from .hashing import calculate_file_hash, fingerprint_length
from .index import FingerprintIndex
from .parallel import build_fingerprint_index
from .analysis import read_image_details, describe_record


__all__ = [
    # File discovery
    'CandidateSource',
    'DirectoryWalkSource',
    'GlobPatternSource',
    'has_image_extension',
    'is_excluded_entry',
    'iter_candidates',
    'find_image_files',
    # Hashing
    'calculate_file_hash',
    'fingerprint_length',
    # Index
    'FingerprintIndex',
    'build_fingerprint_index',
    # Display details
    'read_image_details',
    'describe_record',
]
