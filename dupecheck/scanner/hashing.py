"""
Hashing module for the scanner package.

Provides the streaming content fingerprint used to detect identical files.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

from ..config import HASH_ALGORITHM, HASH_CHUNK_SIZE


def calculate_file_hash(
    filepath: str | Path,
    algorithm: str = HASH_ALGORITHM,
    chunk_size: int = HASH_CHUNK_SIZE,
) -> str:
    """
    Calculate the content fingerprint of a file.

    The file is read in chunks so memory use does not depend on file size.

    Args:
        filepath: Path to the file
        algorithm: hashlib algorithm name (default: md5)
        chunk_size: Bytes read per iteration

    Returns:
        Hex digest of the file contents

    Raises:
        OSError: If the file cannot be opened or a read fails
    """
    hasher = hashlib.new(algorithm)
    with open(filepath, 'rb') as f:
        for chunk in iter(lambda: f.read(chunk_size), b''):
            hasher.update(chunk)
    return hasher.hexdigest()


def fingerprint_length(algorithm: str = HASH_ALGORITHM) -> int:
    """Number of hex characters in a fingerprint produced by ``algorithm``."""
    return hashlib.new(algorithm).digest_size * 2


__all__ = [
    'calculate_file_hash',
    'fingerprint_length',
]
