"""
Image Duplicate Checker
=======================
Find every file in a workspace with exactly the same content as an image.

Features:
- Exact content matching by streaming MD5 fingerprint
- Recursive folder search or glob include patterns
- Skips node_modules and hidden folders
- Parallel hashing with fire-and-forget progress messages
- CLI with open / copy-path actions
- Local web API for editor and browser front ends
"""

__version__ = "1.0.0"

from .models import FileRecord, ScanConfiguration, NoneFound, OnlySelfFound, DuplicatesFound
from .config import IMAGE_EXTENSIONS
from .errors import ScanError, FileNotFound, NotAnImage, NoWorkspace, TargetUnreadable
from .scanner import (
    DirectoryWalkSource,
    GlobPatternSource,
    FingerprintIndex,
    build_fingerprint_index,
    calculate_file_hash,
    find_image_files,
)
from .orchestrator import ScanOrchestrator, build_candidate_source, run_scan
from .progress import ProgressReporter

__all__ = [
    "FileRecord",
    "ScanConfiguration",
    "NoneFound",
    "OnlySelfFound",
    "DuplicatesFound",
    "IMAGE_EXTENSIONS",
    "ScanError",
    "FileNotFound",
    "NotAnImage",
    "NoWorkspace",
    "TargetUnreadable",
    "DirectoryWalkSource",
    "GlobPatternSource",
    "FingerprintIndex",
    "build_fingerprint_index",
    "calculate_file_hash",
    "find_image_files",
    "ScanOrchestrator",
    "build_candidate_source",
    "run_scan",
    "ProgressReporter",
]
