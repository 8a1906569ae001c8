"""
Scan orchestration for Image Duplicate Checker.

Provides the ScanOrchestrator class that finds every file with the same
content as a target file, in four phases:

1. Validate the target and configuration
2. Hash the target
3. Build the fingerprint index over the search roots or patterns
4. Resolve the outcome (NoneFound, OnlySelfFound or DuplicatesFound)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional, Union

from .errors import FileNotFound, NotAnImage, NoWorkspace, TargetUnreadable
from .models import (
    ScanConfiguration,
    NoneFound,
    OnlySelfFound,
    DuplicatesFound,
    normalize_path,
)
from .progress import ProgressReporter
from .scanner import (
    CandidateSource,
    DirectoryWalkSource,
    GlobPatternSource,
    FingerprintIndex,
    build_fingerprint_index,
    calculate_file_hash,
)

# Module logger
_logger = logging.getLogger(__name__)

Outcome = Union[NoneFound, OnlySelfFound, DuplicatesFound]


def build_candidate_source(config: ScanConfiguration) -> CandidateSource:
    """
    Choose the candidate source for a configuration.

    - 'patterns' mode with patterns: glob patterns against the workspace root
    - 'roots' mode with search paths: those subdirectories of the workspace root
    - otherwise: every workspace root, walked recursively

    Raises:
        NoWorkspace: If no workspace root is configured
    """
    base = config.workspace_root
    if base is None:
        raise NoWorkspace("No workspace is open")

    if config.search_paths and config.search_mode == 'patterns':
        return GlobPatternSource(base, config.search_paths)

    if config.search_paths:
        return DirectoryWalkSource(os.path.join(base, p) for p in config.search_paths)

    return DirectoryWalkSource(config.workspace_roots)


class ScanOrchestrator:
    """
    Orchestrates one duplicate scan for a target file.

    Each phase reports a progress message before starting its work. Fatal
    problems raise a ScanError subclass; everything else ends in exactly one
    outcome.
    """

    def __init__(
        self,
        config: ScanConfiguration,
        progress: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            config: Settings for this scan
            progress: Optional callback receiving human-readable messages
        """
        self.config = config
        self.progress = progress
        self.target: Optional[str] = None
        self.fingerprint: Optional[str] = None
        self.index: Optional[FingerprintIndex] = None
        self.outcome: Optional[Outcome] = None

    def _report(self, message: str) -> None:
        if self.progress:
            self.progress(message)

    def run(self, target: Union[str, Path]) -> Outcome:
        """
        Execute the scan.

        Args:
            target: Path of the file to find duplicates of

        Returns:
            NoneFound, OnlySelfFound or DuplicatesFound

        Raises:
            FileNotFound: Target does not exist
            NotAnImage: Target extension is not an image extension
            NoWorkspace: No workspace root configured
            TargetUnreadable: Target could not be read
        """
        self.target = os.path.abspath(str(target))

        source = self._validate_phase()
        self._hash_phase()
        self._index_phase(source)
        return self._resolve_phase()

    def _validate_phase(self) -> CandidateSource:
        """Phase 1: Check the target and configuration before touching the tree."""
        self._report(f"Checking {os.path.basename(self.target)}...")

        if not os.path.isfile(self.target):
            raise FileNotFound(f"File not found: {self.target}", path=self.target)

        if not self.config.is_image(self.target):
            raise NotAnImage(
                f"Not an image file: {self.target} "
                f"(expected one of {', '.join(sorted(self.config.image_extensions))})",
                path=self.target,
            )

        return build_candidate_source(self.config)

    def _hash_phase(self) -> None:
        """Phase 2: Fingerprint the target; failure is fatal."""
        self._report("Calculating image hash...")
        try:
            self.fingerprint = calculate_file_hash(self.target)
        except OSError as e:
            raise TargetUnreadable(f"Cannot read {self.target}: {e}", path=self.target) from e
        _logger.debug(f"Target fingerprint {self.fingerprint} for {self.target}")

    def _index_phase(self, source: CandidateSource) -> None:
        """Phase 3: Hash every candidate into a fresh index."""
        self._report("Scanning image files...")
        _logger.info(f"Scanning {source.describe()}")
        self.index = build_fingerprint_index(
            source,
            extensions=self.config.image_extensions,
            progress=self.progress,
            workers=self.config.workers,
        )
        _logger.info(
            f"Indexed {len(self.index):,} images "
            f"({self.index.fingerprint_count:,} distinct)"
        )

    def _resolve_phase(self) -> Outcome:
        """Phase 4: Look up the target's fingerprint and classify the result."""
        self._report("Looking for duplicates...")
        matches = self.index.lookup(self.fingerprint)

        target_key = normalize_path(self.target)
        others = [r for r in matches if normalize_path(r.absolute_path) != target_key]

        if not matches:
            self.outcome = NoneFound()
        elif not others:
            self.outcome = OnlySelfFound()
        else:
            self.outcome = DuplicatesFound(others)

        _logger.info(f"Scan finished: {self.outcome.kind} ({len(others)} duplicates)")
        return self.outcome


def run_scan(
    target: Union[str, Path],
    config: ScanConfiguration,
    progress: Optional[Callable[[str], None]] = None,
) -> Outcome:
    """
    Find every file with the same content as ``target``.

    Progress messages are relayed to ``progress`` on a background thread, so
    a slow callback never slows down the scan.
    """
    with ProgressReporter(progress) as reporter:
        return ScanOrchestrator(config, progress=reporter.report).run(target)


__all__ = ['ScanOrchestrator', 'build_candidate_source', 'run_scan', 'Outcome']
