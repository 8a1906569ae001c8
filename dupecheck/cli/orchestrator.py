"""
CLI workflow orchestration for Image Duplicate Checker.

Provides the CLIOrchestrator class that coordinates the CLI workflow from
argument parsing through the scan, the report and an optional action.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..errors import ScanError
from ..orchestrator import run_scan
from ..models import DuplicatesFound
from ..user_config import get_user_config
from .arg_parser import parse_arguments
from .interactive import prompt_for_target, prompt_for_duplicate
from .reporting import ProgressDisplay, print_outcome, print_outcome_json
from .actions import handle_duplicate

EXIT_OK = 0
EXIT_SCAN_ERROR = 1
EXIT_ACTION_ERROR = 2


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Orchestrates the CLI duplicate check.

    Manages the lifecycle from argument parsing through the scan, reporting
    and the open/copy action.
    """

    def __init__(self, argv=None):
        """
        Initialize the orchestrator.

        Args:
            argv: Argument list (default: sys.argv)
        """
        self.argv = argv
        self.logger = None
        self.args = None
        self.config = None
        self.outcome = None

    def run(self) -> int:
        """
        Execute the complete CLI workflow.

        Returns:
            Exit code: 0 on success (including "nothing found"),
            1 on a scan error, 2 if the requested action failed

        Workflow phases:
        1. Setup & argument parsing
        2. Interactive target prompt (if needed)
        3. Configuration
        4. Scan
        5. Reporting
        6. Action
        """
        # Phase 1: Setup
        self._setup_phase()

        # Phase 2: Interactive prompt
        self._interactive_phase()

        # Phase 3: Configuration
        self._configure_phase()

        # Phase 4: Scan
        exit_code = self._scan_phase()
        if exit_code != EXIT_OK:
            return exit_code

        # Phase 5: Reporting
        self._report_phase()

        # Phase 6: Action
        return self._action_phase()

    def _setup_phase(self) -> None:
        """Phase 1: Parse arguments and setup logging."""
        self.args = parse_arguments(self.argv)
        self.logger = setup_logging(self.args.verbose)

    def _interactive_phase(self) -> None:
        """Phase 2: Ask for the target if none was given."""
        if self.args.target is None:
            self.args.target = prompt_for_target()

    def _configure_phase(self) -> None:
        """Phase 3: Combine command line flags with the stored user config."""
        workspaces = self.args.workspaces or [Path(os.getcwd())]
        self.config = get_user_config().to_scan_configuration(
            workspace_roots=workspaces,
            image_extensions=self.args.extensions,
            search_paths=self.args.search_paths,
            search_mode='patterns' if self.args.patterns else None,
            workers=self.args.workers,
        )
        self.logger.debug(f"Scan configuration: {self.config.to_dict()}")

    def _scan_phase(self) -> int:
        """
        Phase 4: Run the duplicate scan.

        Returns:
            0 for success, 1 for a fatal scan error
        """
        display = ProgressDisplay(
            self.logger,
            enabled=not (self.args.no_progress or self.args.json),
        )
        try:
            self.outcome = run_scan(self.args.target, self.config, progress=display)
        except ScanError as e:
            self.logger.error(e.message)
            return EXIT_SCAN_ERROR
        finally:
            display.close()

        self.logger.info(f"Scanned {display.scanned:,} images")
        return EXIT_OK

    def _report_phase(self) -> None:
        """Phase 5: Print the outcome."""
        target = os.path.abspath(str(self.args.target))
        if self.args.json:
            print_outcome_json(self.outcome, target)
        else:
            print_outcome(self.outcome, target)

    def _action_phase(self) -> int:
        """
        Phase 6: Open or copy a duplicate if requested.

        Returns:
            0 for success or no action, 2 if the action failed
        """
        if not isinstance(self.outcome, DuplicatesFound):
            return EXIT_OK

        records = self.outcome.records

        if self.args.interactive:
            action, index = prompt_for_duplicate(len(records))
            if action == 'quit':
                return EXIT_OK
        elif self.args.open_index is not None:
            action, index = 'open', self.args.open_index - 1
        elif self.args.copy_index is not None:
            action, index = 'copy', self.args.copy_index - 1
        else:
            return EXIT_OK

        if index >= len(records):
            self.logger.error(f"No duplicate number {index + 1} (found {len(records)})")
            return EXIT_ACTION_ERROR

        if not handle_duplicate(records[index], action, logger=self.logger):
            return EXIT_ACTION_ERROR
        return EXIT_OK


__all__ = ['CLIOrchestrator', 'setup_logging']
