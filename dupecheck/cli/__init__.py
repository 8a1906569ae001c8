"""
CLI package for Image Duplicate Checker.

Provides the command-line interface for checking an image against a
workspace, printing the duplicates found, and opening or copying one of them.

Public API:
- main: Entry point for CLI execution
- CLIOrchestrator: CLI workflow orchestration class
- handle_duplicate: Open or copy one duplicate
- print_outcome: Function to display the scan outcome
"""

from __future__ import annotations

from .orchestrator import CLIOrchestrator, setup_logging
from .arg_parser import create_parser, parse_arguments
from .actions import handle_duplicate
from .reporting import ProgressDisplay, print_outcome, print_outcome_json
from .interactive import prompt_for_target, prompt_for_duplicate, parse_choice


def main(argv=None) -> int:
    """
    Main entry point for the CLI.

    Delegates to CLIOrchestrator to execute the complete workflow.

    Returns:
        Exit code (0 for success, 1 for scan error, 2 for action error)
    """
    orchestrator = CLIOrchestrator(argv)
    return orchestrator.run()


__all__ = [
    # Main entry point
    'main',
    # Core classes
    'CLIOrchestrator',
    'ProgressDisplay',
    # Utilities
    'setup_logging',
    'create_parser',
    'parse_arguments',
    'handle_duplicate',
    'print_outcome',
    'print_outcome_json',
    'prompt_for_target',
    'prompt_for_duplicate',
    'parse_choice',
]
