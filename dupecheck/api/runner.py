"""
Background check runner for the Image Duplicate Checker GUI.

Runs a duplicate scan on a worker thread and records its progress and result
in the shared CheckState.
"""

from __future__ import annotations

import logging
import threading

from ..errors import ScanError
from ..models import ScanConfiguration
from ..orchestrator import run_scan
from ..state import CheckState

# Module logger
_logger = logging.getLogger(__name__)


class CheckRunner:
    """
    Runs one duplicate check and reports into a CheckState.

    Scan errors end the check with status 'error' and the error's code and
    message; unexpected exceptions are logged with their traceback and
    reported as 'internal_error'.
    """

    def __init__(self, state: CheckState, target: str, config: ScanConfiguration):
        self.state = state
        self.target = target
        self.config = config

    def run(self) -> None:
        """Execute the check (blocking)."""
        try:
            outcome = run_scan(self.target, self.config, progress=self.state.add_message)
        except ScanError as e:
            _logger.info(f"Check failed: {e.message}")
            self.state.fail(e.to_dict())
        except Exception as e:
            _logger.exception(f"Unexpected error while checking {self.target}")
            self.state.fail({'code': 'internal_error', 'message': str(e), 'path': self.target})
        else:
            self.state.complete(outcome)

    def start(self) -> threading.Thread:
        """Execute the check on a daemon thread."""
        thread = threading.Thread(target=self.run, name='dupecheck-check', daemon=True)
        thread.start()
        return thread


__all__ = ['CheckRunner']
