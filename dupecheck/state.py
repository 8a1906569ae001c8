"""
State management for the Image Duplicate Checker GUI.

Holds the status, progress messages and outcome of the current check so the
web interface can poll them. State lives in memory only; every check starts
from scratch.
"""

import threading
from collections import deque
from datetime import datetime
from typing import Optional

from .models import DuplicatesFound, FileRecord

# Progress messages kept for the status endpoint
MAX_MESSAGES = 200


class CheckState:
    """
    Manages the state of the current duplicate check.

    Written by the background scan thread and read by request handlers, so
    every access goes through a lock.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.reset()

    def reset(self):
        """Reset state to initial values."""
        with self._lock:
            self.status = 'idle'  # idle, running, complete, error
            self.target = ''
            self.workspace = ''
            self.message = ''
            self.messages: deque = deque(maxlen=MAX_MESSAGES)
            self.scanned = 0
            self.outcome = None
            self.error: Optional[dict] = None
            self.started_at: Optional[str] = None
            self.finished_at: Optional[str] = None

    def try_start(self, target: str, workspace: str) -> bool:
        """Move to 'running' unless a check is already running."""
        with self._lock:
            if self.status == 'running':
                return False
            self.status = 'running'
            self.target = target
            self.workspace = workspace
            self.message = 'Starting...'
            self.messages = deque(maxlen=MAX_MESSAGES)
            self.scanned = 0
            self.outcome = None
            self.error = None
            self.started_at = datetime.now().isoformat()
            self.finished_at = None
            return True

    def add_message(self, message: str):
        """Record a progress message from the scan."""
        with self._lock:
            self.message = message
            self.messages.append(message)
            if message.startswith('scanned: '):
                self.scanned += 1

    def complete(self, outcome):
        with self._lock:
            self.status = 'complete'
            self.outcome = outcome
            self.message = 'Done'
            self.finished_at = datetime.now().isoformat()

    def fail(self, error: dict):
        with self._lock:
            self.status = 'error'
            self.error = error
            self.message = error.get('message', 'Error')
            self.finished_at = datetime.now().isoformat()

    def find_duplicate(self, path: str) -> Optional[FileRecord]:
        """Return the duplicate with this absolute path from the last outcome."""
        with self._lock:
            if not isinstance(self.outcome, DuplicatesFound):
                return None
            for record in self.outcome.records:
                if record.absolute_path == path:
                    return record
            return None

    def to_status_dict(self, describe=None) -> dict:
        """
        Snapshot for the status endpoint.

        Args:
            describe: Optional callable turning a FileRecord into a dict
                (defaults to FileRecord.to_dict)
        """
        with self._lock:
            data = {
                'status': self.status,
                'target': self.target,
                'workspace': self.workspace,
                'message': self.message,
                'messages': list(self.messages),
                'scanned': self.scanned,
                'started_at': self.started_at,
                'finished_at': self.finished_at,
                'outcome': None,
                'error': self.error,
            }
            outcome = self.outcome

        if outcome is not None:
            outcome_dict = outcome.to_dict()
            if describe is not None and isinstance(outcome, DuplicatesFound):
                outcome_dict['duplicates'] = [describe(r) for r in outcome.records]
            data['outcome'] = outcome_dict
        return data


# Global state instance
check_state = CheckState()
