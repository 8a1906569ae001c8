"""
Exceptions raised by the scan orchestrator.

Only fatal conditions are raised. Problems with individual candidate files,
directories or patterns are logged and skipped by the scanner.
"""

from __future__ import annotations


class ScanError(Exception):
    """Base class for errors that abort a duplicate scan."""

    code = 'scan_error'

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def to_dict(self) -> dict:
        return {'code': self.code, 'message': self.message, 'path': self.path}


class FileNotFound(ScanError):
    """The target file does not exist."""

    code = 'file_not_found'


class NotAnImage(ScanError):
    """The target file's extension is not a configured image extension."""

    code = 'not_an_image'


class NoWorkspace(ScanError):
    """No workspace root was configured to search in."""

    code = 'no_workspace'


class TargetUnreadable(ScanError, OSError):
    """The target file could not be read while computing its fingerprint."""

    code = 'target_unreadable'


__all__ = [
    'ScanError',
    'FileNotFound',
    'NotAnImage',
    'NoWorkspace',
    'TargetUnreadable',
]
