"""
Input validation and security checks for Image Duplicate Checker.

Provides validators used by the web API before it scans, previews or acts on
a user-supplied path. Validators return ``(is_valid, error_message)`` tuples
so routes can turn a failure straight into a 400 response.
"""

from __future__ import annotations

import os

from ..config import SEARCH_MODES


def validate_path_in_directory(filepath: str, base_directory: str) -> bool:
    """
    Check that a path resolves to a location inside base_directory.

    Symlinks and ``..`` segments are resolved first, so a link pointing out
    of the workspace is rejected.

    Examples:
        >>> validate_path_in_directory('/home/user/project/img.png', '/home/user/project')
        True
        >>> validate_path_in_directory('/home/user/project/../secret.png', '/home/user/project')
        False
    """
    try:
        resolved = os.path.realpath(filepath)
        base = os.path.realpath(base_directory)
        return os.path.commonpath([resolved, base]) == base
    except (OSError, ValueError):
        # ValueError: paths on different drives, or mixed absolute/relative
        return False


def validate_directory(directory: str) -> tuple[bool, str]:
    """Check that ``directory`` is an absolute path to a readable directory."""
    if not directory:
        return False, "Workspace directory is required"
    if not os.path.isabs(directory):
        return False, "Workspace must be an absolute path"
    if not os.path.isdir(directory):
        return False, f"Workspace is not a directory: {directory}"
    if not os.access(directory, os.R_OK | os.X_OK):
        return False, f"Cannot read workspace (permission denied): {directory}"
    return True, ""


def validate_check_params(
    path: str,
    workspace: str,
    search_paths=None,
    search_mode=None,
) -> tuple[bool, str]:
    """
    Validate the body of a /api/check request.

    Args:
        path: Target file path
        workspace: Workspace root directory
        search_paths: Optional list of subdirectories or glob patterns
        search_mode: Optional 'roots' or 'patterns'

    Notes:
        Whether the target exists and is an image is left to the scan, which
        reports those as scan errors through the status endpoint.
    """
    if not path:
        return False, "Target path is required"

    if not os.path.isabs(path):
        return False, "Target path must be absolute"

    is_valid, error = validate_directory(workspace)
    if not is_valid:
        return False, error

    if search_paths is not None:
        if not isinstance(search_paths, list) or not all(isinstance(p, str) for p in search_paths):
            return False, "searchPaths must be a list of strings"

    if search_mode is not None and search_mode not in SEARCH_MODES:
        return False, f"searchMode must be one of: {', '.join(SEARCH_MODES)}"

    return True, ""


__all__ = [
    'validate_path_in_directory',
    'validate_directory',
    'validate_check_params',
]
