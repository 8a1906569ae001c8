"""
Utilities package for Image Duplicate Checker.

Provides:
- validators: Input validation and security checks
- platform: Open-file and copy-to-clipboard actions
"""

from __future__ import annotations

from . import validators
from . import platform

from .validators import (
    validate_path_in_directory,
    validate_directory,
    validate_check_params,
)
from .platform import PlatformActionError, open_file, copy_to_clipboard

__all__ = [
    # Submodules
    'validators',
    'platform',
    # Validators
    'validate_path_in_directory',
    'validate_directory',
    'validate_check_params',
    # Platform
    'PlatformActionError',
    'open_file',
    'copy_to_clipboard',
]
