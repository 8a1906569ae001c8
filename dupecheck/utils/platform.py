"""
Platform-specific file actions for Image Duplicate Checker.

Provides the two actions offered on each duplicate: opening it with the
system's default application and copying its path to the clipboard.
"""

from __future__ import annotations

import os
import platform as platform_module
import shutil
import subprocess
from pathlib import Path


class PlatformActionError(RuntimeError):
    """Raised when an open or clipboard action cannot be carried out."""


def _opener_command(path: str) -> list[str]:
    """Return the command that opens ``path`` with the default application."""
    system = platform_module.system()
    if system == 'Darwin':
        return ['open', path]
    opener = shutil.which('xdg-open')
    if opener is None:
        raise PlatformActionError("No file opener found (install xdg-utils)")
    return [opener, path]


def open_file(path: str | Path) -> None:
    """
    Open a file with the system's default application.

    Args:
        path: Absolute path of the file to open

    Raises:
        FileNotFoundError: If the file no longer exists
        PlatformActionError: If no opener is available or it fails to start
    """
    path = str(path)
    if not os.path.exists(path):
        raise FileNotFoundError(f"File not found: {path}")

    if platform_module.system() == 'Windows':
        try:
            os.startfile(path)  # type: ignore[attr-defined]
        except OSError as e:
            raise PlatformActionError(f"Cannot open {path}: {e}") from e
        return

    try:
        subprocess.Popen(
            _opener_command(path),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as e:
        raise PlatformActionError(f"Cannot open {path}: {e}") from e


def _clipboard_command() -> list[str]:
    """
    Return the command that reads clipboard text from stdin.

    Notes:
        - macOS: pbcopy
        - Windows: clip
        - Linux: wl-copy (Wayland), then xclip or xsel (X11)
    """
    system = platform_module.system()
    if system == 'Darwin':
        return ['pbcopy']
    if system == 'Windows':
        return ['clip']

    candidates = []
    if os.getenv('WAYLAND_DISPLAY'):
        candidates.append(['wl-copy'])
    candidates.extend([
        ['xclip', '-selection', 'clipboard'],
        ['xsel', '--clipboard', '--input'],
    ])
    for command in candidates:
        if shutil.which(command[0]):
            return command
    raise PlatformActionError("No clipboard tool found (install wl-clipboard, xclip or xsel)")


def copy_to_clipboard(text: str) -> None:
    """
    Copy text to the system clipboard.

    Raises:
        PlatformActionError: If no clipboard tool is available or it fails
    """
    command = _clipboard_command()
    try:
        subprocess.run(command, input=text.encode('utf-8'), check=True, timeout=5)
    except (OSError, subprocess.SubprocessError) as e:
        raise PlatformActionError(f"Cannot copy to clipboard: {e}") from e


__all__ = [
    'PlatformActionError',
    'open_file',
    'copy_to_clipboard',
]
