"""
Duplicate actions for the CLI interface.

Provides the "open file" and "copy path" actions offered on each duplicate.
The copy action copies the absolute path.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..models import FileRecord
from ..utils.platform import PlatformActionError, open_file, copy_to_clipboard

ACTIONS = ('open', 'copy')


def handle_duplicate(
    record: FileRecord,
    action: str,
    logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Perform an action on one duplicate.

    Args:
        record: The duplicate to act on
        action: 'open' or 'copy'
        logger: Optional logger instance

    Returns:
        True on success, False if the action failed (the reason is logged)
    """
    if action not in ACTIONS:
        raise ValueError(f"Unknown action {action!r}, expected one of {', '.join(ACTIONS)}")

    try:
        if action == 'open':
            open_file(record.absolute_path)
            if logger:
                logger.info(f"Opened: {record.absolute_path}")
        else:
            copy_to_clipboard(record.absolute_path)
            if logger:
                logger.info(f"Copied path: {record.absolute_path}")
    except FileNotFoundError:
        if logger:
            logger.error(f"File no longer exists: {record.absolute_path}")
        return False
    except PlatformActionError as e:
        if logger:
            logger.error(str(e))
        return False

    return True


__all__ = ['ACTIONS', 'handle_duplicate']
