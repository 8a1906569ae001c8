"""
Interactive prompts for the CLI interface.

Provides functions for user interaction including target selection and
picking a duplicate to open or copy.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


def prompt_for_target() -> Path:
    """
    Interactively prompt user for the image to check.

    Returns:
        Path object for an existing file

    Notes:
        - Loops until an existing file is provided
        - Handles quoted paths (strips quotes)
    """
    print("\n" + "=" * 50)
    print("  IMAGE DUPLICATE CHECKER")
    print("=" * 50)

    while True:
        target_input = input("\nEnter the image file to check: ").strip()
        if not target_input:
            print("Please enter a valid path.")
            continue

        # Handle quotes around path (common when copy-pasting)
        target = Path(target_input.strip('"\''))

        if target.is_file():
            return target
        print(f"File not found: {target}")
        print("Please try again.")


def parse_choice(choice: str, count: int) -> Optional[tuple[str, int]]:
    """
    Parse a selection typed at the duplicate prompt.

    Args:
        choice: User input, e.g. '2' (open), 'c2' (copy) or 'q'
        count: Number of entries in the list

    Returns:
        ('open' | 'copy', zero-based index), ('quit', -1), or None if invalid

    Examples:
        >>> parse_choice('2', 3)
        ('open', 1)
        >>> parse_choice('c1', 3)
        ('copy', 0)
        >>> parse_choice('9', 3) is None
        True
    """
    choice = choice.strip().lower()
    if choice in ('q', 'quit', ''):
        return ('quit', -1)

    action = 'open'
    if choice.startswith('c'):
        action = 'copy'
        choice = choice[1:].strip()

    if not choice.isdigit():
        return None
    number = int(choice)
    if not 1 <= number <= count:
        return None
    return (action, number - 1)


def prompt_for_duplicate(count: int) -> tuple[str, int]:
    """
    Ask the user which duplicate to act on.

    Returns:
        ('open' | 'copy', zero-based index) or ('quit', -1)
    """
    while True:
        choice = input(
            f"\nEnter 1-{count} to open, c<number> to copy its path, or q to quit: "
        )
        parsed = parse_choice(choice, count)
        if parsed is not None:
            return parsed
        print("Invalid choice.")


__all__ = [
    'prompt_for_target',
    'parse_choice',
    'prompt_for_duplicate',
]
