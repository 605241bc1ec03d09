"""Validation of interactive input."""

import re
from collections.abc import Sequence
from typing import Optional, TypeVar

T = TypeVar("T")

_INTEGER = re.compile(r"\s*[+-]?[0-9]+\s*")


def is_valid_choice(choices: Sequence[T], value: str) -> Optional[T]:
    """Resolve a 1-based menu number to one of the listed choices.

    Args:
        choices: Items shown to the user, numbered from 1
        value: Raw user input

    Returns:
        The chosen item, or None if the input is not a number or is out of range

    Example:
        >>> is_valid_choice(["a", "b"], "2")
        'b'
        >>> is_valid_choice(["a", "b"], "3") is None
        True
    """
    if not _INTEGER.fullmatch(value):
        return None

    try:
        index = int(value)
    except ValueError:
        # Longer than the interpreter allows for int conversion
        return None
    if 1 <= index <= len(choices):
        return choices[index - 1]
    return None


def is_valid_name(value: Optional[str]) -> Optional[str]:
    """Return the name unchanged unless it is empty or whitespace only."""
    if value is None or not value.strip():
        return None
    return value
