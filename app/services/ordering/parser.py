"""Parsing of literal ordering commands."""
import re
from typing import Optional, Tuple

from app.core.errors import InvalidUserInput

ITEM_TOKEN_PATTERN = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")
REMOVE_PATTERN = re.compile(r"^remove(?:\s+(.*))?$", re.IGNORECASE)


def normalize(text: Optional[str]) -> str:
    """Trim and lowercase inbound text for command matching."""
    return (text or "").strip().lower()


def parse_item_token(text: str) -> Optional[Tuple[int, int]]:
    """
    Parse an ``<item_no>-<quantity>`` token.

    Returns:
        (item_no, quantity) or None when the text does not match
    """
    match = ITEM_TOKEN_PATTERN.match(text or "")
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def is_remove_command(text: str) -> bool:
    return REMOVE_PATTERN.match(normalize(text)) is not None


def parse_remove_index(text: str) -> int:
    """
    Extract the 1-based index from ``remove <n>``.

    Raises:
        InvalidUserInput: argument missing or not a positive integer
    """
    match = REMOVE_PATTERN.match(normalize(text))
    argument = (match.group(1) or "").strip() if match else ""
    if not argument.isdigit():
        raise InvalidUserInput(f"Expected 'remove <number>', got '{text}'")
    return int(argument)
