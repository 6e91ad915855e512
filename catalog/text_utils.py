"""
Text Utilities for Browsing and Display

Provides the small text transformations used by the collection views:
- Locale-style ordering of artist names (accent- and case-insensitive)
- Case-insensitive artist search
- Human-readable formatting of export dates
"""

import re
import unicodedata
from datetime import datetime
from typing import Tuple


def fold_accents(text: str) -> str:
    """
    Remove diacritics so accented names sort next to their plain forms.

    Examples:
        "Beyoncé" -> "Beyonce"
        "Sigur Rós" -> "Sigur Ros"
        "Motörhead" -> "Motorhead"

    Args:
        text: Text to fold

    Returns:
        Text decomposed with NFKD and stripped of combining marks
    """
    decomposed = unicodedata.normalize('NFKD', text)
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch))


def artist_sort_key(name: str) -> Tuple[str, str, str]:
    """
    Sort key approximating locale-aware collation of artist names.

    Compares base letters first, then accents, then case with lowercase
    ahead of uppercase.
    """
    return (fold_accents(name).casefold(), name.casefold(), name.swapcase())


def matches_search(name: str, term: str) -> bool:
    """Case-insensitive substring match of `term` within an artist name."""
    return term.lower() in name.lower()


def format_date(value: str) -> str:
    """
    Format an export timestamp as "Month D, YYYY".

    Examples:
        "2025-11-21 19:36:00" -> "November 21, 2025"
        "" -> "Unknown"
        "sometime in 1999" -> "sometime in 1999"

    Args:
        value: Date string from the collection export

    Returns:
        Formatted date, "Unknown" when blank, or the input when unparseable
    """
    if not value:
        return 'Unknown'

    text = value.strip()
    # Trailing "Z" is not accepted by fromisoformat on older interpreters
    text = re.sub(r'Z$', '+00:00', text)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return value

    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def display_or(value: str, fallback: str) -> str:
    """Return `value` unless it is blank, in which case `fallback`."""
    return value if value else fallback
