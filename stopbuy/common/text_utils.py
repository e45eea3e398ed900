"""
Text Utilities

Helper functions for text cleanup shared by extraction and presentation.
"""

import re
from typing import Iterable, List


def clean_text(text: str) -> str:
    """
    Collapse runs of whitespace and trim.

    Args:
        text: Raw text content (may be None)

    Returns:
        Cleaned text, empty string for None
    """
    if not text:
        return ""
    return re.sub(r'\s+', ' ', text).strip()


def unique_in_order(values: Iterable[str]) -> List[str]:
    """Return values with duplicates removed, keeping first occurrence order."""
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result
