"""
Data models for library matching and page watching.

This module contains pure data classes with no business logic.
"""

from .library import Libraries, LibraryEntry, MatchResult
from .page import (
    CartItemReport,
    CheckIssue,
    CheckReport,
    PageContext,
    PageType,
    WatcherState,
)

__all__ = [
    'LibraryEntry',
    'Libraries',
    'MatchResult',
    'PageType',
    'WatcherState',
    'CheckIssue',
    'PageContext',
    'CartItemReport',
    'CheckReport',
]
