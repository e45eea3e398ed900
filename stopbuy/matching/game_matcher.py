"""
Game Matcher

Decides whether a storefront title is a game already in the library,
using two ordered strategies (first nonzero score wins):

1. Exact case-insensitive equality of the raw titles   -> 1.0
2. Equality of the normalized titles (see normalizer)  -> 0.9
3. Anything else                                        -> 0.0

Entries scoring at or above the acceptance threshold (0.85) match. There
is deliberately no substring or edit-distance tier: a false "you already
own this" is worse than a missed match.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..common.constants import (
    EXACT_MATCH_CONFIDENCE,
    MATCH_THRESHOLD,
    NORMALIZED_MATCH_CONFIDENCE,
)
from ..models import LibraryEntry, MatchResult
from .normalizer import normalize

logger = logging.getLogger(__name__)


def calculate_confidence(candidate_title: str, library_title: str) -> float:
    """
    Score how certain it is that two titles denote the same game.

    Args:
        candidate_title: Title read from the storefront page
        library_title: Title of a library entry

    Returns:
        1.0, 0.9 or 0.0
    """
    raw_candidate = (candidate_title or "").strip().lower()
    raw_library = (library_title or "").strip().lower()

    if raw_candidate and raw_candidate == raw_library:
        return EXACT_MATCH_CONFIDENCE

    # Titles that normalize to "" are malformed and never match this way
    core_candidate = normalize(candidate_title)
    if core_candidate and core_candidate == normalize(library_title):
        return NORMALIZED_MATCH_CONFIDENCE

    return 0.0


def is_malformed(entry: LibraryEntry) -> bool:
    """Return True if the entry's title normalizes to an empty string."""
    return not normalize(entry.title)


def find_malformed_entries(entries: Iterable[LibraryEntry]) -> List[LibraryEntry]:
    """
    List entries whose title is empty or pure noise.

    These come from bad imports ("", "Deluxe Edition", "(PC)") and can
    only ever match by exact raw title.
    """
    return [entry for entry in entries if is_malformed(entry)]


class GameMatcher:
    """
    Matches storefront titles against a library snapshot.

    Usage:
        matcher = GameMatcher(libraries.all_entries())
        owned = matcher.owned_elsewhere("Hollow Knight", current_platform="epic")
        # Returns: [LibraryEntry(title='Hollow Knight', platform='steam')]
    """

    def __init__(self, entries: Iterable[LibraryEntry]):
        """
        Initialize the matcher.

        Args:
            entries: Library entries to match against. Order is kept in
                results.
        """
        self.entries = list(entries)

    def match_with_confidence(self, candidate_title: str) -> List[MatchResult]:
        """
        Score every entry and keep those at or above the threshold.

        Args:
            candidate_title: Title read from the page

        Returns:
            MatchResult list in library order, each entry at most once
        """
        results: List[MatchResult] = []
        if not candidate_title or not candidate_title.strip():
            return results

        seen = set()
        for entry in self.entries:
            if entry in seen:
                continue
            confidence = calculate_confidence(candidate_title, entry.title)
            if confidence >= MATCH_THRESHOLD:
                seen.add(entry)
                results.append(MatchResult(entry=entry, confidence=confidence))

        logger.debug("Matched %r against %d entries: %d hit(s)",
                     candidate_title, len(self.entries), len(results))
        return results

    def find_matches(self, candidate_title: str) -> List[LibraryEntry]:
        """Return matching entries (no confidence)."""
        return [result.entry for result in self.match_with_confidence(candidate_title)]

    def owned_elsewhere(
        self,
        candidate_title: str,
        current_platform: Optional[str] = None,
    ) -> List[LibraryEntry]:
        """
        Return matches that are not on the storefront being browsed.

        Owning a game on the platform the user is browsing is not worth a
        warning; only ownership on a different platform is.

        Args:
            candidate_title: Title read from the page
            current_platform: Platform identifier of the current storefront

        Returns:
            Matching entries on other platforms
        """
        matches = self.find_matches(candidate_title)
        if not current_platform:
            return matches

        current = current_platform.lower()
        return [entry for entry in matches if entry.platform.lower() != current]

    @property
    def entry_count(self) -> int:
        """Return the number of library entries."""
        return len(self.entries)


def match(candidate_title: str, entries: Iterable[LibraryEntry]) -> List[LibraryEntry]:
    """
    Convenience function: all entries matching a title.

    Args:
        candidate_title: Title read from the page
        entries: Library entries

    Returns:
        Matching entries in insertion order
    """
    return GameMatcher(entries).find_matches(candidate_title)
